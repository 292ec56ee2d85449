"""
Shared kernel for the booking, lease and payment contexts: domain event and
value object bases, the unit of work, the message bus and the error taxonomy.
"""
