"""Properties app package.

Holds the rentable property record the booking core reads and the
availability ledger that decides which tenant currently holds a property.
"""
