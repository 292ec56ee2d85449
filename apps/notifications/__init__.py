"""Notifications app package.

Fire-and-forget delivery of booking and lease notices by email, SMS and
in-app messages. Delivery failures are logged and never reach the caller.
"""
