"""Finances app package.

Receives payment gateway callbacks, records each one exactly once and
drives the booking and lease transitions they confirm.
"""
