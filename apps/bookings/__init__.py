"""Bookings app package.

Owns the booking lifecycle: deposit-backed claims, completion on rent
payment, cancellation and the expiry of unpaid bookings.
"""
