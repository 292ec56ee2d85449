"""Leases app package.

A lease is created once per completed booking by the activation engine.
"""
