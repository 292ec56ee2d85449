"""Audit app package: one immutable record per booking/lease domain event."""
