"""
Booking Domain Entities

- BookingStatus: FSM states for the booking lifecycle
- ALLOWED_TRANSITIONS: the transition table every state change is checked against
"""

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.exceptions import InvalidStateError


class BookingStatus(models.TextChoices):
    """
    Booking Status Finite State Machine

    State transitions:
    - PENDING -> ACTIVE | CANCELLED | EXPIRED
    - ACTIVE -> COMPLETED (rent paid, lease follows)
    - ACTIVE -> EXPIRED (payment deadline passed without rent)
    - ACTIVE -> CANCELLED
    """
    PENDING = 'PENDING', _('Pending')
    ACTIVE = 'ACTIVE', _('Active')
    COMPLETED = 'COMPLETED', _('Completed')
    EXPIRED = 'EXPIRED', _('Expired')
    CANCELLED = 'CANCELLED', _('Cancelled')


# States holding a claim on the property
OPEN_STATES = frozenset({BookingStatus.PENDING, BookingStatus.ACTIVE})

TERMINAL_STATES = frozenset({
    BookingStatus.COMPLETED,
    BookingStatus.EXPIRED,
    BookingStatus.CANCELLED,
})

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({
        BookingStatus.ACTIVE,
        BookingStatus.CANCELLED,
        BookingStatus.EXPIRED,
    }),
    BookingStatus.ACTIVE: frozenset({
        BookingStatus.COMPLETED,
        BookingStatus.EXPIRED,
        BookingStatus.CANCELLED,
    }),
}


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """
    Check a transition against the table

    Raises:
        InvalidStateError: If the booking cannot move from current to target
    """
    if not can_transition(current, target):
        raise InvalidStateError(f"Cannot move booking from {current} to {target}")
