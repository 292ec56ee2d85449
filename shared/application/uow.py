"""
Unit of Work

One database transaction per use case. Domain events recorded while the
transaction is open are handed to the message bus only once the outermost
transaction commits, so notifications and audit records never describe a
booking or lease that was rolled back.
"""

from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class DjangoUnitOfWork:
    """
    ``transaction.atomic()`` plus an outbox of domain events

    Nested inside another atomic block the unit of work is a savepoint.
    Django discards ``on_commit`` callbacks registered inside a savepoint
    that rolls back, so an inner failure drops only the inner events.

    Usage:
        with DjangoUnitOfWork() as uow:
            transition_booking(booking, BookingStatus.EXPIRED, ...)
            uow.add_event(BookingExpired(...))
    """

    def __init__(self):
        self._events: List[DomainEvent] = []
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic()
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._schedule_publish()
            elif self._events:
                logger.warning(
                    f"Unit of work rolled back ({exc_type.__name__}), "
                    f"dropping {len(self._events)} event(s)"
                )
        finally:
            self._events = []
            self._atomic.__exit__(exc_type, exc_val, exc_tb)

    def add_event(self, event: DomainEvent):
        self._events.append(event)

    def _schedule_publish(self):
        if not self._events:
            return
        events = list(self._events)
        logger.debug(f"Queueing {len(events)} event(s) for publication on commit")
        transaction.on_commit(lambda: self._publish_events(events))

    def _publish_events(self, events: List[DomainEvent]):
        from shared.application.message_bus import message_bus

        try:
            message_bus.publish_events(events)
        except Exception as exc:
            # The transaction is already committed; only delivery failed.
            logger.error(f"Publishing {len(events)} event(s) failed: {exc}", exc_info=True)
