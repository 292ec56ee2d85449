"""
Message Bus

Routes booking, lease and payment commands to their single handler and fans
domain events out to every subscriber (notifications, audit).

Commands are the write path: a handler's exception reaches the caller, which
is how the payment processor learns a transition was rejected. Events are
side effects published after commit; a failing subscriber is logged and the
remaining subscribers still run.
"""

from typing import Any, Callable, Dict, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]
CommandHandler = Callable[[Any], Any]


class MessageBus:
    """In-process dispatcher for commands (1:1) and events (1:N)"""

    def __init__(self):
        self._subscribers: Dict[Type[DomainEvent], List[EventHandler]] = {}
        self._command_handlers: Dict[Type, CommandHandler] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        """
        Subscribe ``handler`` to ``event_type``

        Subscribing the same handler twice is a no-op: ``AppConfig.ready``
        can run more than once under test runners.
        """
        subscribers = self._subscribers.setdefault(event_type, [])
        if handler not in subscribers:
            subscribers.append(handler)
            logger.debug(f"{_name(handler)} subscribed to {event_type.__name__}")

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        """Raises ValueError if ``command_type`` already has a handler"""
        if command_type in self._command_handlers:
            raise ValueError(f"{command_type.__name__} already has a handler")
        self._command_handlers[command_type] = handler
        logger.debug(f"{_name(handler)} handles {command_type.__name__}")

    def has_command_handler(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def handle_command(self, command: Any) -> Any:
        """
        Run the handler registered for ``type(command)`` and return its result

        Raises:
            ValueError: If nothing handles this command type
        """
        command_name = type(command).__name__
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise ValueError(f"No handler registered for command {command_name}")

        logger.info(f"Dispatching {command_name}")
        try:
            return handler(command)
        except Exception as exc:
            logger.info(f"{command_name} rejected: {exc}")
            raise

    def publish_events(self, events: List[DomainEvent]):
        """Deliver each event to all of its subscribers"""
        for event in events:
            event_name = type(event).__name__
            subscribers = self._subscribers.get(type(event), [])
            if not subscribers:
                logger.warning(f"{event_name} {event.event_id} has no subscribers")
                continue

            logger.info(f"Publishing {event_name} {event.event_id} to {len(subscribers)} subscriber(s)")
            for handler in subscribers:
                try:
                    handler(event)
                except Exception as exc:
                    logger.error(
                        f"Subscriber {_name(handler)} failed on {event_name} {event.event_id}: {exc}",
                        exc_info=True,
                    )


def _name(handler) -> str:
    return getattr(handler, '__qualname__', repr(handler))


# Process-wide bus; apps register their handlers in AppConfig.ready()
message_bus = MessageBus()
