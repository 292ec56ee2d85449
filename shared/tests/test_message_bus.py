"""Tests for the message bus and the unit of work."""

from dataclasses import dataclass

import pytest

from shared.application import uow as uow_module
from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import DomainEvent


@dataclass
class SomethingHappened(DomainEvent):
    name: str


@dataclass
class DoSomething:
    name: str


def test_command_is_routed_to_its_handler():
    bus = MessageBus()
    bus.register_command_handler(DoSomething, lambda command: command.name.upper())

    assert bus.handle_command(DoSomething("ok")) == "OK"


def test_command_handler_is_unique():
    bus = MessageBus()
    bus.register_command_handler(DoSomething, lambda command: None)

    with pytest.raises(ValueError):
        bus.register_command_handler(DoSomething, lambda command: None)


def test_unregistered_command_raises():
    with pytest.raises(ValueError):
        MessageBus().handle_command(DoSomething("x"))


def test_handler_errors_propagate_from_commands():
    bus = MessageBus()

    def explode(command):
        raise RuntimeError("boom")

    bus.register_command_handler(DoSomething, explode)

    with pytest.raises(RuntimeError):
        bus.handle_command(DoSomething("x"))


def test_failing_event_handler_does_not_stop_others():
    bus = MessageBus()
    seen = []

    def explode(event):
        raise RuntimeError("boom")

    bus.register_event_handler(SomethingHappened, explode)
    bus.register_event_handler(SomethingHappened, lambda event: seen.append(event.name))

    bus.publish_events([SomethingHappened(name="a")])

    assert seen == ["a"]


def test_event_handler_registered_once():
    bus = MessageBus()
    seen = []

    def handler(event):
        seen.append(event)

    bus.register_event_handler(SomethingHappened, handler)
    bus.register_event_handler(SomethingHappened, handler)
    bus.publish_events([SomethingHappened(name="a")])

    assert len(seen) == 1


def test_event_serializes_envelope_and_payload():
    event = SomethingHappened(name="a", aggregate_id=7)

    data = event.to_dict()

    assert data["event_type"] == "SomethingHappened"
    assert data["aggregate_id"] == 7
    assert data["payload"] == {"name": "a"}


@pytest.fixture
def published(monkeypatch):
    events = []
    bus = MessageBus()
    bus.register_event_handler(SomethingHappened, events.append)
    monkeypatch.setattr("shared.application.message_bus.message_bus", bus)
    return events


@pytest.mark.django_db
def test_events_published_after_commit(published, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork() as uow:
            uow.add_event(SomethingHappened(name="a"))
            assert published == []

    assert [event.name for event in published] == ["a"]


@pytest.mark.django_db
def test_events_discarded_on_rollback(published, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork() as uow:
                uow.add_event(SomethingHappened(name="a"))
                raise RuntimeError("abort")

    assert callbacks == []
    assert published == []


@pytest.mark.django_db
def test_inner_rollback_drops_only_inner_events(published, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        with DjangoUnitOfWork() as outer:
            outer.add_event(SomethingHappened(name="outer"))
            with pytest.raises(RuntimeError):
                with DjangoUnitOfWork() as inner:
                    inner.add_event(SomethingHappened(name="inner"))
                    raise RuntimeError("abort")

    assert [event.name for event in published] == ["outer"]


def test_publish_errors_are_logged_not_raised(monkeypatch):
    class BrokenBus:
        def publish_events(self, events):
            raise RuntimeError("boom")

    monkeypatch.setattr("shared.application.message_bus.message_bus", BrokenBus())

    uow_module.DjangoUnitOfWork()._publish_events([SomethingHappened(name="a")])
