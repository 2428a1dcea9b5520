"""Unit tests for the command journal."""

import asyncio

import pytest
from models.client import Client
from models.command import AddClientCommand
from core.journal import CommandJournal
from core.repository import InMemoryClientRepository


@pytest.fixture
def command():
    return AddClientCommand(InMemoryClientRepository(), Client(1, "Alice"))


def test_record_event(command):
    journal = CommandJournal()
    event = journal.record("execute", command, 1)

    assert event["type"] == "execute"
    assert event["command"]["type"] == "add"
    assert event["history_size"] == 1
    assert len(journal) == 1
    assert journal.events == [event]


def test_events_returns_copy(command):
    journal = CommandJournal()
    journal.record("execute", command, 1)
    journal.events.clear()
    assert len(journal) == 1


@pytest.mark.asyncio
async def test_stream_yields_existing_then_new_events(command):
    journal = CommandJournal()
    journal.record("execute", command, 1)

    stream = journal.stream(poll_interval=0.01)
    first = await asyncio.wait_for(stream.__anext__(), timeout=1)
    assert first["type"] == "execute"

    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0.05)
    assert not pending.done()

    journal.record("undo", command, 0)
    second = await asyncio.wait_for(pending, timeout=1)
    assert second["type"] == "undo"

    await stream.aclose()


def test_max_events_drops_oldest(command):
    journal = CommandJournal(max_events=2)
    for event_type in ("execute", "undo", "redo"):
        journal.record(event_type, command, 0)

    assert [event["type"] for event in journal.events] == ["undo", "redo"]


def test_invalid_max_events():
    with pytest.raises(ValueError):
        CommandJournal(max_events=0)


@pytest.mark.asyncio
async def test_stream_skips_dropped_events(command):
    journal = CommandJournal(max_events=2)
    journal.record("execute", command, 1)

    stream = journal.stream(poll_interval=0.01)
    first = await asyncio.wait_for(stream.__anext__(), timeout=1)
    assert first["type"] == "execute"

    # Three more events overflow the journal before the consumer reads again
    journal.record("undo", command, 0)
    journal.record("redo", command, 1)
    journal.record("undo", command, 0)

    second = await asyncio.wait_for(stream.__anext__(), timeout=1)
    third = await asyncio.wait_for(stream.__anext__(), timeout=1)
    assert [second["type"], third["type"]] == ["redo", "undo"]

    await stream.aclose()
