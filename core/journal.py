"""Append-only journal of command manager events."""

import asyncio
from typing import Any, AsyncIterator, Dict, List, Optional

from models.command import BaseCommand


class CommandJournal:
    """Records what the command manager did, in order."""

    def __init__(self, max_events: Optional[int] = 1000):
        """
        Initialize the journal.

        Args:
            max_events: Oldest events are dropped beyond this size, None keeps all
        """
        if max_events is not None and max_events < 1:
            raise ValueError("max_events must be at least 1")

        self.max_events = max_events
        self._events: List[Dict[str, Any]] = []
        # Number of events ever dropped from the front
        self._dropped = 0

    def record(self, event_type: str, command: BaseCommand, history_size: int) -> Dict[str, Any]:
        """
        Append an event for a command.

        Args:
            event_type: One of "execute", "undo", "redo", "rejected"
            command: Command the event is about
            history_size: Number of commands in the undo history afterwards

        Returns:
            The recorded event
        """
        event = {
            "type": event_type,
            "command": command.to_dict(),
            "history_size": history_size
        }
        self._events.append(event)
        if self.max_events is not None and len(self._events) > self.max_events:
            overflow = len(self._events) - self.max_events
            del self._events[:overflow]
            self._dropped += overflow
        return event

    @property
    def events(self) -> List[Dict[str, Any]]:
        return list(self._events)

    async def stream(self, poll_interval: float = 0.1) -> AsyncIterator[Dict[str, Any]]:
        """
        Yield every retained event, then wait for new ones.

        Runs until the consumer closes it. Events dropped while the consumer
        lagged behind are skipped.
        """
        position = self._dropped
        while True:
            position = max(position, self._dropped)
            index = position - self._dropped
            if index >= len(self._events):
                await asyncio.sleep(poll_interval)
                continue
            event = self._events[index]
            position += 1
            yield event

    def __len__(self) -> int:
        return len(self._events)
