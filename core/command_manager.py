"""Command manager that runs commands and keeps their undo history."""

import logging
import threading
from typing import List, Optional

from models.command import BaseCommand, CommandState
from core.journal import CommandJournal
from core.exceptions import NothingToRedoError, NothingToUndoError

logger = logging.getLogger(__name__)


class UndoPolicy:
    """What undo/redo do when there is nothing to act on."""

    IGNORE = "ignore"
    RAISE = "raise"


class CommandManager:
    """
    Invoker for undoable commands.

    Executed commands are kept on a last-in-first-out history. Undone commands
    move to a redo stack, which is cleared whenever a new command is invoked.
    The check-then-execute pair runs under a lock so two commands cannot both
    pass ``can_execute`` for the same client before either executes.
    """

    def __init__(self, journal: Optional[CommandJournal] = None,
                 undo_policy: str = UndoPolicy.IGNORE,
                 max_history: Optional[int] = None):
        """
        Initialize the manager.

        Args:
            journal: Optional journal that receives an event per operation
            undo_policy: UndoPolicy.IGNORE returns None on an empty stack,
                UndoPolicy.RAISE raises NothingToUndoError / NothingToRedoError
            max_history: Oldest history entries are dropped beyond this size
        """
        if undo_policy not in (UndoPolicy.IGNORE, UndoPolicy.RAISE):
            raise ValueError(f"Unknown undo policy: {undo_policy}")
        if max_history is not None and max_history < 1:
            raise ValueError("max_history must be at least 1")

        self.journal = journal
        self.undo_policy = undo_policy
        self.max_history = max_history
        self._history: List[BaseCommand] = []
        self._redo_stack: List[BaseCommand] = []
        self._lock = threading.RLock()

    @property
    def history(self) -> List[BaseCommand]:
        return list(self._history)

    @property
    def redo_stack(self) -> List[BaseCommand]:
        return list(self._redo_stack)

    def can_undo(self) -> bool:
        return len(self._history) > 0

    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    def invoke(self, command: BaseCommand) -> bool:
        """
        Execute a command and record it in the history.

        Args:
            command: Command to run

        Returns:
            True if the command executed, False if it was rejected by can_execute
            or had already been invoked
        """
        with self._lock:
            # A command instance runs through invoke once; redo re-executes it
            if command.state is not CommandState.CREATED or not command.can_execute():
                logger.info(f"Rejected {command!r}")
                self._record("rejected", command)
                return False

            command.execute()
            self._push(command)
            self._redo_stack.clear()

            logger.info(f"Executed {command!r}")
            self._record("execute", command)
            return True

    def undo(self) -> Optional[BaseCommand]:
        """
        Undo the most recent command.

        Returns:
            The undone command, or None when the history is empty or the most
            recent command could not be reverted

        Raises:
            NothingToUndoError: If the history is empty and the policy is RAISE
        """
        with self._lock:
            if not self._history:
                if self.undo_policy == UndoPolicy.RAISE:
                    raise NothingToUndoError("No command to undo")
                logger.debug("Undo requested with empty history")
                return None

            command = self._history.pop()
            try:
                command.undo()
            except Exception:
                self._history.append(command)
                raise

            if command.state is not CommandState.UNDONE:
                # Repository changed since the execute; the command can no longer be reverted
                logger.info(f"Dropped {command!r} from history, it can no longer be undone")
                self._record("rejected", command)
                return None

            self._redo_stack.append(command)

            logger.info(f"Undid {command!r}")
            self._record("undo", command)
            return command

    def redo(self) -> Optional[BaseCommand]:
        """
        Re-execute the most recently undone command.

        Returns:
            The re-executed command, or None when nothing could be redone

        Raises:
            NothingToRedoError: If the redo stack is empty and the policy is RAISE
        """
        with self._lock:
            if not self._redo_stack:
                if self.undo_policy == UndoPolicy.RAISE:
                    raise NothingToRedoError("No command to redo")
                logger.debug("Redo requested with empty redo stack")
                return None

            command = self._redo_stack.pop()
            if command.state is not CommandState.UNDONE or not command.can_execute():
                # Repository changed since the undo; the command no longer applies
                logger.info(f"Dropped {command!r} from redo, it can no longer execute")
                self._record("rejected", command)
                return None

            command.execute()
            self._push(command)
            logger.info(f"Redid {command!r}")
            self._record("redo", command)
            return command

    def clear(self) -> None:
        """Forget all history without undoing anything."""
        with self._lock:
            self._history.clear()
            self._redo_stack.clear()

    def _push(self, command: BaseCommand) -> None:
        self._history.append(command)
        if self.max_history is not None and len(self._history) > self.max_history:
            del self._history[0]

    def _record(self, event_type: str, command: BaseCommand) -> None:
        if self.journal is not None:
            self.journal.record(event_type, command, len(self._history))
