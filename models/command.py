"""Command models for undoable changes to the client repository."""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from models.client import Client, ClientId

if TYPE_CHECKING:
    from core.repository import ClientRepository

logger = logging.getLogger(__name__)

_MISSING = object()


class CommandType(Enum):
    """Types of commands that can be run against the repository."""
    ADD = "add"
    REMOVE = "remove"
    EDIT = "edit"


class CommandState(Enum):
    """Lifecycle of a single command instance."""
    CREATED = "created"
    EXECUTED = "executed"
    UNDONE = "undone"


class BaseCommand(ABC):
    """
    Base class for all undoable commands.

    A command is bound to the repository it mutates and to its payload at
    construction time. ``execute`` re-checks ``can_execute`` and does nothing
    when it is false; ``undo`` only reverts a command that actually executed.
    """

    type: CommandType

    def __init__(self, repository: 'ClientRepository'):
        self.repository = repository
        self.command_id = uuid.uuid4()
        self.timestamp = datetime.now()
        self.state = CommandState.CREATED

    @abstractmethod
    def can_execute(self) -> bool:
        """Check preconditions without side effects."""

    @abstractmethod
    def execute(self) -> None:
        """Apply the change to the repository."""

    @abstractmethod
    def undo(self) -> None:
        """Revert the most recent execute."""

    @property
    def target_id(self) -> Optional[ClientId]:
        """Identifier of the client this command touches."""
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert command to dictionary representation."""
        return {
            'id': str(self.command_id),
            'type': self.type.value,
            'state': self.state.value,
            'client_id': self.target_id,
            'timestamp': self.timestamp.isoformat()
        }


class AddClientCommand(BaseCommand):
    """Command that adds a client to the repository."""

    type = CommandType.ADD

    def __init__(self, repository: 'ClientRepository', client: Optional[Client]):
        super().__init__(repository)
        self.client = client

    @property
    def target_id(self) -> Optional[ClientId]:
        return self.client.id if self.client is not None else None

    def can_execute(self) -> bool:
        if self.client is None:
            return False

        return self.repository.get_client(self.client.id) is None

    def execute(self) -> None:
        if not self.can_execute():
            return

        self.repository.add(self.client)
        self.state = CommandState.EXECUTED

    def undo(self) -> None:
        if self.client is None or self.state is not CommandState.EXECUTED:
            return

        self.repository.remove(self.client.id)
        self.state = CommandState.UNDONE

    def __repr__(self) -> str:
        return f"AddClientCommand(client={self.client!r}, state={self.state.value!r})"


class RemoveClientCommand(BaseCommand):
    """Command that removes a client, keeping it for undo."""

    type = CommandType.REMOVE

    def __init__(self, repository: 'ClientRepository', client_id: Optional[ClientId]):
        super().__init__(repository)
        self.client_id = client_id
        self.removed: Optional[Client] = None

    @property
    def target_id(self) -> Optional[ClientId]:
        return self.client_id

    def can_execute(self) -> bool:
        if self.client_id is None:
            return False

        return self.repository.get_client(self.client_id) is not None

    def execute(self) -> None:
        if not self.can_execute():
            return

        self.removed = self.repository.remove(self.client_id)
        self.state = CommandState.EXECUTED

    def undo(self) -> None:
        if self.removed is None or self.state is not CommandState.EXECUTED:
            return

        if self.repository.get_client(self.client_id) is not None:
            logger.warning(f"Client {self.client_id!r} was re-added before removal could be undone")
            return

        self.repository.add(self.removed)
        self.state = CommandState.UNDONE

    def __repr__(self) -> str:
        return f"RemoveClientCommand(client_id={self.client_id!r}, state={self.state.value!r})"


class EditClientCommand(BaseCommand):
    """Command that changes one descriptive field of a stored client."""

    type = CommandType.EDIT

    # Fields stored as attributes on Client; anything else goes into Client.attributes
    DIRECT_FIELDS = ("name", "email")
    REQUIRED_FIELDS = ("name",)

    def __init__(self, repository: 'ClientRepository', client_id: Optional[ClientId], field: str, value: Any):
        super().__init__(repository)
        self.client_id = client_id
        self.field = field
        self.value = value
        self.previous: Any = _MISSING

    @property
    def target_id(self) -> Optional[ClientId]:
        return self.client_id

    def can_execute(self) -> bool:
        if self.client_id is None or not self.field or self.field == "id":
            return False
        if self.field in self.REQUIRED_FIELDS and self.value is None:
            return False

        return self.repository.get_client(self.client_id) is not None

    def execute(self) -> None:
        # previous must survive until undo
        if self.state is CommandState.EXECUTED or not self.can_execute():
            return

        client = self.repository.get_client(self.client_id)
        self.previous = self._read(client)
        self._write(client, self.value)
        self.state = CommandState.EXECUTED

    def undo(self) -> None:
        if self.state is not CommandState.EXECUTED:
            return

        client = self.repository.get_client(self.client_id)
        if client is None:
            logger.warning(f"Client {self.client_id!r} vanished before edit could be undone")
            return

        self._write(client, self.previous)
        self.state = CommandState.UNDONE

    def _read(self, client: Client) -> Any:
        if self.field in self.DIRECT_FIELDS:
            return getattr(client, self.field)
        return client.attributes.get(self.field, _MISSING)

    def _write(self, client: Client, value: Any) -> None:
        if self.field in self.DIRECT_FIELDS:
            setattr(client, self.field, value)
        elif value is _MISSING:
            client.attributes.pop(self.field, None)
        else:
            client.attributes[self.field] = value

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update({
            'field': self.field,
            'value': self.value
        })
        return result

    def __repr__(self) -> str:
        return (f"EditClientCommand(client_id={self.client_id!r}, field={self.field!r}, "
                f"value={self.value!r}, state={self.state.value!r})")
