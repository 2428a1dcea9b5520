"""Client repository abstraction and its in-memory implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from models.client import Client, ClientId
from core.exceptions import DuplicateClientError

logger = logging.getLogger(__name__)


class ClientRepository(ABC):
    """Storage of clients keyed by their identifier."""

    @abstractmethod
    def add(self, client: Client) -> None:
        """Store a new client. Raises DuplicateClientError if the id is taken."""

    @abstractmethod
    def get_client(self, client_id: ClientId) -> Optional[Client]:
        """Return the client with this id, or None when absent."""

    @abstractmethod
    def remove(self, client_id: ClientId) -> Optional[Client]:
        """Remove and return the client with this id, or None when absent."""

    @abstractmethod
    def get_all(self) -> Dict[ClientId, Client]:
        """Return a snapshot of every stored client."""


class InMemoryClientRepository(ClientRepository):
    """
    Dictionary-backed client repository.

    Keeps a version counter that is incremented after every successful
    mutation so callers can tell whether the stored state changed.
    """

    def __init__(self, initial_clients: Iterable[Client] = ()):
        """
        Initialize repository with initial clients.

        Args:
            initial_clients: Clients to store up front

        Raises:
            DuplicateClientError: If two initial clients share an id
        """
        self.version = 1
        self.data: Dict[ClientId, Client] = {}

        for client in initial_clients:
            self.add(client)
        self.version = 1

    def add(self, client: Client) -> None:
        if client.id in self.data:
            raise DuplicateClientError(f"Client {client.id!r} already exists")

        self.data[client.id] = client
        self.version += 1
        logger.debug(f"Added client {client.id!r} (version {self.version})")

    def get_client(self, client_id: ClientId) -> Optional[Client]:
        return self.data.get(client_id)

    def remove(self, client_id: ClientId) -> Optional[Client]:
        client = self.data.pop(client_id, None)
        if client is not None:
            self.version += 1
            logger.debug(f"Removed client {client_id!r} (version {self.version})")
        return client

    def get_all(self) -> Dict[ClientId, Client]:
        return self.data.copy()

    def __len__(self) -> int:
        return len(self.data)
