"""Unit tests for the in-memory client repository."""

import pytest
from models.client import Client
from core.repository import ClientRepository, InMemoryClientRepository
from core.exceptions import DuplicateClientError, RepositoryError


@pytest.fixture
def sample_clients():
    """Sample clients for testing."""
    return [
        Client(1, "Alice", "alice@example.com"),
        Client(2, "Bob", "bob@example.com")
    ]


@pytest.fixture
def repository(sample_clients):
    """Repository instance for testing."""
    return InMemoryClientRepository(sample_clients)


def test_repository_initialization(repository):
    """Test repository initialization."""
    data = repository.get_all()
    assert len(data) == 2
    assert 1 in data
    assert 2 in data
    assert repository.version == 1
    assert isinstance(repository, ClientRepository)


def test_get_client_missing_returns_none(repository):
    assert repository.get_client(3) is None
    assert repository.get_client("1") is None


def test_add_client(repository):
    charlie = Client(3, "Charlie")
    repository.add(charlie)

    assert repository.get_client(3) is charlie
    assert len(repository) == 3
    assert repository.version == 2


def test_add_duplicate_raises(repository):
    """Test that adding an existing id faults and keeps the stored client."""
    with pytest.raises(DuplicateClientError):
        repository.add(Client(1, "Impostor"))

    assert repository.get_client(1).name == "Alice"
    assert repository.version == 1


def test_duplicate_error_is_repository_error():
    assert issubclass(DuplicateClientError, RepositoryError)


def test_duplicate_initial_clients_raise():
    with pytest.raises(DuplicateClientError):
        InMemoryClientRepository([Client(1, "Alice"), Client(1, "Alicia")])


def test_remove_client(repository):
    removed = repository.remove(1)

    assert removed.name == "Alice"
    assert repository.get_client(1) is None
    assert repository.version == 2


def test_remove_missing_client_is_noop(repository):
    assert repository.remove(99) is None
    assert len(repository) == 2
    assert repository.version == 1


def test_get_all_returns_snapshot(repository):
    snapshot = repository.get_all()
    snapshot.clear()
    assert len(repository.get_all()) == 2
