"""Client model stored in the client repository."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

ClientId = Union[int, str]


@dataclass(eq=False)
class Client:
    """Represents a client record keyed by an immutable identifier."""

    id: ClientId
    name: str
    email: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Client id cannot be reassigned")
        super().__setattr__(name, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Client):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert client to dictionary representation."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'attributes': dict(self.attributes)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Client':
        """Create Client instance from dictionary."""
        return cls(
            id=data['id'],
            name=data['name'],
            email=data.get('email'),
            attributes=dict(data.get('attributes') or {})
        )

    def __repr__(self) -> str:
        return f"Client(id={self.id!r}, name={self.name!r}, email={self.email!r})"
