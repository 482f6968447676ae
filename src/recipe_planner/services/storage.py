"""Key-value storage abstractions."""

import copy
from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """Durable key-value capability for JSON-compatible values."""

    def get(self, key: str) -> object | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: object) -> None:
        """Replace the stored value for a key."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory store used for local runs without Supabase."""

    _values: dict[str, object]

    def __init__(self) -> None:
        self._values = {}

    def get(self, key: str) -> object | None:
        """Return a copy of the stored value."""
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: object) -> None:
        """Store a copy of the value."""
        self._values[key] = copy.deepcopy(value)
