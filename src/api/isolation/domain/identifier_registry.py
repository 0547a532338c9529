"""Registries that intern identifier value objects.

Each identifier type owns one registry mapping a string value to the
instance created for it. Interning only makes repeated lookups cheap;
identifier equality stays value-based, so a registry that does not cache at
all is a valid replacement.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, Protocol, TypeVar

T = TypeVar("T")


class IdentifierRegistry(Protocol[T]):
    """Strategy for turning a validated string into an identifier instance."""

    def get_or_create(self, value: str, factory: Callable[[str], T]) -> T:
        """Return the instance for value, creating it with factory if needed."""
        ...

    def clear(self) -> None:
        """Forget every cached instance."""
        ...

    def __len__(self) -> int: ...


class InterningIdentifierRegistry(Generic[T]):
    """Thread-safe registry returning one shared instance per value.

    The factory runs under the lock so two threads asking for the same value
    can never produce two instances.
    """

    def __init__(self) -> None:
        self._instances: dict[str, T] = {}
        self._lock = threading.Lock()

    def get_or_create(self, value: str, factory: Callable[[str], T]) -> T:
        instance = self._instances.get(value)
        if instance is not None:
            return instance

        with self._lock:
            instance = self._instances.get(value)
            if instance is None:
                instance = factory(value)
                self._instances[value] = instance
            return instance

    def clear(self) -> None:
        """Drop all cached instances.

        Only meant for resetting state between tests. Must not run while
        other threads construct identifiers of the same type.
        """
        with self._lock:
            self._instances.clear()

    def __len__(self) -> int:
        return len(self._instances)


class PassthroughIdentifierRegistry(Generic[T]):
    """Registry that never caches; every lookup builds a fresh instance."""

    def get_or_create(self, value: str, factory: Callable[[str], T]) -> T:
        return factory(value)

    def clear(self) -> None:
        pass

    def __len__(self) -> int:
        return 0
