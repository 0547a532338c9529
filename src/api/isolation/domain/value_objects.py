"""Value objects for the Isolation domain.

Identifiers name a position in the Platform -> Tenant -> Organization ->
Department hierarchy (plus the independent User tier). They wrap a UUID v4
string, are immutable, and are interned per type: ``TenantId.from_string(v)``
returns the same instance for the same ``v`` until ``clear_cache()`` runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Self
from uuid import UUID, uuid4

from isolation.domain.exceptions import IsolationValidationError
from isolation.domain.identifier_registry import (
    IdentifierRegistry,
    InterningIdentifierRegistry,
)

if TYPE_CHECKING:
    from isolation.domain.isolation_context import IsolationContext


def is_uuid_v4(value: object) -> bool:
    """Check that value is a canonical, hyphenated UUID version 4 string."""
    if not isinstance(value, str) or not value:
        return False
    try:
        parsed = UUID(value)
    except ValueError:
        return False
    # UUID() also accepts braces, urn: prefixes and unhyphenated hex
    return parsed.version == 4 and str(parsed) == value.lower()


@dataclass(frozen=True)
class IsolationIdentifier:
    """Base class for hierarchy identifiers.

    Subclasses get their own interning registry; the base class itself is
    abstract and cannot be instantiated or looked up. Equality is by type
    and value, so a TenantId never equals an OrganizationId with the same
    string. Values are stored in canonical lowercase form however they are
    constructed.
    """

    value: str

    _registry: ClassVar[IdentifierRegistry]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = InterningIdentifierRegistry()

    def __post_init__(self) -> None:
        type(self)._require_concrete()
        if not is_uuid_v4(self.value):
            raise IsolationValidationError(
                f"Invalid {type(self).__name__}: {self.value!r} is not a UUID v4",
                "INVALID_IDENTIFIER",
                {"identifier_type": type(self).__name__, "value": self.value},
            )
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def _require_concrete(cls) -> None:
        if cls is IsolationIdentifier:
            raise TypeError(
                "IsolationIdentifier is abstract; use TenantId, OrganizationId, "
                "DepartmentId or UserId"
            )

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create (or reuse) the identifier for a UUID string.

        The value is normalized to lowercase before lookup so differently
        cased spellings of one UUID share an instance.

        Args:
            value: UUID v4 string

        Returns:
            Interned identifier instance

        Raises:
            IsolationValidationError: If value is empty or not a UUID v4
            TypeError: If called on the abstract base class
        """
        cls._require_concrete()
        normalized = value.strip().lower() if isinstance(value, str) else value
        if not is_uuid_v4(normalized):
            raise IsolationValidationError(
                f"Invalid {cls.__name__}: {value!r} is not a UUID v4",
                "INVALID_IDENTIFIER",
                {"identifier_type": cls.__name__, "value": value},
            )
        return cls._registry.get_or_create(normalized, cls)

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier from a random UUID v4."""
        return cls.from_string(str(uuid4()))

    @classmethod
    def use_registry(cls, registry: IdentifierRegistry) -> None:
        """Replace the interning strategy for this identifier type."""
        cls._require_concrete()
        cls._registry = registry

    @classmethod
    def clear_cache(cls) -> None:
        """Forget interned instances. Test-only."""
        cls._require_concrete()
        cls._registry.clear()


@dataclass(frozen=True)
class TenantId(IsolationIdentifier):
    """Identifier for a tenant, the top isolation tier below the platform."""


@dataclass(frozen=True)
class OrganizationId(IsolationIdentifier):
    """Identifier for an organization inside a tenant."""


@dataclass(frozen=True)
class DepartmentId(IsolationIdentifier):
    """Identifier for a department inside an organization."""


@dataclass(frozen=True)
class UserId(IsolationIdentifier):
    """Identifier for a user. Independent of the organization chain."""


IDENTIFIER_TYPES: tuple[type[IsolationIdentifier], ...] = (
    TenantId,
    OrganizationId,
    DepartmentId,
    UserId,
)


class IsolationLevel(Enum):
    """Position of a context in the isolation hierarchy.

    PLATFORM means no isolation at all; USER is the most specific tier.
    Deliberately a plain Enum so members never compare equal to strings or
    to SharingLevel members.
    """

    PLATFORM = "platform"
    TENANT = "tenant"
    ORGANIZATION = "organization"
    DEPARTMENT = "department"
    USER = "user"

    @property
    def depth(self) -> int:
        """Rank in the hierarchy, 0 for PLATFORM up to 4 for USER."""
        return _LEVEL_DEPTH[self]


_LEVEL_DEPTH = {level: depth for depth, level in enumerate(IsolationLevel)}


class SharingLevel(Enum):
    """Breadth at which a piece of data has opted to be shared.

    Same case names as IsolationLevel, different meaning: this describes the
    data, not the requester.
    """

    PLATFORM = "platform"
    TENANT = "tenant"
    ORGANIZATION = "organization"
    DEPARTMENT = "department"
    USER = "user"


@dataclass(frozen=True)
class DataAccessDescriptor:
    """Isolation metadata attached to a piece of data.

    Produced by storage or read-model collaborators and evaluated by
    ``IsolationContext.can_access_descriptor``.

    Attributes:
        isolation_context: Context the data belongs to.
        is_shared: Whether the data opted into sharing.
        sharing_level: Breadth of sharing; ignored for private data.
    """

    isolation_context: IsolationContext
    is_shared: bool = False
    sharing_level: SharingLevel | None = None
