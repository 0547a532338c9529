"""IsolationContext entity.

An IsolationContext is a caller's (or a piece of data's) position in the
Platform -> Tenant -> Organization -> Department hierarchy, with the User tier
standing on its own. The context decides data access and renders the
canonical keys other layers use for scoping:

- build_cache_key(): namespaced cache keys
- build_log_context(): structured log fields
- build_where_clause(): storage equality filters
- can_access(): the access decision for a piece of data

Example:
    context = IsolationContext.department(tenant_id, organization_id, department_id)
    context.build_cache_key("user", "list")
    # "tenant:<t>:org:<o>:dept:<d>:user:list"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from functools import cached_property

from isolation.domain.exceptions import IsolationValidationError
from isolation.domain.value_objects import (
    DataAccessDescriptor,
    DepartmentId,
    IsolationIdentifier,
    IsolationLevel,
    OrganizationId,
    SharingLevel,
    TenantId,
    UserId,
)

_FIELD_TYPES: dict[str, type[IsolationIdentifier]] = {
    "tenant_id": TenantId,
    "organization_id": OrganizationId,
    "department_id": DepartmentId,
    "user_id": UserId,
}


@dataclass(frozen=True)
class IsolationContext:
    """Immutable position in the isolation hierarchy.

    Build instances with the named constructors. Direct construction runs the
    same hierarchy checks:

    - an organization requires a tenant
    - a department requires an organization and a tenant
    - a user may carry a tenant but never an organization or department

    The context with no identifiers is the platform context, the only empty
    one. Transitions return new instances; nothing here mutates.
    """

    tenant_id: TenantId | None = None
    organization_id: OrganizationId | None = None
    department_id: DepartmentId | None = None
    user_id: UserId | None = None

    def __post_init__(self) -> None:
        for field_name, expected_type in _FIELD_TYPES.items():
            value = getattr(self, field_name)
            if value is not None and not isinstance(value, expected_type):
                raise IsolationValidationError(
                    f"{field_name} must be a {expected_type.__name__}, "
                    f"got {type(value).__name__}",
                    "INVALID_IDENTIFIER",
                    {"field": field_name, "value": repr(value)},
                )

        if self.organization_id is not None and self.tenant_id is None:
            raise IsolationValidationError(
                "organization context requires a tenant id",
                "INVALID_ORGANIZATION_CONTEXT",
                {"organization_id": self.organization_id.value},
            )

        if self.department_id is not None and (
            self.tenant_id is None or self.organization_id is None
        ):
            raise IsolationValidationError(
                "department context requires a tenant id and an organization id",
                "INVALID_DEPARTMENT_CONTEXT",
                {
                    "department_id": self.department_id.value,
                    "has_tenant": self.tenant_id is not None,
                    "has_organization": self.organization_id is not None,
                },
            )

        if self.user_id is not None and (
            self.organization_id is not None or self.department_id is not None
        ):
            raise IsolationValidationError(
                "user context cannot be combined with an organization or department",
                "INVALID_USER_CONTEXT",
                {
                    "user_id": self.user_id.value,
                    "has_organization": self.organization_id is not None,
                    "has_department": self.department_id is not None,
                },
            )

    # Named constructors

    @classmethod
    def platform(cls) -> IsolationContext:
        """Create the platform context, which sees all data."""
        return cls()

    @classmethod
    def tenant(cls, tenant_id: TenantId) -> IsolationContext:
        """Create a tenant-level context."""
        return cls(tenant_id=tenant_id)

    @classmethod
    def organization(
        cls,
        tenant_id: TenantId,
        organization_id: OrganizationId,
    ) -> IsolationContext:
        """Create an organization-level context.

        Raises:
            IsolationValidationError: If tenant_id is missing
        """
        return cls(tenant_id=tenant_id, organization_id=organization_id)

    @classmethod
    def department(
        cls,
        tenant_id: TenantId,
        organization_id: OrganizationId,
        department_id: DepartmentId,
    ) -> IsolationContext:
        """Create a department-level context.

        Raises:
            IsolationValidationError: If tenant_id or organization_id is missing
        """
        return cls(
            tenant_id=tenant_id,
            organization_id=organization_id,
            department_id=department_id,
        )

    @classmethod
    def user(cls, user_id: UserId, tenant_id: TenantId | None = None) -> IsolationContext:
        """Create a user-level context, optionally inside a tenant."""
        return cls(tenant_id=tenant_id, user_id=user_id)

    @classmethod
    def from_dict(cls, data: Mapping[str, str | None]) -> IsolationContext:
        """Rebuild a context from the mapping produced by to_dict().

        Missing keys and None values mean the identifier is absent.

        Raises:
            IsolationValidationError: If an identifier is malformed or the
                combination breaks the hierarchy rules
        """
        kwargs = {}
        for field_name, identifier_type in _FIELD_TYPES.items():
            raw = data.get(field_name)
            if raw is not None:
                kwargs[field_name] = identifier_type.from_string(raw)
        return cls(**kwargs)

    # Level derivation

    @cached_property
    def isolation_level(self) -> IsolationLevel:
        """The most specific tier set on this context."""
        if self.user_id is not None:
            return IsolationLevel.USER
        if self.department_id is not None:
            return IsolationLevel.DEPARTMENT
        if self.organization_id is not None:
            return IsolationLevel.ORGANIZATION
        if self.tenant_id is not None:
            return IsolationLevel.TENANT
        return IsolationLevel.PLATFORM

    def is_empty(self) -> bool:
        """Check if this is the platform context (no identifiers)."""
        return self.isolation_level is IsolationLevel.PLATFORM

    def is_platform_level(self) -> bool:
        return self.isolation_level is IsolationLevel.PLATFORM

    def is_tenant_level(self) -> bool:
        return self.isolation_level is IsolationLevel.TENANT

    def is_organization_level(self) -> bool:
        return self.isolation_level is IsolationLevel.ORGANIZATION

    def is_department_level(self) -> bool:
        return self.isolation_level is IsolationLevel.DEPARTMENT

    def is_user_level(self) -> bool:
        return self.isolation_level is IsolationLevel.USER

    def has_tenant(self) -> bool:
        return self.tenant_id is not None

    def has_organization(self) -> bool:
        return self.organization_id is not None

    def has_department(self) -> bool:
        return self.department_id is not None

    def has_user(self) -> bool:
        return self.user_id is not None

    # Access control

    def can_access(
        self,
        data_context: IsolationContext,
        is_shared: bool,
        sharing_level: SharingLevel | None = None,
    ) -> bool:
        """Decide whether this context may read data owned by data_context.

        Rules, first match wins:

        1. The platform context can read everything.
        2. Private data requires an exact context match.
        3. Shared data without a sharing level is denied.
        4. Shared data is readable when the requester's identifier at the
           sharing tier equals the data's identifier at that tier. A deeper
           requester qualifies because only that one tier is compared.

        A missing identifier on either side counts as no match. Never raises.

        Args:
            data_context: Context attached to the data
            is_shared: Whether the data is shared
            sharing_level: Breadth of sharing for shared data

        Returns:
            True if access is granted
        """
        if self.is_empty():
            return True

        if not is_shared:
            return self == data_context

        if not isinstance(sharing_level, SharingLevel):
            return False

        if sharing_level is SharingLevel.PLATFORM:
            return True
        if sharing_level is SharingLevel.TENANT:
            return _same(self.tenant_id, data_context.tenant_id)
        if sharing_level is SharingLevel.ORGANIZATION:
            return _same(self.organization_id, data_context.organization_id)
        if sharing_level is SharingLevel.DEPARTMENT:
            return _same(self.department_id, data_context.department_id)
        if sharing_level is SharingLevel.USER:
            return _same(self.user_id, data_context.user_id)
        return False

    def can_access_descriptor(self, descriptor: DataAccessDescriptor) -> bool:
        """Run can_access against a data access descriptor."""
        return self.can_access(
            descriptor.isolation_context,
            descriptor.is_shared,
            descriptor.sharing_level,
        )

    # Canonical keys

    def build_cache_key(self, *parts: str) -> str:
        """Build a cache key namespaced by this context's hierarchy path.

        Example:
            department context -> "tenant:<t>:org:<o>:dept:<d>:user:list"
            for build_cache_key("user", "list")
        """
        return ":".join([*self._cache_key_prefix(), *parts])

    def _cache_key_prefix(self) -> list[str]:
        level = self.isolation_level
        if level is IsolationLevel.PLATFORM:
            return ["platform"]

        prefix = ["tenant", self.tenant_id.value] if self.tenant_id else []
        if level is IsolationLevel.USER:
            return [*prefix, "user", self.user_id.value]
        if self.organization_id is not None:
            prefix += ["org", self.organization_id.value]
        if self.department_id is not None:
            prefix += ["dept", self.department_id.value]
        return prefix

    def build_log_context(self) -> dict[str, str]:
        """Return the identifiers that are set, for structured log records.

        Absent identifiers are left out rather than logged as None.
        """
        return {
            field_name: getattr(self, field_name).value
            for field_name in _FIELD_TYPES
            if getattr(self, field_name) is not None
        }

    def build_where_clause(self, include_user: bool = False) -> dict[str, str]:
        """Return equality filters scoping a storage query to this context.

        Covers tenant_id, organization_id and department_id. user_id is only
        added when include_user is True.

        Args:
            include_user: Also filter on user_id for user-level contexts

        Returns:
            Mapping of column name to required value
        """
        where: dict[str, str] = {}
        if self.tenant_id is not None:
            where["tenant_id"] = self.tenant_id.value
        if self.organization_id is not None:
            where["organization_id"] = self.organization_id.value
        if self.department_id is not None:
            where["department_id"] = self.department_id.value
        if include_user and self.user_id is not None:
            where["user_id"] = self.user_id.value
        return where

    def to_dict(self) -> dict[str, str | None]:
        """Serialize every identifier slot, None when absent."""
        return {
            field_name: (
                getattr(self, field_name).value
                if getattr(self, field_name) is not None
                else None
            )
            for field_name in _FIELD_TYPES
        }

    # Transitions

    def switch_organization(
        self, new_organization_id: OrganizationId
    ) -> IsolationContext:
        """Return a context in another organization of the same tenant.

        The department is dropped since it belongs to the old organization.
        A user id is dropped too because users never sit inside an
        organization context.

        Raises:
            IsolationValidationError: If this context has no tenant
        """
        if self.tenant_id is None:
            raise IsolationValidationError(
                "switching organization requires tenant context",
                "SWITCH_ORGANIZATION_REQUIRES_TENANT",
                {
                    "organization_id": new_organization_id.value,
                    "current_level": self.isolation_level.value,
                },
            )

        return IsolationContext.organization(self.tenant_id, new_organization_id)

    def switch_department(self, new_department_id: DepartmentId) -> IsolationContext:
        """Return a context in another department of the same organization.

        Raises:
            IsolationValidationError: If this context lacks a tenant or an
                organization
        """
        if self.tenant_id is None or self.organization_id is None:
            raise IsolationValidationError(
                "switching department requires tenant and organization context",
                "SWITCH_DEPARTMENT_REQUIRES_TENANT_AND_ORG",
                {
                    "department_id": new_department_id.value,
                    "has_tenant": self.tenant_id is not None,
                    "has_organization": self.organization_id is not None,
                },
            )

        return IsolationContext.department(
            self.tenant_id,
            self.organization_id,
            new_department_id,
        )


def _same(
    requester_id: IsolationIdentifier | None,
    data_id: IsolationIdentifier | None,
) -> bool:
    return requester_id is not None and requester_id == data_id
