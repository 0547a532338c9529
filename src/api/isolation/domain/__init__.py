"""Isolation domain layer.

Pure value objects and the IsolationContext entity. No framework, logging or
persistence imports belong here.
"""

from isolation.domain.exceptions import IsolationValidationError
from isolation.domain.identifier_registry import (
    IdentifierRegistry,
    InterningIdentifierRegistry,
    PassthroughIdentifierRegistry,
)
from isolation.domain.isolation_context import IsolationContext
from isolation.domain.value_objects import (
    IDENTIFIER_TYPES,
    DataAccessDescriptor,
    DepartmentId,
    IsolationIdentifier,
    IsolationLevel,
    OrganizationId,
    SharingLevel,
    TenantId,
    UserId,
)

__all__ = [
    "IDENTIFIER_TYPES",
    "DataAccessDescriptor",
    "DepartmentId",
    "IdentifierRegistry",
    "InterningIdentifierRegistry",
    "IsolationContext",
    "IsolationIdentifier",
    "IsolationLevel",
    "IsolationValidationError",
    "OrganizationId",
    "PassthroughIdentifierRegistry",
    "SharingLevel",
    "TenantId",
    "UserId",
]
