"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that events can be correlated per request
    and per isolation scope.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        tenant_id: Tenant of the caller (if applicable).
        organization_id: Organization of the caller (if applicable).
        department_id: Department of the caller (if applicable).
        user_id: Identifier of the user performing the operation (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", tenant_id="...")
        probe = DefaultAccessServiceProbe().with_context(context)
    """

    request_id: str | None = None
    tenant_id: str | None = None
    organization_id: str | None = None
    department_id: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        for key in (
            "request_id",
            "tenant_id",
            "organization_id",
            "department_id",
            "user_id",
        ):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result.update(self.extra)
        return result

    def with_scope(self, **scope: str) -> ObservationContext:
        """Create a new context with isolation fields replaced.

        Accepts the keys produced by IsolationContext.build_log_context();
        fields missing from scope are cleared.
        """
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=scope.get("tenant_id"),
            organization_id=scope.get("organization_id"),
            department_id=scope.get("department_id"),
            user_id=scope.get("user_id"),
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=self.tenant_id,
            organization_id=self.organization_id,
            department_id=self.department_id,
            user_id=self.user_id,
            extra=new_extra,
        )
