"""Isolation context resolution.

Turns raw identifier strings (typically request headers set by a gateway
after authentication) into the most specific valid IsolationContext.
Resolution never fails: malformed identifiers are discarded and identifiers
that would break the hierarchy are dropped, each reported on the probe.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TypeVar

from isolation.application.observability import (
    ContextResolutionProbe,
    DefaultContextResolutionProbe,
)
from isolation.domain import (
    DepartmentId,
    IsolationContext,
    IsolationIdentifier,
    IsolationValidationError,
    OrganizationId,
    TenantId,
    UserId,
)

IdT = TypeVar("IdT", bound=IsolationIdentifier)


@dataclass(frozen=True)
class IsolationHeaders:
    """Names of the request headers carrying isolation identifiers."""

    tenant: str = "X-Tenant-Id"
    organization: str = "X-Organization-Id"
    department: str = "X-Department-Id"
    user: str = "X-User-Id"


class IsolationContextResolver:
    """Builds IsolationContext instances from untrusted raw identifiers."""

    def __init__(
        self,
        headers: IsolationHeaders | None = None,
        probe: ContextResolutionProbe | None = None,
    ):
        """Initialize the resolver.

        Args:
            headers: Header names used by resolve_headers
            probe: Optional domain probe for observability
        """
        self._headers = headers or IsolationHeaders()
        self._probe = probe or DefaultContextResolutionProbe()

    def resolve(
        self,
        tenant_id: str | None = None,
        organization_id: str | None = None,
        department_id: str | None = None,
        user_id: str | None = None,
    ) -> IsolationContext:
        """Resolve the most specific valid context from raw identifiers.

        Precedence:
        - a user id yields a user context, keeping the tenant if present
        - otherwise tenant, organization and department are used as deep as
          the chain is unbroken; anything below a gap is dropped

        Args:
            tenant_id: Raw tenant identifier
            organization_id: Raw organization identifier
            department_id: Raw department identifier
            user_id: Raw user identifier

        Returns:
            Resolved IsolationContext, the platform context when nothing valid
            was supplied
        """
        tenant = self._parse(TenantId, "tenant_id", tenant_id)
        organization = self._parse(OrganizationId, "organization_id", organization_id)
        department = self._parse(DepartmentId, "department_id", department_id)
        user = self._parse(UserId, "user_id", user_id)

        if user is not None:
            if organization is not None:
                self._probe.context_degraded(
                    dropped_field="organization_id",
                    reason="user context cannot carry an organization",
                )
            if department is not None:
                self._probe.context_degraded(
                    dropped_field="department_id",
                    reason="user context cannot carry a department",
                )
            context = IsolationContext.user(user, tenant)
        elif tenant is None:
            if organization is not None:
                self._probe.context_degraded(
                    dropped_field="organization_id",
                    reason="organization requires a tenant",
                )
            if department is not None:
                self._probe.context_degraded(
                    dropped_field="department_id",
                    reason="department requires a tenant",
                )
            context = IsolationContext.platform()
        elif organization is None:
            if department is not None:
                self._probe.context_degraded(
                    dropped_field="department_id",
                    reason="department requires an organization",
                )
            context = IsolationContext.tenant(tenant)
        elif department is None:
            context = IsolationContext.organization(tenant, organization)
        else:
            context = IsolationContext.department(tenant, organization, department)

        self._probe.context_resolved(
            isolation_level=context.isolation_level.value,
            scope=context.build_log_context(),
        )
        return context

    def resolve_headers(self, headers: Mapping[str, str]) -> IsolationContext:
        """Resolve a context from request headers, matching names case-insensitively."""
        lowered = {name.lower(): value for name, value in headers.items()}
        return self.resolve(
            tenant_id=lowered.get(self._headers.tenant.lower()),
            organization_id=lowered.get(self._headers.organization.lower()),
            department_id=lowered.get(self._headers.department.lower()),
            user_id=lowered.get(self._headers.user.lower()),
        )

    def _parse(
        self, identifier_type: type[IdT], field: str, raw: str | None
    ) -> IdT | None:
        if raw is None or not raw.strip():
            return None
        try:
            return identifier_type.from_string(raw)
        except IsolationValidationError:
            self._probe.invalid_identifier(field=field, raw_value=raw)
            return None
