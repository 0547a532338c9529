"""Data access application service.

Gate used by read paths before records leave the service: evaluates each
record's DataAccessDescriptor against the requester's IsolationContext and
scopes storage filters to the requester's position.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from isolation.application.observability import (
    AccessServiceProbe,
    DefaultAccessServiceProbe,
)
from isolation.domain import (
    DataAccessDescriptor,
    IsolationContext,
    IsolationValidationError,
)

T = TypeVar("T")


class DataAccessService:
    """Application service for isolation-aware reads.

    Decisions come from IsolationContext.can_access; this service adds
    observability and batch helpers on top.
    """

    def __init__(
        self,
        probe: AccessServiceProbe | None = None,
        include_user_in_filters: bool = False,
    ):
        """Initialize DataAccessService.

        Args:
            probe: Optional domain probe for observability
            include_user_in_filters: Add user_id to storage filters for
                user-level requesters
        """
        self._probe = probe or DefaultAccessServiceProbe()
        self._include_user_in_filters = include_user_in_filters

    def check(
        self,
        requester: IsolationContext,
        descriptor: DataAccessDescriptor,
    ) -> bool:
        """Check whether requester may read the described data.

        Args:
            requester: The caller's isolation context
            descriptor: Isolation metadata of the data

        Returns:
            True if access is granted
        """
        granted = requester.can_access_descriptor(descriptor)
        sharing_level = (
            descriptor.sharing_level.value
            if descriptor.is_shared and descriptor.sharing_level is not None
            else None
        )
        data_level = descriptor.isolation_context.isolation_level.value

        if granted:
            self._probe.access_granted(
                requester=requester.build_log_context(),
                data_level=data_level,
                sharing_level=sharing_level,
            )
        else:
            self._probe.access_denied(
                requester=requester.build_log_context(),
                data_level=data_level,
                sharing_level=sharing_level,
            )
        return granted

    def filter_accessible(
        self,
        requester: IsolationContext,
        items: Iterable[T],
        descriptor_of: Callable[[T], DataAccessDescriptor],
    ) -> list[T]:
        """Keep the items requester may read, preserving order.

        Args:
            requester: The caller's isolation context
            items: Candidate records
            descriptor_of: Extracts the access descriptor from a record

        Returns:
            The accessible subset of items
        """
        candidates = list(items)
        accessible = [
            item for item in candidates if self.check(requester, descriptor_of(item))
        ]
        self._probe.records_filtered(
            requester=requester.build_log_context(),
            total=len(candidates),
            accessible=len(accessible),
        )
        return accessible

    def scope_filter(self, requester: IsolationContext, **extra: str) -> dict[str, str]:
        """Merge caller filters with the requester's isolation where clause.

        Args:
            requester: The caller's isolation context
            **extra: Additional equality filters

        Returns:
            Combined equality filter mapping

        Raises:
            IsolationValidationError: If extra filters name an isolation
                column already scoped by the requester
        """
        where = requester.build_where_clause(include_user=self._include_user_in_filters)
        conflicts = sorted(set(where) & set(extra))
        if conflicts:
            self._probe.filter_scope_conflict(
                requester=requester.build_log_context(),
                keys=conflicts,
            )
            raise IsolationValidationError(
                f"filters cannot override isolation scope: {', '.join(conflicts)}",
                "FILTER_SCOPE_CONFLICT",
                {"keys": conflicts},
            )
        return {**extra, **where}
