"""Protocol for data access service observability.

Defines the interface for domain probes that capture access decisions made
by the data access service.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessServiceProbe(Protocol):
    """Domain probe for data access service operations."""

    def access_granted(
        self,
        requester: dict[str, str],
        data_level: str,
        sharing_level: str | None,
    ) -> None:
        """Record that a requester was allowed to read a piece of data."""
        ...

    def access_denied(
        self,
        requester: dict[str, str],
        data_level: str,
        sharing_level: str | None,
    ) -> None:
        """Record that a requester was refused a piece of data."""
        ...

    def records_filtered(
        self,
        requester: dict[str, str],
        total: int,
        accessible: int,
    ) -> None:
        """Record the outcome of filtering a batch of records."""
        ...

    def filter_scope_conflict(
        self,
        requester: dict[str, str],
        keys: list[str],
    ) -> None:
        """Record that extra filters tried to override isolation scope."""
        ...

    def with_context(self, context: ObservationContext) -> AccessServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessServiceProbe:
    """Default implementation of AccessServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAccessServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessServiceProbe(logger=self._logger, context=context)

    def access_granted(
        self,
        requester: dict[str, str],
        data_level: str,
        sharing_level: str | None,
    ) -> None:
        """Record that a requester was allowed to read a piece of data."""
        self._logger.debug(
            "data_access_granted",
            requester=requester,
            data_level=data_level,
            sharing_level=sharing_level,
            **self._get_context_kwargs(),
        )

    def access_denied(
        self,
        requester: dict[str, str],
        data_level: str,
        sharing_level: str | None,
    ) -> None:
        """Record that a requester was refused a piece of data."""
        self._logger.info(
            "data_access_denied",
            requester=requester,
            data_level=data_level,
            sharing_level=sharing_level,
            **self._get_context_kwargs(),
        )

    def records_filtered(
        self,
        requester: dict[str, str],
        total: int,
        accessible: int,
    ) -> None:
        """Record the outcome of filtering a batch of records."""
        self._logger.debug(
            "data_access_records_filtered",
            requester=requester,
            total=total,
            accessible=accessible,
            denied=total - accessible,
            **self._get_context_kwargs(),
        )

    def filter_scope_conflict(
        self,
        requester: dict[str, str],
        keys: list[str],
    ) -> None:
        """Record that extra filters tried to override isolation scope."""
        self._logger.warning(
            "data_access_filter_scope_conflict",
            requester=requester,
            keys=keys,
            **self._get_context_kwargs(),
        )
