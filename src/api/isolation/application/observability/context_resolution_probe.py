"""Domain probe for isolation context resolution.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events while raw identifiers (usually request headers)
are turned into an IsolationContext.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ContextResolutionProbe(Protocol):
    """Domain probe for isolation context resolution operations."""

    def context_resolved(
        self,
        isolation_level: str,
        scope: dict[str, str],
    ) -> None:
        """Record that an isolation context was resolved."""
        ...

    def invalid_identifier(
        self,
        field: str,
        raw_value: str,
    ) -> None:
        """Record that a raw identifier was not a valid UUID and was discarded."""
        ...

    def context_degraded(
        self,
        dropped_field: str,
        reason: str,
    ) -> None:
        """Record that an identifier was dropped to keep the hierarchy valid."""
        ...

    def with_context(self, context: ObservationContext) -> ContextResolutionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultContextResolutionProbe:
    """Default implementation of ContextResolutionProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultContextResolutionProbe:
        """Create a new probe with observation context bound."""
        return DefaultContextResolutionProbe(logger=self._logger, context=context)

    def context_resolved(
        self,
        isolation_level: str,
        scope: dict[str, str],
    ) -> None:
        """Record that an isolation context was resolved."""
        self._logger.debug(
            "isolation_context_resolved",
            isolation_level=isolation_level,
            **{**self._get_context_kwargs(), **scope},
        )

    def invalid_identifier(
        self,
        field: str,
        raw_value: str,
    ) -> None:
        """Record that a raw identifier was not a valid UUID and was discarded."""
        self._logger.warning(
            "isolation_context_invalid_identifier",
            field=field,
            raw_value=raw_value,
            **self._get_context_kwargs(),
        )

    def context_degraded(
        self,
        dropped_field: str,
        reason: str,
    ) -> None:
        """Record that an identifier was dropped to keep the hierarchy valid."""
        self._logger.warning(
            "isolation_context_degraded",
            dropped_field=dropped_field,
            reason=reason,
            **self._get_context_kwargs(),
        )
