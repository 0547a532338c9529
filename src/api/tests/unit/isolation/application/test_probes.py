"""Unit tests for the isolation application probes.

Verifies that the default structlog implementations emit the expected
event names with their fields and any bound observation context.
"""

from unittest.mock import MagicMock

from isolation.application.observability import (
    DefaultAccessServiceProbe,
    DefaultContextResolutionProbe,
)
from shared_kernel.observability_context import ObservationContext


class TestDefaultContextResolutionProbe:
    """Tests for DefaultContextResolutionProbe."""

    def test_context_resolved_logs_scope(self):
        logger = MagicMock()
        probe = DefaultContextResolutionProbe(logger=logger)

        probe.context_resolved(isolation_level="tenant", scope={"tenant_id": "t"})

        logger.debug.assert_called_once_with(
            "isolation_context_resolved",
            isolation_level="tenant",
            tenant_id="t",
        )

    def test_invalid_identifier_logs_warning(self):
        logger = MagicMock()
        probe = DefaultContextResolutionProbe(logger=logger)

        probe.invalid_identifier(field="tenant_id", raw_value="bad")

        logger.warning.assert_called_once_with(
            "isolation_context_invalid_identifier",
            field="tenant_id",
            raw_value="bad",
        )

    def test_context_degraded_logs_warning(self):
        logger = MagicMock()
        probe = DefaultContextResolutionProbe(logger=logger)

        probe.context_degraded(dropped_field="department_id", reason="why")

        logger.warning.assert_called_once_with(
            "isolation_context_degraded",
            dropped_field="department_id",
            reason="why",
        )

    def test_with_context_includes_request_metadata(self):
        logger = MagicMock()
        probe = DefaultContextResolutionProbe(logger=logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.invalid_identifier(field="user_id", raw_value="bad")

        logger.warning.assert_called_once_with(
            "isolation_context_invalid_identifier",
            field="user_id",
            raw_value="bad",
            request_id="req-1",
        )


class TestDefaultAccessServiceProbe:
    """Tests for DefaultAccessServiceProbe."""

    def test_access_granted_logs_debug(self):
        logger = MagicMock()
        probe = DefaultAccessServiceProbe(logger=logger)

        probe.access_granted(
            requester={"tenant_id": "t"}, data_level="tenant", sharing_level=None
        )

        logger.debug.assert_called_once_with(
            "data_access_granted",
            requester={"tenant_id": "t"},
            data_level="tenant",
            sharing_level=None,
        )

    def test_access_denied_logs_info(self):
        logger = MagicMock()
        probe = DefaultAccessServiceProbe(logger=logger)

        probe.access_denied(
            requester={"tenant_id": "t"}, data_level="tenant", sharing_level="tenant"
        )

        logger.info.assert_called_once_with(
            "data_access_denied",
            requester={"tenant_id": "t"},
            data_level="tenant",
            sharing_level="tenant",
        )

    def test_records_filtered_reports_denied_count(self):
        logger = MagicMock()
        probe = DefaultAccessServiceProbe(logger=logger)

        probe.records_filtered(requester={}, total=5, accessible=3)

        logger.debug.assert_called_once_with(
            "data_access_records_filtered",
            requester={},
            total=5,
            accessible=3,
            denied=2,
        )

    def test_filter_scope_conflict_logs_warning(self):
        logger = MagicMock()
        probe = DefaultAccessServiceProbe(logger=logger).with_context(
            ObservationContext(request_id="req-2", tenant_id="t")
        )

        probe.filter_scope_conflict(requester={"tenant_id": "t"}, keys=["tenant_id"])

        logger.warning.assert_called_once_with(
            "data_access_filter_scope_conflict",
            requester={"tenant_id": "t"},
            keys=["tenant_id"],
            request_id="req-2",
            tenant_id="t",
        )
