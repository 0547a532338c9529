"""Unit test fixtures for the isolation model."""

import pytest

from infrastructure.settings import get_isolation_settings, get_settings
from isolation.domain import IDENTIFIER_TYPES, InterningIdentifierRegistry


@pytest.fixture(autouse=True)
def fresh_identifier_registries():
    """Give every test empty interning registries."""
    for identifier_type in IDENTIFIER_TYPES:
        identifier_type.use_registry(InterningIdentifierRegistry())
    yield
    for identifier_type in IDENTIFIER_TYPES:
        identifier_type.use_registry(InterningIdentifierRegistry())


@pytest.fixture(autouse=True)
def fresh_settings_cache():
    """Drop cached settings so env overrides in one test do not leak."""
    get_settings.cache_clear()
    get_isolation_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_isolation_settings.cache_clear()
