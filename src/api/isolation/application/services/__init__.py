"""Application services for the Isolation bounded context.

Application services wrap the IsolationContext entity for the read paths and
request handling of other contexts.
"""

from isolation.application.services.access_service import DataAccessService
from isolation.application.services.context_resolver import (
    IsolationContextResolver,
    IsolationHeaders,
)

__all__ = [
    "DataAccessService",
    "IsolationContextResolver",
    "IsolationHeaders",
]
