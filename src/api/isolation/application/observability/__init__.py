"""Domain-Oriented Observability for the Isolation application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from isolation.application.observability.access_service_probe import (
    AccessServiceProbe,
    DefaultAccessServiceProbe,
)
from isolation.application.observability.context_resolution_probe import (
    ContextResolutionProbe,
    DefaultContextResolutionProbe,
)

__all__ = [
    "AccessServiceProbe",
    "DefaultAccessServiceProbe",
    "ContextResolutionProbe",
    "DefaultContextResolutionProbe",
]
