"""Dependency injection for the Isolation bounded context.

Composes settings with the isolation application services and resolves the
caller's IsolationContext from request headers.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        context: Annotated[IsolationContext, Depends(get_isolation_context)],
    ):
        cache_key = context.build_cache_key("example", "list")
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from infrastructure.logging import bind_log_context
from infrastructure.settings import IsolationSettings, get_isolation_settings
from isolation.application.observability import (
    AccessServiceProbe,
    ContextResolutionProbe,
    DefaultAccessServiceProbe,
    DefaultContextResolutionProbe,
)
from isolation.application.services import (
    DataAccessService,
    IsolationContextResolver,
    IsolationHeaders,
)
from isolation.domain import (
    IDENTIFIER_TYPES,
    InterningIdentifierRegistry,
    IsolationContext,
    PassthroughIdentifierRegistry,
)
from shared_kernel.observability_context import ObservationContext


def configure_identifier_interning(settings: IsolationSettings) -> None:
    """Install the identifier registries chosen by settings (called at startup).

    Args:
        settings: Isolation settings; intern_identifiers selects interning or
            a registry that builds a fresh instance on every lookup
    """
    for identifier_type in IDENTIFIER_TYPES:
        if settings.intern_identifiers:
            identifier_type.use_registry(InterningIdentifierRegistry())
        else:
            identifier_type.use_registry(PassthroughIdentifierRegistry())


def get_observation_context(
    request: Request,
    settings: Annotated[IsolationSettings, Depends(get_isolation_settings)],
) -> ObservationContext:
    """Get the ObservationContext for the current request.

    Args:
        request: The incoming request
        settings: Isolation settings naming the request id header

    Returns:
        ObservationContext carrying the request id, if the caller sent one
    """
    return ObservationContext(
        request_id=request.headers.get(settings.request_id_header)
    )


def get_context_resolution_probe(
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ContextResolutionProbe:
    """Get ContextResolutionProbe instance.

    Returns:
        DefaultContextResolutionProbe bound to the request's observation context
    """
    return DefaultContextResolutionProbe().with_context(observation)


def get_isolation_context_resolver(
    settings: Annotated[IsolationSettings, Depends(get_isolation_settings)],
    probe: Annotated[ContextResolutionProbe, Depends(get_context_resolution_probe)],
) -> IsolationContextResolver:
    """Get IsolationContextResolver configured with the header names from settings.

    Args:
        settings: Isolation settings
        probe: Context resolution probe

    Returns:
        IsolationContextResolver instance
    """
    headers = IsolationHeaders(
        tenant=settings.tenant_header,
        organization=settings.organization_header,
        department=settings.department_header,
        user=settings.user_header,
    )
    return IsolationContextResolver(headers=headers, probe=probe)


async def get_isolation_context(
    request: Request,
    resolver: Annotated[
        IsolationContextResolver, Depends(get_isolation_context_resolver)
    ],
) -> IsolationContext:
    """Resolve the caller's IsolationContext from the request headers.

    Malformed or incomplete headers degrade to a broader context instead of
    failing the request. The resolved identifiers are bound into the
    structlog context so every log line of the request carries them. This
    must stay async: sync dependencies run in a worker thread on a copy of
    the request's contextvars, which would discard the binding.

    Args:
        request: The incoming request
        resolver: Isolation context resolver

    Returns:
        The caller's IsolationContext
    """
    context = resolver.resolve_headers(request.headers)
    bind_log_context(context.build_log_context())
    return context


def get_access_service_probe(
    observation: Annotated[ObservationContext, Depends(get_observation_context)],
    context: Annotated[IsolationContext, Depends(get_isolation_context)],
) -> AccessServiceProbe:
    """Get AccessServiceProbe instance.

    Returns:
        DefaultAccessServiceProbe bound to the request id and the caller's
        isolation scope
    """
    return DefaultAccessServiceProbe().with_context(
        observation.with_scope(**context.build_log_context())
    )


def get_data_access_service(
    settings: Annotated[IsolationSettings, Depends(get_isolation_settings)],
    probe: Annotated[AccessServiceProbe, Depends(get_access_service_probe)],
) -> DataAccessService:
    """Get DataAccessService instance.

    Args:
        settings: Isolation settings
        probe: Access service probe

    Returns:
        DataAccessService scoped per settings.where_clause_includes_user
    """
    return DataAccessService(
        probe=probe,
        include_user_in_filters=settings.where_clause_includes_user,
    )
