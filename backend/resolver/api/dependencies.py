"""FastAPI dependencies."""

from fastapi import Request

from backend.resolver.orchestration.resolver import PlaceResolver


def get_resolver(request: Request) -> PlaceResolver:
    """Resolver owned by the application lifespan."""
    resolver: PlaceResolver = request.app.state.resolver
    return resolver
