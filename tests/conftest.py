"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from backend.resolver.adapters.local_reference import LocalReferenceData
from backend.resolver.cache.persistent import PersistentCache
from backend.resolver.cache.scheduler import VirtualScheduler
from backend.resolver.config import ResolverMode
from backend.resolver.orchestration.resolver import PlaceResolver
from tests.helpers import FakeProvider


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def cache(tmp_path: Path, scheduler: VirtualScheduler) -> PersistentCache:
    """Persistent cache in a temp dir; debounced flushes only run via scheduler.advance."""
    return PersistentCache(tmp_path / "cache", scheduler=scheduler)


@pytest.fixture
def make_resolver(cache: PersistentCache) -> Callable[..., PlaceResolver]:
    """Factory for resolvers sharing the temp cache.

    Usage:
        resolver = make_resolver([FakeProvider(PlaceSource.osm, [...])], mode=ResolverMode.live)
    """

    def factory(
        providers: list[FakeProvider] | None = None,
        mode: ResolverMode = ResolverMode.offline,
        **kwargs: Any,
    ) -> PlaceResolver:
        kwargs.setdefault("local_reference", LocalReferenceData())
        return PlaceResolver(
            cache=cache,
            providers={p.tag: p for p in providers or []},
            mode=mode,
            **kwargs,
        )

    return factory
