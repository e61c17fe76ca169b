"""Provider adapter protocol and shared HTTP plumbing."""

from typing import Any, ClassVar, Protocol

import httpx

from backend.resolver.models.common import PlaceSource
from backend.resolver.models.places import UnresolvedPlace

DEFAULT_RESULT_LIMIT = 5


# Exception types
class ProviderError(Exception):
    """Provider search failed."""

    pass


class ProviderNotConfiguredError(ProviderError):
    """Provider is missing credentials."""

    pass


class ProviderHTTPError(ProviderError):
    """Provider returned a non-success status or an unreadable body."""

    pass


class ProviderTimeoutError(ProviderError):
    """Provider did not answer within its timeout."""

    pass


class PlaceProvider(Protocol):
    """One geodata vendor."""

    tag: ClassVar[PlaceSource]

    async def search(
        self, query: UnresolvedPlace, location_hint: str, limit: int = DEFAULT_RESULT_LIMIT
    ) -> list[dict[str, Any]]:
        """Return raw candidate records for ``query``."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...


def location_hint_for(place: UnresolvedPlace) -> str:
    """``"neighborhood, city, country"`` or ``"city, country"``."""
    if place.neighborhood:
        return f"{place.neighborhood}, {place.city}, {place.country}"
    return f"{place.city}, {place.country}"


class HTTPProvider:
    """Base for httpx-backed adapters.

    Owns a client unless one is injected (tests pass a client built on
    ``httpx.MockTransport``).
    """

    tag: ClassVar[PlaceSource]

    def __init__(self, client: httpx.AsyncClient | None = None, timeout_s: float = 5.0) -> None:
        self._timeout_s = timeout_s
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def aclose(self) -> None:
        """Close the underlying client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body.

        Raises:
            ProviderTimeoutError: On connect/read timeout
            ProviderHTTPError: On non-2xx status, transport error or bad JSON
        """
        try:
            response = await self._client.request(method, url, timeout=self._timeout_s, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"{self.tag.value} timed out") from e
        except httpx.HTTPStatusError as e:
            raise ProviderHTTPError(
                f"{self.tag.value} returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderHTTPError(f"{self.tag.value} request failed: {type(e).__name__}") from e
        except ValueError as e:
            raise ProviderHTTPError(f"{self.tag.value} returned invalid JSON") from e
