"""
Shared test fixtures.

The Google Distance Matrix provider is replaced by an ``httpx.MockTransport``
so tests run without network access or an API key.
"""

from typing import Callable, Optional

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.domain.entities import Coordinate
from tests.helpers import make_provider, provider_payload

# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def lome_origin() -> Coordinate:
    return Coordinate(lat=6.1319, lng=1.2228)


@pytest.fixture
def lome_destination() -> Coordinate:
    return Coordinate(lat=6.1725, lng=1.2314)


@pytest.fixture
def provider_calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def app_factory(provider_calls):
    """Build the app with the provider client overridden.

    ``handler`` answers the provider requests; ``None`` for ``api_key``
    simulates a missing ``GOOGLE_MAPS_API_KEY``.
    """

    def _build(
        handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        api_key: Optional[str] = "test-key",
    ):
        from src.api.app import create_app
        from src.api.dependencies import get_distance_matrix_client

        def _record(request: httpx.Request) -> httpx.Response:
            provider_calls.append(request)
            if handler is None:
                return httpx.Response(200, json=provider_payload())
            return handler(request)

        app = create_app()
        app.dependency_overrides[get_distance_matrix_client] = lambda: make_provider(
            _record, api_key
        )
        return app

    return _build


@pytest_asyncio.fixture
async def client(app_factory):
    """AsyncClient against the app with a healthy provider."""
    transport = ASGITransport(app=app_factory())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
