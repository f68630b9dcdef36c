"""Helpers shared by the test modules for faking the Distance Matrix provider."""

from typing import Any, Callable, Optional

import httpx

from src.infrastructure.distance_matrix import DistanceMatrixClient

PROVIDER_URL = "https://maps.example.test/distancematrix/json"


def provider_payload(
    meters: int = 5230,
    seconds: int = 780,
    distance_text: str = "5.2 km",
    duration_text: str = "13 mins",
) -> dict[str, Any]:
    """A successful Distance Matrix body for a single pair."""
    return {
        "status": "OK",
        "origin_addresses": ["Lomé, Togo"],
        "destination_addresses": ["Lomé, Togo"],
        "rows": [
            {
                "elements": [
                    {
                        "status": "OK",
                        "distance": {"value": meters, "text": distance_text},
                        "duration": {"value": seconds, "text": duration_text},
                    }
                ]
            }
        ],
    }


def make_provider(
    handler: Callable[[httpx.Request], httpx.Response],
    api_key: Optional[str] = "test-key",
) -> DistanceMatrixClient:
    return DistanceMatrixClient(
        api_key=api_key,
        url=PROVIDER_URL,
        timeout_seconds=10,
        transport=httpx.MockTransport(handler),
    )


