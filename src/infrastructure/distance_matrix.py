"""
Google Distance Matrix client.

One origin/destination pair per call, no caching, no retries.  Failures
are raised as the endpoint-side error types from ``src.domain.errors`` so
the API layer can map them onto response codes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from src.domain.entities import Coordinate
from src.domain.errors import (
    ConfigurationError,
    RouteUnavailableError,
    UpstreamLogicalError,
    UpstreamTransportError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteLeg:
    distance_in_meters: int
    distance_text: str
    duration_in_seconds: int
    duration_text: str

    @property
    def distance_km(self) -> float:
        return round(self.distance_in_meters / 1000, 2)


class DistanceMatrixClient:
    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout_seconds
        self._transport = transport

    async def route(self, origin: Coordinate, destination: Coordinate) -> RouteLeg:
        """Ask the provider for the road distance between two points."""
        if not self.api_key:
            logger.error("Google Maps API Key not configured")
            raise ConfigurationError()

        params = {
            "origins": origin.as_query(),
            "destinations": destination.as_query(),
            "units": "metric",
            "key": self.api_key,
        }
        logger.info(
            "Calling Google Maps API url=%s origin=%s destination=%s",
            self.url, params["origins"], params["destinations"],
        )

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Google Maps API transport error: %s", exc)
            raise UpstreamTransportError() from exc

        if response.is_error:
            logger.error(
                "Google Maps API HTTP Error status=%d body=%s",
                response.status_code, response.text[:500],
            )
            raise UpstreamTransportError(upstream_status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Google Maps API returned a non-JSON body")
            raise UpstreamTransportError(upstream_status=response.status_code) from exc

        logger.info("Google Maps API Response status_code=%d", response.status_code)
        return self._parse_leg(data)

    @staticmethod
    def _parse_leg(data: Any) -> RouteLeg:
        status = data.get("status") if isinstance(data, dict) else None
        if status != "OK":
            error_message = data.get("error_message") if isinstance(data, dict) else None
            logger.error(
                "Google Maps API Status Error status=%s error_message=%s",
                status, error_message,
            )
            raise UpstreamLogicalError(
                f"Erreur Google Maps API: {status}", details=error_message
            )

        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError):
            element = None

        element_status = element.get("status") if isinstance(element, dict) else None
        if element_status != "OK":
            logger.error(
                "Distance Calculation Failed element_status=%s",
                element_status or "Missing element",
            )
            raise RouteUnavailableError(details=element_status or "Unknown error")

        try:
            return RouteLeg(
                distance_in_meters=int(element["distance"]["value"]),
                distance_text=element["distance"]["text"],
                duration_in_seconds=int(element["duration"]["value"]),
                duration_text=element["duration"]["text"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("Distance Calculation Failed: incomplete element %s", element)
            raise RouteUnavailableError(details="Incomplete element") from exc
