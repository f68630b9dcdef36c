"""
Distance Service
================

Client-side orchestration of a delivery distance:

1. Parse both endpoints (``parse_coordinates``).
2. Ask the backend proxy (``POST /distance-matrix``) for the road distance.
3. On *any* proxy or provider failure, estimate it locally with
   ``estimate_road_distance`` (haversine x 1.3).

Exactly one remote attempt is made per calculation; there is no retry.
Parse failures are never recovered: there is nothing to estimate from.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

from src.domain.coordinates import SUPPORTED_FORMATS, parse_coordinates
from src.domain.distance import estimate_road_distance
from src.domain.entities import Coordinate, DistanceResult, PricingTier
from src.domain.errors import CoordinateParseError, DistanceCalculationError
from src.domain.pricing import PricingEngine
from src.infrastructure.api_client import ApiClient

logger = logging.getLogger(__name__)

DISTANCE_MATRIX_PATH = "/distance-matrix"


class DistanceService:
    def __init__(self, api_client: ApiClient, pricing: Optional[PricingEngine] = None):
        self.api_client = api_client
        self.pricing = pricing or PricingEngine()

    # ── Public API ────────────────────────────────────────────────────

    async def calculate_distance(
        self, origin: Optional[Coordinate], destination: Optional[Coordinate]
    ) -> DistanceResult:
        if origin is None or destination is None:
            raise ValueError("Origin and destination coordinates are required")

        result = await self._from_proxy(origin, destination)
        if result is not None:
            return result

        try:
            estimated = estimate_road_distance(origin, destination)
        except (ValueError, OverflowError) as exc:
            raise DistanceCalculationError(
                "Unable to calculate distance. Please check your coordinates."
            ) from exc
        logger.warning(
            "Using fallback distance calculation: %.2f km (estimated)",
            estimated.distance_km,
        )
        return estimated

    async def calculate_distance_from_urls(
        self, pickup_input: Optional[str], dropoff_input: Optional[str]
    ) -> DistanceResult:
        """Parse two location strings and compute the distance between them."""
        pickup = self._parse_location(pickup_input, "pickup")
        dropoff = self._parse_location(dropoff_input, "dropoff")
        return await self.calculate_distance(pickup, dropoff)

    def calculate_delivery_price(
        self, distance_km: float, tiers: Optional[PricingTier] = None
    ) -> float:
        return self.pricing.calculate_price(distance_km, tiers)

    # ── Diagnostics ───────────────────────────────────────────────────

    @staticmethod
    def check_coordinate_parsing(text: Optional[str]) -> dict[str, Any]:
        result = parse_coordinates(text)
        logger.debug("Parsed %r -> %s", text, result)
        return {"input": text, "result": result, "is_valid": result is not None}

    async def check_distance_calculation(
        self, pickup_input: Optional[str], dropoff_input: Optional[str]
    ) -> dict[str, Any]:
        try:
            result = await self.calculate_distance_from_urls(pickup_input, dropoff_input)
        except (CoordinateParseError, DistanceCalculationError, ValueError) as exc:
            return {"success": False, "error": str(exc)}
        return {"success": True, "result": result}

    # ── Internals ─────────────────────────────────────────────────────

    @staticmethod
    def _parse_location(text: Optional[str], side: str) -> Coordinate:
        coordinate = parse_coordinates(text)
        if coordinate is None:
            raise CoordinateParseError(
                f"Could not extract coordinates from {side} location. "
                f"Supported formats:\n{SUPPORTED_FORMATS}"
            )
        if not coordinate.in_range:
            raise CoordinateParseError(
                f"Coordinates of {side} location are out of range "
                f"(lat={coordinate.lat}, lng={coordinate.lng}); latitude must be "
                "within [-90, 90] and longitude within [-180, 180]"
            )
        return coordinate

    async def _from_proxy(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[DistanceResult]:
        body = {"origin": origin.to_dict(), "destination": destination.to_dict()}
        logger.info("Requesting %s body=%s", DISTANCE_MATRIX_PATH, body)
        try:
            response = await self.api_client.post(DISTANCE_MATRIX_PATH, body)
        except Exception as exc:
            # transport errors, non-2xx answers and rejected sessions alike
            logger.warning("Backend distance calculation failed, using fallback: %s", exc)
            return None

        if not (isinstance(response, dict) and response.get("success") and response.get("data")):
            logger.warning("Backend distance calculation unsuccessful: %s", response)
            return None

        data = response["data"]
        try:
            distance = float(data["distance"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Backend returned no usable distance: %s", data)
            return None
        if not math.isfinite(distance) or distance < 0:
            logger.warning("Backend returned an invalid distance: %s", data["distance"])
            return None
        return DistanceResult(
            distance_km=distance,
            duration_text=data.get("duration") or "Unknown",
            distance_text=data.get("distance_text") or f"{distance:.1f} km",
            is_estimated=False,
        )
