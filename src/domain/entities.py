"""
Value objects exchanged between the parser, the distance service and the
pricing engine.

All of them are frozen: a calculation creates them once and never mutates
them afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            raise ValueError(f"Coordinate must be finite, got ({self.lat}, {self.lng})")

    @property
    def in_range(self) -> bool:
        """True when lat is within [-90, 90] and lng within [-180, 180]."""
        return -90 <= self.lat <= 90 and -180 <= self.lng <= 180

    def as_query(self) -> str:
        """``lat,lng`` as the Distance Matrix API expects it."""
        return f"{self.lat},{self.lng}"

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class DistanceResult:
    distance_km: float
    duration_text: str
    distance_text: str
    is_estimated: bool = False


@dataclass(frozen=True)
class PricingTier:
    range_0_1km: float = 375.0
    range_1_5km: float = 500.0
    range_5_6km: float = 600.0
    additional_per_km: float = 100.0

    def __post_init__(self) -> None:
        for name in ("range_0_1km", "range_1_5km", "range_5_6km", "additional_per_km"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
