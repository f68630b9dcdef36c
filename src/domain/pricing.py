"""
Delivery Pricing Engine  (Strategy Pattern)
===========================================

Tiered schedule (inclusive upper bounds)
----------------------------------------
* distance <= 1 km       -> ``range_0_1km``
* 1 < distance <= 5 km   -> ``range_1_5km``
* 5 < distance <= 6 km   -> ``range_5_6km``
* distance > 6 km        -> ``range_5_6km + ceil(distance - 6) x additional_per_km``

Any started kilometre above 6 is billed as a full one.

Complexity: O(1) per price calculation.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional

from .entities import PricingTier

DEFAULT_TIERS = PricingTier()


# ── Strategy hierarchy ────────────────────────────────────────────────


class PricingStrategy(ABC):
    @abstractmethod
    def calculate(self, distance_km: float, tiers: PricingTier) -> float: ...


class TieredDistancePricing(PricingStrategy):
    FLAT_LIMIT_KM = 6

    def calculate(self, distance_km: float, tiers: PricingTier) -> float:
        if distance_km <= 1:
            return tiers.range_0_1km
        if distance_km <= 5:
            return tiers.range_1_5km
        if distance_km <= self.FLAT_LIMIT_KM:
            return tiers.range_5_6km
        additional_km = math.ceil(distance_km - self.FLAT_LIMIT_KM)
        return tiers.range_5_6km + additional_km * tiers.additional_per_km


# ── Engine facade ─────────────────────────────────────────────────────


class PricingEngine:
    """High-level API used by the distance service and the API layer."""

    def __init__(
        self,
        tiers: Optional[PricingTier] = None,
        strategy: Optional[PricingStrategy] = None,
    ):
        self.tiers = tiers or DEFAULT_TIERS
        self.strategy = strategy or TieredDistancePricing()

    @classmethod
    def from_settings(cls, settings) -> "PricingEngine":
        return cls(
            PricingTier(
                range_0_1km=settings.pricing_range_0_1km,
                range_1_5km=settings.pricing_range_1_5km,
                range_5_6km=settings.pricing_range_5_6km,
                additional_per_km=settings.pricing_additional_per_km,
            )
        )

    def calculate_price(
        self, distance_km: float, tiers: Optional[PricingTier] = None
    ) -> float:
        if not math.isfinite(distance_km) or distance_km < 0:
            raise ValueError(f"Distance must be a finite non-negative number, got {distance_km}")
        return self.strategy.calculate(distance_km, tiers or self.tiers)


def calculate_delivery_price(
    distance_km: float, tiers: Optional[PricingTier] = None
) -> float:
    """Price a delivery with *tiers*, or the built-in default schedule."""
    return PricingEngine(tiers).calculate_price(distance_km)
