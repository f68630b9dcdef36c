"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ── Requests ──────────────────────────────────────────────────────────


class LatLng(BaseModel):
    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class DistanceMatrixRequest(BaseModel):
    origin: LatLng
    destination: LatLng


# ── Responses ─────────────────────────────────────────────────────────


class DistanceMatrixData(BaseModel):
    distance: float = Field(..., description="Road distance in km, 2 decimals.")
    distance_in_meters: int
    distance_text: str
    duration: str
    duration_in_seconds: int
    origin: LatLng
    destination: LatLng


class DistanceMatrixResponse(BaseModel):
    success: bool = True
    data: DistanceMatrixData


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str
    details: Any = None
    status_code: Optional[int] = None


class HealthResponse(BaseModel):
    status: str = "ok"
