"""
Error taxonomy shared by the distance endpoint and the client-side services.

Endpoint-side errors carry the machine-readable ``code`` and HTTP status
that the exception handlers in ``src.api.errors`` turn into JSON bodies.
"""

from __future__ import annotations

from typing import Any, Optional

from .enums import ErrorCode


class DeliveryError(Exception):
    """Base class for every domain error."""


# ── Endpoint side ─────────────────────────────────────────────────────


class EndpointError(DeliveryError):
    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500
    message: str = "Erreur lors du calcul de la distance"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.details = details

    def payload(self) -> dict[str, Any]:
        return {
            "success": False,
            "message": self.message,
            "error": self.code.value,
            "details": self.details,
        }


class ValidationError(EndpointError):
    """Malformed or out-of-range request body."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400
    message = "Données de requête invalides"


class ConfigurationError(EndpointError):
    """A server-side credential is missing.  Terminal for the request."""

    code = ErrorCode.GOOGLE_MAPS_API_KEY_NOT_SET
    status_code = 500
    message = "Clé API Google Maps non configurée"

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        body.pop("details")
        return body


class UpstreamTransportError(EndpointError):
    """Network or HTTP failure while talking to the distance provider."""

    code = ErrorCode.GOOGLE_MAPS_API_ERROR
    status_code = 500
    message = "Erreur lors de l'appel à l'API Google Maps"

    def __init__(
        self,
        message: Optional[str] = None,
        upstream_status: Optional[int] = None,
    ):
        super().__init__(message)
        self.upstream_status = upstream_status

    def payload(self) -> dict[str, Any]:
        body = super().payload()
        body.pop("details")
        body["status_code"] = self.upstream_status
        return body


class UpstreamLogicalError(EndpointError):
    """The provider answered but reported a non-OK status."""

    code = ErrorCode.GOOGLE_MAPS_API_ERROR
    status_code = 400
    message = "Erreur Google Maps API"


class RouteUnavailableError(UpstreamLogicalError):
    """The provider answered OK but the origin/destination element is unusable."""

    code = ErrorCode.DISTANCE_CALCULATION_FAILED
    message = "Impossible de calculer la distance"


class InternalError(EndpointError):
    """Anything unexpected.  ``details`` is only filled outside production."""


# ── Client side ───────────────────────────────────────────────────────


class CoordinateParseError(DeliveryError, ValueError):
    """No coordinate could be extracted from a location string."""


class DistanceCalculationError(DeliveryError):
    """Neither the proxy nor the local estimate produced a distance."""


class AuthenticationError(DeliveryError):
    """The backend rejected the session (401 / 403)."""

    def __init__(self, status_code: int):
        super().__init__(f"Authentication failed with HTTP {status_code}")
        self.status_code = status_code
