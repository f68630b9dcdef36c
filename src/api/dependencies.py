"""FastAPI dependency injection helpers."""

from src.config import Settings, settings
from src.infrastructure.distance_matrix import DistanceMatrixClient


def get_settings() -> Settings:
    return settings


def get_distance_matrix_client() -> DistanceMatrixClient:
    """Provider client built from the current settings.

    The API key is read per request so a missing key surfaces as a
    configuration error on the request rather than at startup.
    """
    return DistanceMatrixClient(
        api_key=settings.google_maps_api_key,
        url=settings.distance_matrix_url,
        timeout_seconds=settings.distance_matrix_timeout_seconds,
    )
