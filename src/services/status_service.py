"""Loads and saves the status taxonomy through the dashboard backend."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from src.domain.enums import StatusCategory
from src.domain.errors import AuthenticationError
from src.domain.statuses import StatusRegistry, status_from_dict
from src.infrastructure.api_client import ApiClient

logger = logging.getLogger(__name__)

STATUSES_PATH = "/settings/statuses"


class StatusService:
    def __init__(self, api_client: ApiClient, registry: Optional[StatusRegistry] = None):
        self.api_client = api_client
        self.registry = registry or StatusRegistry()

    async def load(self) -> StatusRegistry:
        """Merge the backend's statuses over the defaults.

        Any failure leaves the registry reset to the defaults.
        """
        try:
            response = await self.api_client.get(STATUSES_PATH)
        except (httpx.HTTPError, AuthenticationError, ValueError) as exc:
            logger.warning("Could not load statuses from API, using defaults: %s", exc)
            self.registry = StatusRegistry()
            return self.registry

        registry = StatusRegistry()
        if isinstance(response, dict) and response.get("success") and response.get("statuses"):
            try:
                registry.merge(self._parse(response["statuses"]))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Malformed statuses from API, using defaults: %s", exc)
                registry = StatusRegistry()
        self.registry = registry
        return registry

    async def save(self) -> bool:
        try:
            await self.api_client.post(STATUSES_PATH, {"statuses": self.registry.to_dict()})
        except (httpx.HTTPError, AuthenticationError) as exc:
            logger.error("Error saving statuses: %s", exc)
            return False
        return True

    @staticmethod
    def _parse(statuses: dict) -> dict:
        # all or nothing: one bad entry discards the whole payload
        loaded = {}
        for key, entries in statuses.items():
            try:
                category = StatusCategory(key)
            except ValueError:
                logger.warning("Ignoring unknown status category %r", key)
                continue
            loaded[category] = [status_from_dict(entry, category) for entry in entries]
        return loaded
