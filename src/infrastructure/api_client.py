"""
Authentication-aware client for the dashboard backend.

The session is an explicit ``SessionContext`` handed to the client rather
than process-wide state.  When the backend answers 401 or 403 the session
is cleared and every registered ``on_auth_failure`` callback is invoked
with the failing status code; the client then raises
``AuthenticationError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx

from src.domain.errors import AuthenticationError

logger = logging.getLogger(__name__)

AUTH_FAILURE_STATUSES = frozenset({401, 403})


@dataclass
class SessionContext:
    access_token: Optional[str] = None
    user_data: Optional[dict[str, Any]] = None
    ability_rules: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token and self.user_data)

    def clear(self) -> None:
        self.access_token = None
        self.user_data = None
        self.ability_rules = []


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Optional[SessionContext] = None,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or SessionContext()
        self.timeout = timeout_seconds
        self._transport = transport
        self._auth_failure_callbacks: list[Callable[[int], None]] = []

    @classmethod
    def from_settings(cls, settings, session: Optional[SessionContext] = None) -> "ApiClient":
        return cls(settings.api_base_url, session, settings.api_timeout_seconds)

    def on_auth_failure(self, callback: Callable[[int], None]) -> Callable[[int], None]:
        """Register *callback*; usable as a decorator."""
        self._auth_failure_callbacks.append(callback)
        return callback

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.session.access_token:
            headers["Authorization"] = f"Bearer {self.session.access_token}"
        return headers

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self._transport
        ) as client:
            response = await client.request(method, url, headers=self._headers(), **kwargs)

        if response.status_code in AUTH_FAILURE_STATUSES:
            logger.warning(
                "Authentication error detected (HTTP %d). Clearing session.",
                response.status_code,
            )
            self.session.clear()
            for callback in self._auth_failure_callbacks:
                callback(response.status_code)
            raise AuthenticationError(response.status_code)

        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, json=body)
