"""
Auth Client - signs up / logs in against the auth service and keeps the
issued token and user for the rest of the session.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from ..config import settings

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Signup or login was refused, or the service could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass
class AuthSession:
    """Token and user returned by the auth service."""
    token: str
    user: Dict[str, Any] = field(default_factory=dict)

    def headers(self) -> Dict[str, str]:
        """Headers for requests that need the caller's identity."""
        return {"Authorization": f"Bearer {self.token}"}


class AuthClient:
    """
    Client for the ``/signup`` and ``/login`` endpoints.
    The last successful session is kept on ``self.session``.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0):
        self.base_url = (base_url or settings.auth_base_url).rstrip("/")
        self.timeout = timeout
        self.session: Optional[AuthSession] = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    async def signup(self, name: str, email: str, password: str) -> AuthSession:
        return await self._authenticate("signup", {"name": name, "email": email, "password": password})

    async def login(self, email: str, password: str) -> AuthSession:
        return await self._authenticate("login", {"email": email, "password": password})

    def logout(self) -> None:
        self.session = None

    async def _authenticate(self, endpoint: str, payload: Dict[str, str]) -> AuthSession:
        url = f"{self.base_url}/{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Auth service unreachable: {e}", extra={"extra_fields": {"endpoint": endpoint}})
            raise AuthError("Server error. Try again.") from e

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not 200 <= resp.status_code < 300:
            message = data.get("message") or data.get("detail") or "Something went wrong"
            logger.warning(
                f"Auth {endpoint} refused: {message}",
                extra={"extra_fields": {"endpoint": endpoint, "status_code": resp.status_code}}
            )
            raise AuthError(str(message), status_code=resp.status_code)

        if "token" not in data:
            raise AuthError("Auth service response has no token", status_code=resp.status_code)

        self.session = AuthSession(token=data["token"], user=data.get("user") or {})
        logger.info(f"Auth {endpoint} succeeded")
        return self.session
