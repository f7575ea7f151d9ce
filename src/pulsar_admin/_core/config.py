"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .auth import Authentication, AuthenticationDisabled, AuthenticationToken

DEFAULT_SERVICE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 60.0


def _default_service_url() -> str:
    return os.getenv("PULSAR_ADMIN_URL") or DEFAULT_SERVICE_URL


@dataclass
class ClientConfig:
    """Admin client configuration."""

    service_url: str = field(default_factory=_default_service_url)
    auth: Authentication | None = None
    timeout: float = DEFAULT_TIMEOUT
    read_timeout: float = DEFAULT_TIMEOUT
    verify: bool | str = True
    headers: dict[str, str] = field(default_factory=dict)

    def resolve_auth(self) -> Authentication:
        if self.auth is not None:
            return self.auth
        env_token = os.getenv("PULSAR_AUTH_TOKEN")
        if env_token:
            return AuthenticationToken(env_token)
        return AuthenticationDisabled()

    def get_headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            **self.headers,
        }

    def build_url(self, path: str) -> str:
        return self.service_url.rstrip("/") + "/" + path.lstrip("/")
