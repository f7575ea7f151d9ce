"""Authentication providers that decorate outgoing admin requests."""

from __future__ import annotations

import abc
from collections.abc import Callable

import httpx


class Authentication(abc.ABC):
    """Attaches credentials to a request before it is sent."""

    @abc.abstractmethod
    def decorate(self, request: httpx.Request) -> httpx.Request: ...


class AuthenticationDisabled(Authentication):
    def decorate(self, request: httpx.Request) -> httpx.Request:
        return request


class AuthenticationToken(Authentication):
    """Bearer token authentication.

    The token may be given as a string or as a zero-argument callable that
    returns the current token, which is invoked once per request.
    """

    def __init__(self, token: str | Callable[[], str]) -> None:
        self._token = token

    def get_token(self) -> str:
        token = self._token() if callable(self._token) else self._token
        if not token:
            raise ValueError("authentication token is empty")
        return token

    def decorate(self, request: httpx.Request) -> httpx.Request:
        # Explicit request headers take precedence.
        request.headers.setdefault("authorization", f"Bearer {self.get_token()}")
        return request


__all__ = ["Authentication", "AuthenticationDisabled", "AuthenticationToken"]
