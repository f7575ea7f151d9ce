"""Transport layer for HTTP operations."""

from __future__ import annotations

import abc
from typing import Any

import httpx

from .config import ClientConfig
from .errors import AuthenticationError
from .utils import debug


def _timeout(config: ClientConfig) -> httpx.Timeout:
    return httpx.Timeout(config.timeout, read=config.read_timeout)


class BaseTransport(abc.ABC):
    """Abstract transport with async interface.

    Every request is decorated by the configured authentication provider
    right before it is handed to httpx.
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self._auth = config.resolve_auth()

    def _decorate(self, request: httpx.Request) -> httpx.Request:
        try:
            return self._auth.decorate(request)
        except Exception as exc:
            raise AuthenticationError(f"failed to authenticate request: {exc}") from exc

    def _build_request(
        self,
        client: httpx.Client | httpx.AsyncClient,
        method: str,
        path: str,
        *,
        json: Any | None,
        files: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> httpx.Request:
        url = self.config.build_url(path)
        request_headers = self.config.get_headers()
        if headers:
            request_headers.update(headers)
        request = client.build_request(
            method,
            url,
            json=json,
            files=files,
            headers=request_headers,
        )
        debug(f"{method} {url}")
        return self._decorate(request)

    @abc.abstractmethod
    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response: ...

    @abc.abstractmethod
    async def close(self) -> None: ...


class BlockingTransport(BaseTransport):
    """Sync I/O transport. Methods are async def but don't suspend."""

    def __init__(self, config: ClientConfig, client: httpx.Client | None = None):
        super().__init__(config)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=_timeout(self.config),
                verify=self.config.verify,
            )
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response:
        client = self._get_client()
        request = self._build_request(
            client, method, path, json=json, files=files, headers=headers
        )
        return client.send(request, stream=stream)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None


class AsyncTransport(BaseTransport):
    """Async I/O transport using httpx.AsyncClient."""

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None):
        super().__init__(config)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=_timeout(self.config),
                verify=self.config.verify,
            )
        return self._client

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        files: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        stream: bool = False,
    ) -> httpx.Response:
        client = self._get_client()
        request = self._build_request(
            client, method, path, json=json, files=files, headers=headers
        )
        return await client.send(request, stream=stream)

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
