"""Pulsar admin clients with namespaced sub-clients."""

from __future__ import annotations

from typing import Any

import httpx

from .auth import Authentication
from .config import DEFAULT_TIMEOUT, ClientConfig, _default_service_url
from .bridge import run_inline
from .packages import AsyncPackagesClient, PackagesClient
from .transport import AsyncTransport, BlockingTransport


def _build_config(
    service_url: str | None,
    auth: Authentication | None,
    timeout: float | None,
    read_timeout: float | None,
    verify: bool | str,
    headers: dict[str, str] | None,
) -> ClientConfig:
    effective_timeout = DEFAULT_TIMEOUT if timeout is None else timeout
    return ClientConfig(
        service_url=service_url or _default_service_url(),
        auth=auth,
        timeout=effective_timeout,
        read_timeout=effective_timeout if read_timeout is None else read_timeout,
        verify=verify,
        headers=dict(headers or {}),
    )


class PulsarAdmin:
    """Synchronous Pulsar admin client."""

    def __init__(
        self,
        *,
        service_url: str | None = None,
        auth: Authentication | None = None,
        timeout: float | None = None,
        read_timeout: float | None = None,
        verify: bool | str = True,
        headers: dict[str, str] | None = None,
        http_client: httpx.Client | None = None,
    ):
        self._config = _build_config(service_url, auth, timeout, read_timeout, verify, headers)
        self._transport = BlockingTransport(self._config, http_client)
        self.packages = PackagesClient(self._transport, self._config)

    def close(self) -> None:
        run_inline(self._transport.close())

    def __enter__(self) -> PulsarAdmin:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncPulsarAdmin:
    """Asynchronous Pulsar admin client."""

    def __init__(
        self,
        *,
        service_url: str | None = None,
        auth: Authentication | None = None,
        timeout: float | None = None,
        read_timeout: float | None = None,
        verify: bool | str = True,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._config = _build_config(service_url, auth, timeout, read_timeout, verify, headers)
        self._transport = AsyncTransport(self._config, http_client)
        self.packages = AsyncPackagesClient(self._transport, self._config)

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> AsyncPulsarAdmin:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
