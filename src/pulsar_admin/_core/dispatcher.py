"""Typed GET/PUT/DELETE requests against the admin REST API."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from .errors import (
    PulsarAdminError,
    UnexpectedResponseError,
    map_exception,
    map_response_error,
)
from .types import build_string_list

if TYPE_CHECKING:
    from .transport import BaseTransport

T = TypeVar("T")


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def decode_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    return response.json()


class RequestDispatcher:
    """Issues requests through a transport and maps every failure.

    Coroutines either return the decoded value or raise a
    ``PulsarAdminError``; raw httpx exceptions never escape.
    """

    def __init__(self, transport: BaseTransport):
        self._transport = transport

    async def _send(self, method: str, path: str, *, json: Any | None = None) -> httpx.Response:
        try:
            response = await self._transport.send(method, path, json=json)
        except PulsarAdminError:
            raise
        except Exception as exc:
            raise map_exception(exc) from exc
        if not is_success(response.status_code):
            raise map_response_error(response)
        return response

    async def get_typed(self, path: str, decode: Callable[[Any], T]) -> T:
        response = await self._send("GET", path)
        try:
            return decode(decode_json(response))
        except (ValueError, TypeError, KeyError) as exc:
            raise UnexpectedResponseError(
                f"unexpected response body from GET {path}: {exc}",
                response.status_code,
            ) from exc

    async def put_entity(self, path: str, body: Any) -> None:
        await self._send("PUT", path, json=body)

    async def delete_resource(self, path: str) -> None:
        await self._send("DELETE", path)

    async def get_list(self, path: str) -> list[str]:
        return await self.get_typed(path, build_string_list)


__all__ = ["RequestDispatcher", "decode_json", "is_success"]
