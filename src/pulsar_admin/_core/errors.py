"""Admin errors and the mapping from responses and exceptions onto them."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx


class PulsarAdminError(Exception):
    """Base class for every failure surfaced by the admin client.

    ``status_code`` is the HTTP status of the failed response, or ``0`` when
    the failure happened before a response was received.
    """

    def __init__(self, message: str, status_code: int = 0) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class MalformedPackageNameError(PulsarAdminError):
    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        detail = f"Invalid package name '{name}'"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)


class AuthenticationError(PulsarAdminError):
    pass


class ServerError(PulsarAdminError):
    """Non-2xx response from the admin service."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message, status_code)


class NotAuthorizedError(ServerError):
    pass


class NotFoundError(ServerError):
    pass


class NotAllowedError(ServerError):
    pass


class ConflictError(ServerError):
    pass


class PreconditionFailedError(ServerError):
    pass


class ServerSideError(ServerError):
    pass


class UnexpectedResponseError(PulsarAdminError):
    """Successful response whose body could not be decoded."""


class InvalidMetadataError(PulsarAdminError):
    """Metadata that cannot be encoded as a JSON object."""


class TransportFailureError(PulsarAdminError):
    """Connection, DNS or protocol failure before or during a response."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class RequestTimeoutError(TransportFailureError):
    pass


class LocalIOError(PulsarAdminError):
    """Filesystem failure reading an upload or writing a download."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class OperationInterruptedError(PulsarAdminError):
    def __init__(self, message: str = "operation interrupted") -> None:
        super().__init__(message)


_STATUS_ERRORS: dict[int, type[ServerError]] = {
    401: NotAuthorizedError,
    403: NotAuthorizedError,
    404: NotFoundError,
    405: NotAllowedError,
    409: ConflictError,
    412: PreconditionFailedError,
}


def error_for_status(status_code: int, message: str) -> ServerError:
    error_cls = _STATUS_ERRORS.get(status_code)
    if error_cls is None:
        error_cls = ServerSideError if status_code >= 500 else ServerError
    return error_cls(status_code, message)


def _reason_from_body(data: Any) -> str | None:
    if isinstance(data, dict):
        reason = data.get("reason")
        if isinstance(reason, str) and reason:
            return reason
        return None
    if isinstance(data, str) and data:
        return data
    return None


def map_response_error(response: httpx.Response) -> ServerError:
    """Build the error for a non-2xx response whose body has been read."""
    text = response.text
    try:
        reason = _reason_from_body(response.json())
    except ValueError:
        reason = None
    message = reason or text or response.reason_phrase
    return error_for_status(response.status_code, message)


def map_status_error(status_code: int, body: str) -> ServerError:
    """Build the error for a raw status and body, leaving the body as-is."""
    return error_for_status(status_code, body)


def map_exception(exc: BaseException) -> PulsarAdminError:
    if isinstance(exc, PulsarAdminError):
        return exc
    if isinstance(exc, asyncio.CancelledError):
        return OperationInterruptedError()
    if isinstance(exc, httpx.TimeoutException):
        return RequestTimeoutError(f"request timed out: {exc}", exc)
    if isinstance(exc, httpx.HTTPError):
        return TransportFailureError(f"transport failure: {exc}", exc)
    if isinstance(exc, OSError):
        return LocalIOError(f"local I/O failure: {exc}", exc)
    return TransportFailureError(f"{type(exc).__name__}: {exc}", exc)


__all__ = [
    "PulsarAdminError",
    "MalformedPackageNameError",
    "AuthenticationError",
    "ServerError",
    "NotAuthorizedError",
    "NotFoundError",
    "NotAllowedError",
    "ConflictError",
    "PreconditionFailedError",
    "ServerSideError",
    "UnexpectedResponseError",
    "InvalidMetadataError",
    "TransportFailureError",
    "RequestTimeoutError",
    "LocalIOError",
    "OperationInterruptedError",
    "error_for_status",
    "map_exception",
    "map_response_error",
    "map_status_error",
]
