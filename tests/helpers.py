"""Test doubles for the admin HTTP API."""

import asyncio
import re

import httpx

SERVICE_URL = "http://pulsar.test:8080"
PACKAGES = "/admin/v3/packages"


def parse_multipart(request: httpx.Request) -> dict[str, tuple[str, bytes]]:
    """Split a multipart/form-data request into ``{name: (headers, body)}``."""
    boundary = request.headers["content-type"].split("boundary=", 1)[1].encode()
    parts: dict[str, tuple[str, bytes]] = {}
    for chunk in request.content.split(b"--" + boundary)[1:-1]:
        head, _, body = chunk[2:].partition(b"\r\n\r\n")
        headers = head.decode()
        match = re.search(r'name="([^"]+)"', headers)
        assert match is not None
        parts[match.group(1)] = (headers, body[:-2])
    return parts


class RecordingStream(httpx.SyncByteStream, httpx.AsyncByteStream):
    """Response body that records being closed.

    When ``error`` is given it is raised after the chunks, as if the
    connection dropped mid-body.
    """

    def __init__(self, chunks: list[bytes], error: BaseException | None = None) -> None:
        self._chunks = chunks
        self._error = error
        self.closed = False

    def __iter__(self):
        yield from self._chunks
        if self._error is not None:
            raise self._error

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self.closed = True

    async def aclose(self) -> None:
        self.closed = True


def truncated(chunks: list[bytes]) -> RecordingStream:
    return RecordingStream(chunks, httpx.ReadError("connection dropped"))


class StalledStream(httpx.AsyncByteStream):
    """Async body that sends one chunk and then never finishes."""

    def __init__(self, first: bytes) -> None:
        self._first = first
        self.stalled = asyncio.Event()
        self.closed = False

    async def __aiter__(self):
        yield self._first
        self.stalled.set()
        await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


class FakePackageServer:
    """In-memory packages endpoint for ``httpx.MockTransport``.

    Stores uploaded files by REST path and serves them back on GET.
    """

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.metadata: dict[str, bytes] = {}
        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        override = self.responses.get((request.method, path))
        if override is not None:
            return override
        if request.method == "POST":
            parts = parse_multipart(request)
            self.files[path] = parts["file"][1]
            self.metadata[path] = parts["metadata"][1]
            return httpx.Response(204)
        if request.method == "GET" and path in self.files:
            return httpx.Response(200, content=self.files[path])
        return httpx.Response(404, json={"reason": "Package does not exist"})

