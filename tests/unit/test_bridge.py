import asyncio
import os

import httpx
import pytest

from helpers import SERVICE_URL, RecordingStream
from pulsar_admin import (
    AsyncPulsarAdmin,
    NotFoundError,
    OperationInterruptedError,
    PulsarAdmin,
    TransportFailureError,
    blocking,
)
from pulsar_admin._core.bridge import run_sync

PACKAGE = "type://t/ns/pkg@v1"


async def _versions_handler(request: httpx.Request) -> httpx.Response:
    # Yield to the event loop so the operation really suspends.
    await asyncio.sleep(0)
    if request.url.path.endswith("/missing"):
        return httpx.Response(404, json={"reason": "Package does not exist"})
    if request.method == "GET" and request.url.path.endswith("/v1"):
        return httpx.Response(200, content=b"package-bytes")
    return httpx.Response(200, json=["v1", "v2"])


def _async_admin() -> AsyncPulsarAdmin:
    return AsyncPulsarAdmin(
        service_url=SERVICE_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(_versions_handler)),
    )


def _admin(handler) -> PulsarAdmin:
    return PulsarAdmin(
        service_url=SERVICE_URL,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestBlocking:
    def test_returns_value(self) -> None:
        async def op() -> list[str]:
            return ["v1", "v2"]

        assert blocking(op) == ["v1", "v2"]

    def test_waits_for_async_client_operation(self) -> None:
        admin = _async_admin()

        versions = blocking(lambda: admin.packages.list_package_versions("type://t/ns/pkg"))

        assert versions == ["v1", "v2"]

    def test_async_client_download(self, tmp_path) -> None:
        admin = _async_admin()
        dst = tmp_path / "out" / "file.bin"

        blocking(lambda: admin.packages.download(PACKAGE, dst))

        assert dst.read_bytes() == b"package-bytes"

    def test_async_client_error_is_reraised(self) -> None:
        admin = _async_admin()

        with pytest.raises(NotFoundError) as exc_info:
            blocking(lambda: admin.packages.list_package_versions("type://t/ns/missing"))

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_inside_running_loop(self) -> None:
        admin = _async_admin()

        versions = blocking(lambda: admin.packages.list_package_versions("type://t/ns/pkg"))

        assert versions == ["v1", "v2"]

    def test_reraises_admin_error_unchanged(self) -> None:
        error = NotFoundError(404, "Package does not exist")

        async def op() -> None:
            raise error

        with pytest.raises(NotFoundError) as exc_info:
            blocking(op)

        assert exc_info.value is error

    def test_wraps_other_errors(self) -> None:
        async def op() -> None:
            await asyncio.sleep(0)
            raise KeyError("boom")

        with pytest.raises(TransportFailureError) as exc_info:
            blocking(op)

        assert isinstance(exc_info.value.__cause__, KeyError)
        assert exc_info.value.status_code == 0

    def test_maps_cancellation_to_interrupted(self) -> None:
        async def op() -> None:
            await asyncio.sleep(0)
            raise asyncio.CancelledError()

        with pytest.raises(OperationInterruptedError, match="interrupted"):
            blocking(op)

    def test_starts_operation_once(self) -> None:
        calls = []

        async def op() -> int:
            calls.append(1)
            await asyncio.sleep(0)
            return len(calls)

        assert blocking(op) == 1
        assert calls == [1]


class TestRunSync:
    def test_drives_download_chunks_through_async_generators(self, tmp_path) -> None:
        chunks = [bytes([i]) * 1024 for i in range(32)]

        def handler(request):
            return httpx.Response(200, stream=RecordingStream(chunks))

        dst = tmp_path / "file.bin"
        with _admin(handler) as admin:
            admin.packages.download(PACKAGE, dst)

        assert dst.read_bytes() == b"".join(chunks)

    def test_cancelled_download_cleans_up(self, tmp_path) -> None:
        stream = RecordingStream([b"part-1"], asyncio.CancelledError())

        def handler(request):
            return httpx.Response(200, stream=stream)

        dst = tmp_path / "file.bin"
        dst.write_bytes(b"previous")
        with _admin(handler) as admin:
            with pytest.raises(OperationInterruptedError):
                admin.packages.download(PACKAGE, dst)

        assert dst.read_bytes() == b"previous"
        assert os.listdir(tmp_path) == ["file.bin"]
        assert stream.closed

    def test_suspending_operation_needs_blocking(self) -> None:
        async def op() -> str:
            await asyncio.sleep(0)
            return "done"

        with pytest.raises(TransportFailureError, match="suspended on a blocking transport"):
            run_sync(op)

        assert blocking(op) == "done"

    def test_returns_value(self) -> None:
        async def op() -> list[str]:
            return ["v1"]

        assert run_sync(op) == ["v1"]
