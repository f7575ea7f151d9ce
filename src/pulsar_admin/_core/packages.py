"""Packages management API client."""

from __future__ import annotations

import asyncio
import contextlib
import os
import uuid
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

import httpx

from .bridge import run_sync
from .dispatcher import RequestDispatcher, is_success
from .errors import (
    LocalIOError,
    PulsarAdminError,
    map_exception,
    map_response_error,
    map_status_error,
)
from .naming import PackageType, namespace_packages_path, resolve, to_path
from .types import (
    MetadataLike,
    PackageMetadata,
    build_package_metadata,
    metadata_to_dict,
    serialize_metadata,
)
from .utils import debug

if TYPE_CHECKING:
    from .config import ClientConfig
    from .transport import BaseTransport

PACKAGES_BASE_PATH = "/admin/v3/packages"
METADATA_SUFFIX = "/metadata"


def _discard(path: str) -> None:
    with contextlib.suppress(OSError):
        os.remove(path)


class BasePackagesClient:
    """Base packages client with shared async business logic."""

    def __init__(self, transport: BaseTransport, config: ClientConfig):
        self._transport = transport
        self._config = config
        self._dispatcher = RequestDispatcher(transport)

    def _path(self, rest_path: str) -> str:
        return f"{PACKAGES_BASE_PATH}/{rest_path}"

    def _stream_download_chunks(self, response: httpx.Response) -> AsyncIterator[bytes]:
        raise NotImplementedError

    async def _read_response(self, response: httpx.Response) -> None:
        raise NotImplementedError

    async def _close_response(self, response: httpx.Response) -> None:
        raise NotImplementedError

    async def _get_metadata(self, package_name: str) -> PackageMetadata:
        name = resolve(package_name)
        return await self._dispatcher.get_typed(
            self._path(to_path(name, METADATA_SUFFIX)), build_package_metadata
        )

    async def _update_metadata(self, package_name: str, metadata: MetadataLike) -> None:
        name = resolve(package_name)
        await self._dispatcher.put_entity(
            self._path(to_path(name, METADATA_SUFFIX)), metadata_to_dict(metadata)
        )

    async def _upload(
        self,
        metadata: MetadataLike,
        package_name: str,
        path: str | os.PathLike,
    ) -> None:
        # Multipart uploads go straight to the transport and interpret the raw
        # status; the error message is the unparsed response body.
        name = resolve(package_name)
        target = self._path(to_path(name))
        metadata_json = serialize_metadata(metadata)
        source = os.fspath(path)

        try:
            f = open(source, "rb")
        except OSError as exc:
            raise LocalIOError(f"cannot read '{source}': {exc}", exc) from exc

        with f:
            files = {
                "file": (os.path.basename(source), f, "application/octet-stream"),
                "metadata": (None, metadata_json, "application/json"),
            }
            try:
                response = await self._transport.send("POST", target, files=files)
            except PulsarAdminError:
                raise
            except Exception as exc:
                raise map_exception(exc) from exc

        if not is_success(response.status_code):
            raise map_status_error(response.status_code, response.text)
        debug(f"uploaded {source} to {name}")

    async def _download(self, package_name: str, path: str | os.PathLike) -> None:
        name = resolve(package_name)
        target = self._path(to_path(name))
        dst = os.fspath(path)

        try:
            response = await self._transport.send(
                "GET", target, headers={"accept": "*/*"}, stream=True
            )
        except PulsarAdminError:
            raise
        except Exception as exc:
            raise map_exception(exc) from exc

        try:
            if response.status_code != 200:
                try:
                    await self._read_response(response)
                except Exception as exc:
                    raise map_exception(exc) from exc
                raise map_response_error(response)
            await self._write_atomically(response, dst)
        finally:
            await self._close_response(response)
        debug(f"downloaded {name} to {dst}")

    async def _write_atomically(self, response: httpx.Response, dst: str) -> None:
        # Chunks land in a sibling temp file that only replaces dst once the
        # whole body has been written.
        tmp = f"{dst}.{uuid.uuid4().hex[:12]}.part"
        try:
            parent = os.path.dirname(dst)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(tmp, "wb") as f:
                async for chunk in self._stream_download_chunks(response):
                    if chunk:
                        f.write(chunk)
            os.replace(tmp, dst)
        except asyncio.CancelledError:
            _discard(tmp)
            raise
        except Exception as exc:
            _discard(tmp)
            raise map_exception(exc) from exc

    async def _delete(self, package_name: str) -> None:
        name = resolve(package_name)
        await self._dispatcher.delete_resource(self._path(to_path(name)))

    async def _list_package_versions(self, package_name: str) -> list[str]:
        name = resolve(package_name)
        return await self._dispatcher.get_list(self._path(name.versions_path()))

    async def _list_packages(self, type: str | PackageType, namespace: str) -> list[str]:
        return await self._dispatcher.get_list(
            self._path(namespace_packages_path(type, namespace))
        )


class PackagesClient(BasePackagesClient):
    def get_metadata(self, package_name: str) -> PackageMetadata:
        return run_sync(lambda: self._get_metadata(package_name))

    def update_metadata(self, package_name: str, metadata: MetadataLike) -> None:
        return run_sync(lambda: self._update_metadata(package_name, metadata))

    def upload(
        self,
        metadata: MetadataLike,
        package_name: str,
        path: str | os.PathLike,
    ) -> None:
        return run_sync(lambda: self._upload(metadata, package_name, path))

    def download(self, package_name: str, path: str | os.PathLike) -> None:
        return run_sync(lambda: self._download(package_name, path))

    def delete(self, package_name: str) -> None:
        return run_sync(lambda: self._delete(package_name))

    def list_package_versions(self, package_name: str) -> list[str]:
        return run_sync(lambda: self._list_package_versions(package_name))

    def list_packages(self, type: str | PackageType, namespace: str) -> list[str]:
        return run_sync(lambda: self._list_packages(type, namespace))

    def _stream_download_chunks(self, response: httpx.Response) -> AsyncIterator[bytes]:
        async def _iterate() -> AsyncIterator[bytes]:
            for chunk in response.iter_bytes():
                yield chunk

        return _iterate()

    async def _read_response(self, response: httpx.Response) -> None:
        response.read()

    async def _close_response(self, response: httpx.Response) -> None:
        response.close()


class AsyncPackagesClient(BasePackagesClient):
    async def get_metadata(self, package_name: str) -> PackageMetadata:
        return await self._get_metadata(package_name)

    async def update_metadata(self, package_name: str, metadata: MetadataLike) -> None:
        return await self._update_metadata(package_name, metadata)

    async def upload(
        self,
        metadata: MetadataLike,
        package_name: str,
        path: str | os.PathLike,
    ) -> None:
        return await self._upload(metadata, package_name, path)

    async def download(self, package_name: str, path: str | os.PathLike) -> None:
        return await self._download(package_name, path)

    async def delete(self, package_name: str) -> None:
        return await self._delete(package_name)

    async def list_package_versions(self, package_name: str) -> list[str]:
        return await self._list_package_versions(package_name)

    async def list_packages(self, type: str | PackageType, namespace: str) -> list[str]:
        return await self._list_packages(type, namespace)

    def _stream_download_chunks(self, response: httpx.Response) -> AsyncIterator[bytes]:
        async def _iterate() -> AsyncIterator[bytes]:
            async for chunk in response.aiter_bytes():
                yield chunk

        return _iterate()

    async def _read_response(self, response: httpx.Response) -> None:
        await response.aread()

    async def _close_response(self, response: httpx.Response) -> None:
        await response.aclose()
