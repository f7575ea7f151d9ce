"""Client for the Pulsar packages management admin API."""

from ._core.auth import Authentication, AuthenticationDisabled, AuthenticationToken
from ._core.bridge import blocking
from ._core.client import AsyncPulsarAdmin, PulsarAdmin
from ._core.config import ClientConfig
from ._core.errors import (
    AuthenticationError,
    ConflictError,
    InvalidMetadataError,
    LocalIOError,
    MalformedPackageNameError,
    NotAllowedError,
    NotAuthorizedError,
    NotFoundError,
    OperationInterruptedError,
    PreconditionFailedError,
    PulsarAdminError,
    RequestTimeoutError,
    ServerError,
    ServerSideError,
    TransportFailureError,
    UnexpectedResponseError,
)
from ._core.naming import NamespaceName, PackageName, PackageType, resolve, to_path
from ._core.packages import AsyncPackagesClient, PackagesClient
from ._core.types import PackageMetadata

__all__ = [
    "PulsarAdmin",
    "AsyncPulsarAdmin",
    "PackagesClient",
    "AsyncPackagesClient",
    "ClientConfig",
    "Authentication",
    "AuthenticationDisabled",
    "AuthenticationToken",
    "blocking",
    "PackageMetadata",
    "PackageName",
    "PackageType",
    "NamespaceName",
    "resolve",
    "to_path",
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
]
