"""Package and namespace names, and their REST paths."""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass
from enum import Enum

from .errors import MalformedPackageNameError

DEFAULT_VERSION = "latest"

_TYPE_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_ENTITY_RE = re.compile(r"^[-=:.\w]+$")


class PackageType(str, Enum):
    FUNCTION = "function"
    SINK = "sink"
    SOURCE = "source"


def _quote(segment: str) -> str:
    return urllib.parse.quote(segment, safe="=:@")


@dataclass(frozen=True, slots=True)
class NamespaceName:
    tenant: str
    namespace: str

    def __str__(self) -> str:
        return f"{self.tenant}/{self.namespace}"


@dataclass(frozen=True, slots=True)
class PackageName:
    type: str
    tenant: str
    namespace: str
    name: str
    version: str = DEFAULT_VERSION

    @property
    def namespace_name(self) -> NamespaceName:
        return NamespaceName(self.tenant, self.namespace)

    @property
    def complete_name(self) -> str:
        return f"{self.type}://{self.tenant}/{self.namespace}/{self.name}"

    def __str__(self) -> str:
        return f"{self.complete_name}@{self.version}"

    def to_rest_path(self) -> str:
        return "/".join(
            _quote(part)
            for part in (self.type, self.tenant, self.namespace, self.name, self.version)
        )

    def versions_path(self) -> str:
        return "/".join(_quote(part) for part in (self.type, self.tenant, self.namespace, self.name))


def _check_entity(value: str, kind: str, original: str) -> None:
    if not value:
        raise MalformedPackageNameError(original, f"{kind} is empty")
    if not _ENTITY_RE.match(value):
        raise MalformedPackageNameError(original, f"invalid {kind} '{value}'")


def resolve_namespace(namespace: str) -> NamespaceName:
    parts = namespace.split("/")
    if len(parts) != 2:
        raise MalformedPackageNameError(namespace, "namespace must be 'tenant/namespace'")
    tenant, local_name = parts
    _check_entity(tenant, "tenant", namespace)
    _check_entity(local_name, "namespace", namespace)
    return NamespaceName(tenant, local_name)


def resolve(package_name: str) -> PackageName:
    """Parse ``type://tenant/namespace/name[@version]``."""
    if not isinstance(package_name, str) or "://" not in package_name:
        raise MalformedPackageNameError(str(package_name), "missing '://'")

    pkg_type, rest = package_name.split("://", 1)
    if not _TYPE_RE.match(pkg_type):
        raise MalformedPackageNameError(package_name, f"invalid package type '{pkg_type}'")

    if rest.count("@") > 1:
        raise MalformedPackageNameError(package_name, "more than one '@'")
    path, _, version = rest.partition("@")

    parts = path.split("/")
    if len(parts) != 3:
        raise MalformedPackageNameError(
            package_name, "expected 'tenant/namespace/name' after the package type"
        )
    tenant, namespace, name = parts
    _check_entity(tenant, "tenant", package_name)
    _check_entity(namespace, "namespace", package_name)
    if not name:
        raise MalformedPackageNameError(package_name, "name is empty")

    return PackageName(pkg_type, tenant, namespace, name, version or DEFAULT_VERSION)


def to_path(package: PackageName, suffix: str | None = None) -> str:
    return package.to_rest_path() + (suffix or "")


def namespace_packages_path(package_type: str | PackageType, namespace: str) -> str:
    """Path listing every package of one type in a namespace."""
    if isinstance(package_type, PackageType):
        package_type = package_type.value
    if not package_type or not _TYPE_RE.match(package_type):
        raise MalformedPackageNameError(
            f"{package_type}://{namespace}", f"invalid package type '{package_type}'"
        )
    ns = resolve_namespace(namespace)
    return "/".join(_quote(part) for part in (package_type, ns.tenant, ns.namespace))


__all__ = [
    "DEFAULT_VERSION",
    "NamespaceName",
    "PackageName",
    "PackageType",
    "namespace_packages_path",
    "resolve",
    "resolve_namespace",
    "to_path",
]
