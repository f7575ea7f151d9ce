from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidMetadataError

_KNOWN_KEYS = ("description", "contact", "createTime", "modificationTime", "properties")


@dataclass(slots=True)
class PackageMetadata:
    """Package metadata document as stored by the admin service.

    Fields left as ``None`` are omitted from the wire document. A document
    read with ``from_dict`` remembers which known keys it carried, so
    ``to_dict`` reproduces it even where the server sent ``null``.
    """

    description: str | None = None
    contact: str | None = None
    create_time: int | None = None
    modification_time: int | None = None
    properties: dict[str, str] | None = None
    # Keys the server sends that this client does not model.
    extra: dict[str, Any] = field(default_factory=dict)
    _present: frozenset[str] = field(default=frozenset(), repr=False, compare=False)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PackageMetadata:
        properties = raw.get("properties")
        return cls(
            description=raw.get("description"),
            contact=raw.get("contact"),
            create_time=raw.get("createTime"),
            modification_time=raw.get("modificationTime"),
            properties=dict(properties) if properties is not None else None,
            extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
            _present=frozenset(k for k in _KNOWN_KEYS if k in raw),
        )

    def to_dict(self) -> dict[str, Any]:
        values = {
            "description": self.description,
            "contact": self.contact,
            "createTime": self.create_time,
            "modificationTime": self.modification_time,
            "properties": dict(self.properties) if self.properties is not None else None,
        }
        data: dict[str, Any] = dict(self.extra)
        for key, value in values.items():
            if value is not None or key in self._present:
                data[key] = value
        return data


MetadataLike = PackageMetadata | Mapping[str, Any]


def _encode(metadata: MetadataLike) -> tuple[dict[str, Any], str]:
    try:
        data = metadata.to_dict() if isinstance(metadata, PackageMetadata) else dict(metadata)
        return data, json.dumps(data)
    except (TypeError, ValueError) as exc:
        raise InvalidMetadataError(f"metadata is not a JSON object: {exc}") from exc


def metadata_to_dict(metadata: MetadataLike) -> dict[str, Any]:
    return _encode(metadata)[0]


def serialize_metadata(metadata: MetadataLike) -> str:
    return _encode(metadata)[1]


def build_package_metadata(raw: Any) -> PackageMetadata:
    if not isinstance(raw, dict):
        raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
    return PackageMetadata.from_dict(raw)


def build_string_list(raw: Any) -> list[str]:
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise TypeError("expected a JSON array of strings")
    return list(raw)


__all__ = [
    "MetadataLike",
    "PackageMetadata",
    "build_package_metadata",
    "build_string_list",
    "metadata_to_dict",
    "serialize_metadata",
]
