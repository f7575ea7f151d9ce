"""Core SDK infrastructure with shared code between sync and async clients."""

from __future__ import annotations

from .client import AsyncPulsarAdmin, PulsarAdmin
from .config import ClientConfig

__all__ = [
    "PulsarAdmin",
    "AsyncPulsarAdmin",
    "ClientConfig",
]
