from __future__ import annotations

import os
from typing import Any


def debug(message: str, *args: Any) -> None:
    if "pulsar-admin" in os.getenv("DEBUG", ""):
        print(f"pulsar-admin: {message}", *args)
