"""Small helpers for files written into the git directory."""

from __future__ import annotations

import sys


def checksum(checksum: str, timestamp: int) -> bytes:
    """Return the content of the checksum file."""
    return f"{checksum} {timestamp}\n".encode()


def executable_extension(platform: str | None = None) -> str:
    """Return the executable suffix for ``platform`` (defaults to this one)."""
    name = sys.platform if platform is None else platform
    return ".exe" if name.startswith("win") else ""