"""Package version and ``min_version`` checks."""

from __future__ import annotations

import re

_VERSION = "1.6.0"

# Filled in by release builds with the commit the package was built from.
COMMIT = ""

_VERSION_RE = re.compile(r"(\d+)(?:\.(\d+)(?:\.(\d+))?)?", re.ASCII)


class VersionError(ValueError):
    """A version string is malformed or newer than this package."""


def version(verbose: bool = False) -> str:
    """Return the version, followed by the commit when ``verbose``."""
    if verbose:
        return f"{_VERSION} {COMMIT}"
    return _VERSION


def parse_version(text: str) -> tuple[int, int, int]:
    """Parse "1.2.3", "1.2" or "1" into (major, minor, patch)."""
    match = _VERSION_RE.fullmatch(text)
    if match is None:
        raise VersionError("format of 'min_version' setting is incorrect")
    major, minor, patch = match.groups()
    return int(major), int(minor or 0), int(patch or 0)


def check_covered(target_version: str) -> None:
    """Raise VersionError unless ``target_version`` is at most the current one."""
    if not target_version:
        return
    target = parse_version(target_version)
    if parse_version(_VERSION) < target:
        raise VersionError("required hookpilot version is higher than current")