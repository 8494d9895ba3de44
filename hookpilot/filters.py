"""Narrowing file lists by glob, exclusion pattern and root directory."""

from __future__ import annotations

import re
from collections.abc import Sequence

from . import log


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate a ``[...]`` class starting after the opening bracket."""
    end = pattern.find("]", start)
    if end == -1:
        raise ValueError(f"unclosed character class in glob {pattern!r}")
    body = pattern[start:end]
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    if not body:
        raise ValueError(f"empty character class in glob {pattern!r}")
    escaped = "".join(char if char == "-" else re.escape(char) for char in body)
    return ("[^" if negate else "[") + escaped + "]", end + 1


def _translate(pattern: str, pos: int, in_braces: bool) -> tuple[str, int]:
    """Translate from ``pos`` until the end, or a ``,``/``}`` inside braces."""
    parts: list[str] = []
    length = len(pattern)
    while pos < length:
        char = pattern[pos]
        if in_braces and char in ",}":
            return "".join(parts), pos
        if char == "*":
            while pos < length and pattern[pos] == "*":
                pos += 1
            parts.append(".*")
            continue
        if char == "?":
            parts.append(".")
            pos += 1
        elif char == "[":
            piece, pos = _translate_class(pattern, pos + 1)
            parts.append(piece)
        elif char == "{":
            alternatives: list[str] = []
            pos += 1
            while True:
                piece, pos = _translate(pattern, pos, in_braces=True)
                alternatives.append(piece)
                if pos >= length:
                    raise ValueError(f"unclosed alternatives in glob {pattern!r}")
                if pattern[pos] == "}":
                    pos += 1
                    break
                pos += 1  # skip the comma
            parts.append("(?:" + "|".join(alternatives) + ")")
        elif char == "\\":
            if pos + 1 >= length:
                raise ValueError(f"dangling escape in glob {pattern!r}")
            parts.append(re.escape(pattern[pos + 1]))
            pos += 2
        else:
            parts.append(re.escape(char))
            pos += 1
    if in_braces:
        raise ValueError(f"unclosed alternatives in glob {pattern!r}")
    return "".join(parts), pos


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob into a regular expression matching whole strings.

    ``*`` and ``**`` match any run of characters, path separators included;
    ``?`` matches one character; ``[...]``/``[!...]`` are classes and
    ``{a,b}`` are alternatives. Raises ValueError for a malformed glob.
    """
    regex, _ = _translate(pattern, 0, in_braces=False)
    return re.compile(regex, re.DOTALL)


def by_glob(files: Sequence[str], pattern: str) -> list[str]:
    """Keep files matching ``pattern``, ignoring case."""
    if not pattern:
        return list(files)
    matcher = compile_glob(pattern.lower())
    return [name for name in files if matcher.fullmatch(name.lower())]


def by_exclude(files: Sequence[str], pattern: str) -> list[str]:
    """Drop files in which the regular expression ``pattern`` is found."""
    if not pattern:
        return list(files)
    try:
        matcher = re.compile(pattern)
    except re.error:
        # An unusable pattern excludes nothing.
        return list(files)
    return [name for name in files if not matcher.search(name)]


def by_root(files: Sequence[str], root: str) -> list[str]:
    """Keep files under ``root`` and make them relative to it."""
    if not root:
        return list(files)
    return [name.replace(root, "./", 1) for name in files if name.startswith(root)]


def apply(files: Sequence[str], glob: str = "", exclude: str = "", root: str = "") -> list[str]:
    """Apply the glob, exclude and root filters in turn."""
    if not files:
        return []
    log.debug("[hookpilot] files before filters:\n", list(files))
    result = by_glob(files, glob)
    result = by_exclude(result, exclude)
    result = by_root(result, root)
    log.debug("[hookpilot] files after filters:\n", result)
    return result