"""Building shell command lines with file lists substituted in."""

from __future__ import annotations

import re
import shlex
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from . import log

MAX_COMMAND_LENGTH_DARWIN = 260000
MAX_COMMAND_LENGTH_WINDOWS = 8000
MAX_COMMAND_LENGTH_LINUX = 130000

_SURROUNDING_QUOTES_RE = re.compile(r"'(.*)'")


@dataclass
class Template:
    """Files to substitute for a placeholder and how often it occurs."""

    files: list[str] = field(default_factory=list)
    cnt: int = 0


@dataclass
class PreparedRun:
    """Command lines to run and the files they were given."""

    commands: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def max_command_length(platform: str | None = None) -> int:
    """Return a safe command-line length limit for ``platform``."""
    name = sys.platform if platform is None else platform
    if name.startswith("win"):
        return MAX_COMMAND_LENGTH_WINDOWS
    if name == "darwin":
        return MAX_COMMAND_LENGTH_DARWIN
    return MAX_COMMAND_LENGTH_LINUX


def replace_positional_arguments(text: str, args: Sequence[str]) -> str:
    """Replace ``{0}`` with all arguments and ``{n}`` with the n-th one."""
    text = text.replace("{0}", " ".join(args))
    for position, arg in enumerate(args, start=1):
        text = text.replace(f"{{{position}}}", arg)
    return text


def escape_files(files: Sequence[str]) -> list[str]:
    """Shell-quote non-empty file names."""
    escaped = [shlex.quote(name) for name in files if name]
    log.debug("[hookpilot] files after escaping:\n", escaped)
    return escaped


def get_n_chars(items: Sequence[str], n: int) -> tuple[list[str], list[str]]:
    """Split off leading items whose space-joined length fits in ``n``.

    At least one item is always taken.
    """
    total = 0
    for position, item in enumerate(items):
        total += len(item)
        if position > 0:
            total += 1
        if total > n:
            cut = max(position, 1)
            return list(items[:cut]), list(items[cut:])
    return list(items), []


def _strip_quotes(name: str) -> str:
    match = _SURROUNDING_QUOTES_RE.fullmatch(name)
    return match.group(1) if match else name


def replace_quoted(source: str, substitution: str, files: Sequence[str]) -> str:
    """Substitute ``files`` for ``substitution``, honouring quotes around it."""
    for quote in ('"', "'", ""):
        placeholder = quote + substitution + quote
        if placeholder not in source:
            continue
        if quote:
            quoted = [quote + _strip_quotes(name) + quote for name in files]
        else:
            quoted = list(files)
        source = source.replace(placeholder, " ".join(quoted))
    return source


def _div_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def replace_in_chunks(text: str, templates: Mapping[str, Template], maxlen: int) -> PreparedRun:
    """Expand placeholders, splitting into several commands to respect ``maxlen``."""
    if not templates:
        return PreparedRun(commands=[text])

    pending = {name: list(template.files) for name, template in templates.items()}
    all_files: list[str] = []
    count = 0
    for name, template in templates.items():
        if template.cnt == 0:
            continue
        count += template.cnt
        maxlen += template.cnt * len(name)
        all_files.extend(template.files)
        pending[name] = escape_files(template.files)

    maxlen -= len(text)
    if count > 0:
        maxlen = _div_toward_zero(maxlen, count)

    exhausted = 0
    commands: list[str] = []
    while True:
        command = text
        for name in templates:
            added, rest = get_n_chars(pending[name], maxlen)
            if rest:
                pending[name] = rest
            else:
                exhausted += 1
            command = replace_quoted(command, name, added)
        log.debug("[hookpilot] executing: ", command)
        commands.append(command)
        if exhausted >= len(templates):
            break

    return PreparedRun(commands=commands, files=all_files)