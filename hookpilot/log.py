"""Coloured, level-filtered console output with a progress spinner."""

from __future__ import annotations

import contextlib
import enum
import os
import re
import sys
import threading
import unicodedata
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any, TextIO

NORMAL_BORDER = "│"
THICK_BORDER = "┃"

_SEPARATOR_WIDTH = 36
_SEPARATOR_MARGIN = 2

_SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
_SPINNER_INTERVAL = 0.1
_SPINNER_TEXT = " waiting"

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

# Colour codes by role: "#rrggbb", an ANSI number as text, or None for none.
_PALETTE: dict[str, str | None] = {
    "red": "196",
    "green": "155",
    "yellow": "191",
    "cyan": "37",
    "gray": "244",
    "border": "#383838",
}


class Level(enum.IntEnum):
    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3


def _isatty(stream: Any) -> bool:
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


class Spinner:
    """A terminal spinner drawn by a background thread.

    It only animates when its stream is a terminal.
    """

    def __init__(
        self,
        frames: tuple[str, ...] = _SPINNER_FRAMES,
        interval: float = _SPINNER_INTERVAL,
        suffix: str = _SPINNER_TEXT,
        stream: TextIO | None = None,
    ) -> None:
        self.frames = tuple(frames)
        self.interval = interval
        self.suffix = suffix
        self._stream = stream
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

    @property
    def active(self) -> bool:
        return self._thread is not None

    def _out(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _draw(self, out: TextIO, index: int) -> None:
        frame = self.frames[index % len(self.frames)]
        out.write(f"\r\x1b[K{frame}{self.suffix}")
        out.flush()

    def _spin(self, out: TextIO, stop_event: threading.Event) -> None:
        index = 1
        while not stop_event.wait(self.interval):
            self._draw(out, index)
            index += 1

    def start(self) -> None:
        with self._lock:
            if self._thread is not None:
                return
            out = self._out()
            if not _isatty(out):
                return
            stop_event = threading.Event()
            self._draw(out, 0)
            thread = threading.Thread(target=self._spin, args=(out, stop_event), daemon=True)
            self._stop_event = stop_event
            self._thread = thread
            thread.start()

    def stop(self) -> None:
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            self._thread = None
            self._stop_event = None
        if thread is None or stop_event is None:
            return
        stop_event.set()
        thread.join()
        out = self._out()
        out.write("\r\x1b[K")
        out.flush()


def _to_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", "replace")
    if hasattr(value, "getvalue"):
        return _to_str(value.getvalue())
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(_to_str(item) for item in value) + "]"
    return str(value)


def _sprint(args: tuple[Any, ...]) -> str:
    """Concatenate, adding spaces only between adjacent non-string operands."""
    parts: list[str] = []
    previous_is_str = True
    for position, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if position > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(_to_str(arg))
        previous_is_str = is_str
    return "".join(parts)


class Logger:
    """Writes messages at or above its level to an output stream."""

    def __init__(
        self,
        out: TextIO | None = None,
        level: Level = Level.INFO,
        colors: bool = True,
        spinner: Spinner | None = None,
    ) -> None:
        self.level = level
        self.colors = colors
        self.names: list[str] = []
        self.spinner = spinner if spinner is not None else Spinner()
        self._out = out
        self._lock = threading.RLock()

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def set_level(self, level: Level) -> None:
        with self._lock:
            self.level = level

    def set_output(self, out: TextIO | None) -> None:
        """Send output to ``out``; None means the current standard output."""
        with self._lock:
            self._out = out

    def is_level_enabled(self, level: Level) -> bool:
        return self.level >= level

    @contextlib.contextmanager
    def _spinner_paused(self) -> Iterator[None]:
        with self._lock:
            was_active = self.spinner.active
            if was_active:
                self.spinner.stop()
            try:
                yield
            finally:
                if was_active:
                    self.spinner.start()

    def log(self, level: Level, *args: Any) -> None:
        if self.is_level_enabled(level):
            self.println(*args)

    def logf(self, level: Level, fmt: str, *args: Any) -> None:
        if self.is_level_enabled(level):
            self.printf(fmt, *args)

    def println(self, *args: Any) -> None:
        with self._spinner_paused():
            out = self.out
            out.write(" ".join(_to_str(arg) for arg in args) + "\n")
            out.flush()

    def printf(self, fmt: str, *args: Any) -> None:
        text = fmt % args if args else fmt
        with self._spinner_paused():
            out = self.out
            out.write(text)
            out.flush()

    def info(self, *args: Any) -> None:
        self.log(Level.INFO, *args)

    def debug(self, *args: Any) -> None:
        self.log(Level.DEBUG, _fg(NORMAL_BORDER, "border"), *args)

    def error(self, *args: Any) -> None:
        self.log(Level.ERROR, *args)

    def warn(self, *args: Any) -> None:
        self.log(Level.WARN, *args)

    def _refresh_suffix(self) -> None:
        if self.names:
            self.spinner.suffix = f"{_SPINNER_TEXT}: {', '.join(self.names)}"
        else:
            self.spinner.suffix = _SPINNER_TEXT

    def set_name(self, name: str) -> None:
        """Add ``name`` to the list of running jobs shown by the spinner."""
        with self._spinner_paused():
            self.names.append(name)
            self._refresh_suffix()

    def unset_name(self, name: str) -> None:
        """Remove ``name`` from the list of running jobs."""
        with self._spinner_paused():
            self.names = [existing for existing in self.names if existing != name]
            self._refresh_suffix()


_std = Logger(colors="NO_COLOR" not in os.environ)


def _sgr(code: str) -> str | None:
    if code.startswith("#") and len(code) == 7:
        try:
            red_, green_, blue_ = (int(code[i : i + 2], 16) for i in (1, 3, 5))
        except ValueError:
            return None
        return f"38;2;{red_};{green_};{blue_}"
    if code.isdigit():
        number = int(code)
        if number < 8:
            return str(30 + number)
        if number < 16:
            return str(90 + number - 8)
        if number < 256:
            return f"38;5;{number}"
    return None


def _paint(text: str, sgr: str | None) -> str:
    if not sgr or not text:
        return text
    return "\n".join(f"\x1b[{sgr}m{line}\x1b[0m" if line else line for line in text.split("\n"))


def _fg(text: str, color: str | None) -> str:
    """Colour ``text`` with a palette role name or a raw colour code."""
    if not _std.colors or color is None:
        return text
    code = _PALETTE.get(color, color)
    if code is None:
        return text
    return _paint(text, _sgr(code))


def _width(text: str) -> int:
    total = 0
    for char in _ANSI_RE.sub("", text):
        if unicodedata.combining(char):
            continue
        total += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return total


@dataclass(frozen=True)
class StyledLogger:
    """An info printer with an optional left border and padding."""

    border: str | None = None
    border_color: str | None = None
    padding: int = 0

    def with_left_border(self, border: str, color: str | None) -> StyledLogger:
        return replace(self, border=border, border_color=color)

    def with_padding(self, padding: int) -> StyledLogger:
        return replace(self, padding=padding)

    def info(self, text: str) -> None:
        prefix = _fg(self.border, self.border_color) if self.border else ""
        pad = " " * self.padding
        info("\n".join(prefix + pad + line for line in text.split("\n")))


def styled() -> StyledLogger:
    return StyledLogger()


def start_spinner() -> None:
    _std.spinner.start()


def stop_spinner() -> None:
    _std.spinner.stop()


def set_name(name: str) -> None:
    _std.set_name(name)


def unset_name(name: str) -> None:
    _std.unset_name(name)


def debug(*args: Any) -> None:
    _std.debug(gray(_sprint(args)))


def debugf(fmt: str, *args: Any) -> None:
    debug(fmt % args if args else fmt)


def info(*args: Any) -> None:
    _std.info(*args)


def infof(fmt: str, *args: Any) -> None:
    _std.logf(Level.INFO, fmt, *args)


def info_pad(text: str) -> None:
    border = _fg(NORMAL_BORDER, "cyan")
    info("\n".join(border + line for line in text.split("\n")))


def error(*args: Any) -> None:
    _std.error(red(_sprint(args)))


def errorf(fmt: str, *args: Any) -> None:
    error(fmt % args if args else fmt)


def warn(*args: Any) -> None:
    _std.warn(yellow(_sprint(args)))


def warnf(fmt: str, *args: Any) -> None:
    warn(fmt % args if args else fmt)


def set_level(level: Level) -> None:
    _std.set_level(level)


def set_output(out: TextIO | None) -> None:
    _std.set_output(out)


def _set_color(role: str, value: object) -> None:
    if isinstance(value, bool):
        return
    if isinstance(value, int):
        code = str(value)
    elif isinstance(value, str):
        code = value
    else:
        return
    if code:
        _PALETTE[role] = code


def set_colors(colors: object) -> None:
    """Configure colours from the ``colors`` config value.

    A boolean switches colouring on or off; a mapping of role names to codes
    switches it on and overrides those roles.
    """
    if isinstance(colors, bool):
        _std.colors = colors
    elif isinstance(colors, dict):
        _std.colors = True
        for role, key in (
            ("red", "red"),
            ("green", "green"),
            ("yellow", "yellow"),
            ("cyan", "cyan"),
            ("gray", "gray"),
            ("border", "gray"),
        ):
            _set_color(role, colors.get(key))
    else:
        _std.colors = True


def parse_level(name: str) -> Level:
    levels = {"error": Level.ERROR, "info": Level.INFO, "debug": Level.DEBUG}
    try:
        return levels[name.lower()]
    except KeyError:
        raise ValueError(f'not a valid Level: "{name}"') from None


def cyan(text: str) -> str:
    return _fg(text, "cyan")


def green(text: str) -> str:
    return _fg(text, "green")


def red(text: str) -> str:
    return _fg(text, "red")


def yellow(text: str) -> str:
    return _fg(text, "yellow")


def gray(text: str) -> str:
    return _fg(text, "gray")


def bold(text: str) -> str:
    if not _std.colors or not text:
        return text
    return _paint(text, "1")


def _border(text: str) -> str:
    return _fg(text, "border")


def _rounded_box(text: str, left_side: bool) -> list[str]:
    lines = text.split("\n")
    width = max(_width(line) for line in lines)
    horizontal = "─" * (width + 2)
    body = [" " + line + " " * (width - _width(line)) + " " for line in lines]
    if left_side:
        return [
            _border("╭" + horizontal),
            *(_border("│") + row for row in body),
            _border("╰" + horizontal),
        ]
    return [
        _border(horizontal + "╮"),
        *(row + _border("│") for row in body),
        _border(horizontal + "╯"),
    ]


def box(left: str, right: str) -> None:
    """Print two rounded boxes joined side by side."""
    left_rows = _rounded_box(left, left_side=True)
    right_rows = _rounded_box(right, left_side=False)
    height = max(len(left_rows), len(right_rows))
    left_rows += [" " * _width(left_rows[0])] * (height - len(left_rows))
    right_rows += [" " * _width(right_rows[0])] * (height - len(right_rows))
    info("\n".join(a + b for a, b in zip(left_rows, right_rows)))


def separate(text: str) -> None:
    """Print a horizontal rule followed by ``text``."""
    margin = " " * _SEPARATOR_MARGIN
    top = margin + " " * _SEPARATOR_WIDTH
    rule = margin + _border("─" * _SEPARATOR_WIDTH)
    info("\n".join([top, rule, text]))