"""Running hook commands in a shell."""

from __future__ import annotations

import abc
import contextlib
import os
import re
import subprocess
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import IO, Any

from . import log

_CHUNK = 65536
_VAR_RE = re.compile(r"\$(?:\{([^}]*)\}|([A-Za-z0-9_]+))")


@dataclass
class ExecuteOptions:
    """What to run and how."""

    name: str
    root: str = "."
    commands: list[str] = field(default_factory=list)
    fail_text: str = ""
    env: dict[str, str] = field(default_factory=dict)
    interactive: bool = False
    use_stdin: bool = False


class Executor(abc.ABC):
    """Runs commands; ``out`` receives their standard output (None discards it)."""

    @abc.abstractmethod
    def execute(self, opts: ExecuteOptions, out: IO[Any] | None) -> None:
        """Run ``opts.commands`` in order, raising on the first failure."""

    @abc.abstractmethod
    def raw_execute(self, command: Sequence[str], out: IO[Any] | None) -> None:
        """Run ``command`` directly, raising if it fails."""


def _expand(value: str) -> str:
    def lookup(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return os.environ.get(name, "")

    return _VAR_RE.sub(lookup, value)


def build_env(env: Mapping[str, str]) -> dict[str, str]:
    """Upper-case the names and expand environment variables in the values."""
    return {name.upper(): _expand(value) for name, value in env.items()}


def _write(out: IO[Any] | None, data: bytes) -> None:
    if out is None or not data:
        return
    try:
        out.write(data)
    except TypeError:
        out.write(data.decode("utf-8", "replace"))
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def _stdin_is_tty() -> bool:
    try:
        return os.isatty(0)
    except OSError:
        return False


def _finish(proc: subprocess.Popen[bytes], args: Any) -> None:
    code = proc.wait()
    if code:
        raise subprocess.CalledProcessError(code, args)


def _run_piped(args: Any, cwd: str | None, env: Mapping[str, str] | None, stdin: Any, out: IO[Any] | None) -> None:
    proc = subprocess.Popen(args, cwd=cwd, env=env, stdin=stdin, stdout=subprocess.PIPE)
    try:
        assert proc.stdout is not None
        for chunk in iter(lambda: proc.stdout.read1(_CHUNK), b""):
            _write(out, chunk)
        _finish(proc, args)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()


def _run_in_pty(args: list[str], cwd: str, env: Mapping[str, str], out: IO[Any] | None) -> None:
    import pty

    master, slave = pty.openpty()
    try:
        try:
            proc = subprocess.Popen(
                args,
                cwd=cwd,
                env=env,
                stdin=slave,
                stdout=slave,
                stderr=slave,
                start_new_session=True,
            )
        finally:
            os.close(slave)
        try:
            while True:
                try:
                    chunk = os.read(master, _CHUNK)
                except OSError:
                    break
                if not chunk:
                    break
                _write(out, chunk)
            _finish(proc, args)
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
    finally:
        os.close(master)


class CommandExecutor(Executor):
    """Runs commands through the system shell."""

    def execute(self, opts: ExecuteOptions, out: IO[Any] | None) -> None:
        root = os.path.abspath(opts.root)
        env = {**os.environ, **build_env(opts.env)}
        windows = sys.platform == "win32"
        with contextlib.ExitStack() as stack:
            stdin = self._stdin(opts, stack, windows)
            # One logical command may be split into chunks to fit the shell's limits.
            for command in opts.commands:
                if windows:
                    _run_piped(command, root, env, stdin, out)
                elif opts.interactive or opts.use_stdin:
                    _run_piped(["sh", "-c", command], root, env, stdin, out)
                else:
                    _run_in_pty(["sh", "-c", command], root, env, out)

    @staticmethod
    def _stdin(opts: ExecuteOptions, stack: contextlib.ExitStack, windows: bool) -> Any:
        if windows:
            return None if (opts.interactive or opts.use_stdin) else subprocess.DEVNULL
        source: Any = None if opts.use_stdin else subprocess.DEVNULL
        if opts.interactive and not _stdin_is_tty():
            try:
                source = stack.enter_context(open("/dev/tty", "rb"))
            except OSError as err:
                log.errorf("Couldn't enable TTY input: %s\n", err)
        return source

    def raw_execute(self, command: Sequence[str], out: IO[Any] | None) -> None:
        _run_piped(list(command), None, None, None, out)