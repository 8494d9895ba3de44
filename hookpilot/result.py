"""Outcome of a single command or script."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Status(enum.IntEnum):
    OK = 0
    ERR = 1


@dataclass(frozen=True)
class Result:
    name: str
    status: Status
    text: str = ""


def result_success(name: str) -> Result:
    return Result(name=name, status=Status.OK)


def result_fail(name: str, text: str) -> Result:
    return Result(name=name, status=Status.ERR, text=text)