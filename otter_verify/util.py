"""Utility helpers for otter-verify."""

from __future__ import annotations

import sys
from typing import TextIO


def ensure_str(value, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def prompt_user_input(
    message: str,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> bool:
    """Ask a yes/no question; only an answer starting with Y/y counts as yes."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stdout.write(message)
    stdout.flush()
    answer = stdin.readline()
    return answer[:1] in {"Y", "y"}
