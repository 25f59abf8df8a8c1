"""Registry instruction parameters and payload encoding.

The registry program decodes its arguments with Borsh, so the layout here is
fixed: strings are a u32 little-endian byte length followed by UTF-8 bytes,
and vectors are a u32 little-endian element count followed by the elements.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from .constants import (
    CLOSE_DISCRIMINANT,
    DISCRIMINANT_SIZE,
    INITIALIZE_DISCRIMINANT,
    UPDATE_DISCRIMINANT,
)
from .util import ensure_str


_U32 = struct.Struct("<I")
_U32_MAX = 2**32 - 1


class OperationKind(Enum):
    INITIALIZE = "initialize"
    UPDATE = "update"
    CLOSE = "close"

    @property
    def discriminant(self) -> bytes:
        return _DISCRIMINANTS[self]


_DISCRIMINANTS = {
    OperationKind.INITIALIZE: INITIALIZE_DISCRIMINANT,
    OperationKind.UPDATE: UPDATE_DISCRIMINANT,
    OperationKind.CLOSE: CLOSE_DISCRIMINANT,
}


@dataclass(frozen=True)
class InputParams:
    version: str
    git_url: str
    commit: str
    args: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        ensure_str(self.version, "version")
        ensure_str(self.git_url, "git_url")
        ensure_str(self.commit, "commit")
        if isinstance(self.args, str):
            raise ValueError("args must be a sequence of strings, not a string")
        args = tuple(self.args)
        for idx, arg in enumerate(args):
            ensure_str(arg, f"args[{idx}]")
        object.__setattr__(self, "args", args)


def _pack_len(length: int, what: str) -> bytes:
    if length > _U32_MAX:
        raise ValueError(f"{what} too long to encode ({length})")
    return _U32.pack(length)


def _pack_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return _pack_len(len(raw), "string") + raw


def _pack_string_vec(values: Iterable[str]) -> bytes:
    items = list(values)
    out = bytearray(_pack_len(len(items), "args"))
    for item in items:
        out += _pack_string(item)
    return bytes(out)


def encode_params(params: InputParams) -> bytes:
    return (
        _pack_string(params.version)
        + _pack_string(params.git_url)
        + _pack_string(params.commit)
        + _pack_string_vec(params.args)
    )


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def take(self, size: int, what: str) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ValueError(
                f"truncated params: need {size} bytes for {what} at offset {self.offset}, "
                f"have {len(self.data) - self.offset}"
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def u32(self, what: str) -> int:
        return _U32.unpack(self.take(_U32.size, what))[0]

    def string(self, what: str) -> str:
        length = self.u32(f"{what} length")
        raw = self.take(length, what)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"{what} is not valid UTF-8") from exc


def decode_params(data: bytes) -> InputParams:
    reader = _Reader(bytes(data))
    version = reader.string("version")
    git_url = reader.string("git_url")
    commit = reader.string("commit")
    count = reader.u32("args length")
    args = tuple(reader.string(f"args[{idx}]") for idx in range(count))
    if reader.offset != len(reader.data):
        raise ValueError(f"{len(reader.data) - reader.offset} trailing bytes after params")
    return InputParams(version=version, git_url=git_url, commit=commit, args=args)


def create_ix_data(kind: OperationKind, params: InputParams | None = None) -> bytes:
    """Instruction data: 8-byte discriminant, then the encoded params.

    Close takes no arguments, so its payload is the discriminant alone.
    """
    if kind is OperationKind.CLOSE:
        return kind.discriminant
    if params is None:
        raise ValueError(f"{kind.value} requires input params")
    return kind.discriminant + encode_params(params)


def split_ix_data(data: bytes) -> tuple[OperationKind, InputParams | None]:
    """Inverse of create_ix_data."""
    prefix = bytes(data[:DISCRIMINANT_SIZE])
    for kind, discriminant in _DISCRIMINANTS.items():
        if prefix == discriminant:
            break
    else:
        raise ValueError(f"unknown instruction discriminant {prefix.hex()}")
    if kind is OperationKind.CLOSE:
        return kind, None
    return kind, decode_params(data[DISCRIMINANT_SIZE:])
