"""File, console and time library functions."""

from __future__ import annotations

import os
import sys
import time

from .state import State
from .values import ArrayKind, Value

_LINE_LIMIT = 256


def _char_array(data: bytes) -> Value:
    value = Value.make_array(len(data), ArrayKind.CHAR)
    value.storage.chars[:] = data
    return value


def _read_file(state: State, args: list[Value]) -> Value:
    """file::read(name): the file's bytes, or 0 if it cannot be read or is empty."""
    if len(args) != 1:
        return Value()
    name = args[0].c_str()
    if name is None:
        return Value()
    try:
        with open(os.fsdecode(name.split(b"\0", 1)[0]), "rb") as handle:
            data = handle.read()
    except OSError:
        return Value()
    if not data:
        return Value()
    return _char_array(data)


def _write_file(state: State, args: list[Value]) -> Value:
    """file::write(name, data): 1 if the data was written, else 0."""
    if len(args) != 2:
        return Value()
    storage = args[1].array()
    if storage is None or storage.kind is not ArrayKind.CHAR:
        return Value()
    name = args[0].c_str()
    if name is None:
        return Value()
    data = bytes(storage.chars)
    try:
        with open(os.fsdecode(name.split(b"\0", 1)[0]), "wb") as handle:
            handle.write(data)
    except OSError:
        return Value()
    return Value.make_int(1 if data else 0)


def _getline(state: State, args: list[Value]) -> Value:
    """io::getline(): one line from standard input, without its line ending.

    At most 256 bytes are returned; the byte read after them is dropped.
    """
    stream = sys.stdin
    source = getattr(stream, "buffer", stream)
    line = bytearray()
    while True:
        unit = source.read(1)
        if isinstance(unit, str):
            unit = unit.encode("utf-8")
        if not unit or unit in (b"\n", b"\r") or len(line) >= _LINE_LIMIT:
            return _char_array(bytes(line))
        line += unit


def _clock(state: State, args: list[Value]) -> Value:
    """time::clock(): processor time used, in microseconds."""
    return Value.make_int(int(time.process_time() * 1_000_000))


def load_file_lib(state: State) -> None:
    """Register file::read, file::write, io::getline, time::clock and time::ms."""
    state.register_library_function("file::read", _read_file)
    state.register_library_function("file::write", _write_file)
    state.register_library_function("io::getline", _getline)
    state.register_library_function("time::clock", _clock)
    state.register_library_function("time::ms", _clock)