"""String library: formatting, searching, slicing and character classes."""

from __future__ import annotations

import sys

from .formatting import sprintf
from .state import State
from .values import ArrayKind, Value, ValueKind

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_MASK = 0xFFFFFFFF
_SPACES = b" \t\n\v\f\r"


def _char_array(data: bytes) -> Value:
    value = Value.make_array(len(data), ArrayKind.CHAR)
    value.storage.chars[:] = data
    return value


def _c_text(value: Value) -> bytes | None:
    data = value.c_str()
    return None if data is None else data.split(b"\0", 1)[0]


def _format(fmt: Value, rest: list[Value]) -> bytes:
    return sprintf(fmt.c_str(), rest).encode("latin-1")


def _strlen(state: State, args: list[Value]) -> Value:
    """str::strlen(s): the length of a character array, 0 for anything else."""
    if len(args) != 1:
        return Value()
    storage = args[0].array()
    if storage is None or storage.kind is not ArrayKind.CHAR:
        return Value()
    return Value.make_int(len(storage))


def _format_call(state: State, args: list[Value]) -> Value:
    """str::format(fmt, ...): the formatted string."""
    if not args:
        return Value()
    return _char_array(_format(args[0], args[1:]))


def _printf(state: State, args: list[Value]) -> Value:
    """str::printf(fmt, ...): print the formatted text, returning its length."""
    if not args:
        return Value()
    data = _format(args[0], args[1:])
    sys.stdout.write(data.decode("utf-8", errors="replace"))
    return Value.make_int(len(data))


def _sprintf(state: State, args: list[Value]) -> Value:
    """str::sprintf(ref, fmt, ...): format into the referenced value."""
    if (
        len(args) < 2
        or args[0].kind is not ValueKind.REF
        or args[1].kind is not ValueKind.ARRAY
        or args[1].storage.kind is not ArrayKind.CHAR
    ):
        return Value()
    data = _format(args[1], args[2:])
    args[0].ref.copy_from(_char_array(data))
    return Value.make_int(len(data))


def _classifier(test):
    def call(state: State, args: list[Value]) -> Value:
        if len(args) != 1:
            return Value()
        return Value.make_int(1 if test(args[0].as_int() & 0xFF) else 0)

    return call


def _is_space(byte: int) -> bool:
    return byte in _SPACES


def _is_alpha(byte: int) -> bool:
    return chr(byte).isascii() and chr(byte).isalpha()


def _is_digit(byte: int) -> bool:
    return ord("0") <= byte <= ord("9")


def _mid(state: State, args: list[Value]) -> Value:
    """str::mid(s, start, count=all): up to ``count`` bytes from ``start``."""
    if len(args) < 2:
        return Value()
    data = args[0].c_str()
    if not data:
        return Value()
    start = args[1].as_int() & _MASK
    chars = 0
    if start < len(data):
        chars = (args[2].as_int() & _MASK) if len(args) > 2 else len(data)
        chars = min(chars, len(data) - start)
    return _char_array(data[start:start + chars])


def _strchr(state: State, args: list[Value]) -> Value:
    """str::chr(s, ch): the position of the first ``ch`` in ``s``, or -1."""
    if len(args) < 2:
        return Value.make_int(-1)
    text = _c_text(args[0])
    if text is None:
        return Value.make_int(-1)
    wanted = args[1].as_int() & 0xFF
    if wanted == 0:
        return Value.make_int(len(text))
    return Value.make_int(text.find(bytes([wanted])))


def _case(convert):
    def call(state: State, args: list[Value]) -> Value:
        if len(args) != 1:
            return Value()
        code = args[0].as_int()
        if 0 <= code < 128:
            code = ord(convert(chr(code)))
        return Value.make_int(code)

    return call


def _digit(byte: int) -> int:
    if ord("0") <= byte <= ord("9"):
        return byte - ord("0")
    if ord("a") <= byte <= ord("z"):
        return byte - ord("a") + 10
    if ord("A") <= byte <= ord("Z"):
        return byte - ord("A") + 10
    return 99


def _strtol(text: bytes, base: int) -> int:
    """Parse a leading integer the way strtol does, clamped to 64 bits."""
    if base != 0 and not 2 <= base <= 36:
        return 0
    pos = 0
    while pos < len(text) and text[pos] in _SPACES:
        pos += 1
    negative = False
    if pos < len(text) and text[pos] in b"+-":
        negative = text[pos] == ord("-")
        pos += 1
    has_hex_prefix = (
        text[pos:pos + 2].lower() == b"0x"
        and pos + 2 < len(text)
        and _digit(text[pos + 2]) < 16
    )
    if base in (0, 16) and has_hex_prefix:
        base = 16
        pos += 2
    elif base == 0:
        base = 8 if text[pos:pos + 1] == b"0" else 10

    number = 0
    for byte in text[pos:]:
        digit = _digit(byte)
        if digit >= base:
            break
        number = number * base + digit
    if negative:
        number = -number
    return max(_INT64_MIN, min(_INT64_MAX, number))


def _tol(state: State, args: list[Value]) -> Value:
    """str::tol(s, base=10): the integer at the start of ``s``."""
    if len(args) not in (1, 2):
        return Value()
    text = _c_text(args[0])
    if text is None:
        return Value()
    base = args[1].as_int() if len(args) == 2 else 10
    return Value.make_int(_strtol(text, base))


def load_string_lib(state: State) -> None:
    """Register the str:: functions."""
    state.register_library_function("str::strlen", _strlen)
    state.register_library_function("str::sprintf", _sprintf)
    state.register_library_function("str::printf", _printf)
    state.register_library_function("str::format", _format_call)
    state.register_library_function("str::isspace", _classifier(_is_space))
    state.register_library_function("str::isdigit", _classifier(_is_digit))
    state.register_library_function("str::isalpha", _classifier(_is_alpha))
    state.register_library_function("str::mid", _mid)
    state.register_library_function("str::chr", _strchr)
    state.register_library_function("str::tolower", _case(str.lower))
    state.register_library_function("str::toupper", _case(str.upper))
    state.register_library_function("str::tol", _tol)