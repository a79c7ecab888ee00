"""Number-to-text conversion and printf-style formatting."""

from __future__ import annotations

import math
import struct
from typing import Any, Iterable

_MASK = 0xFFFFFFFF
_DIGITS = "0123456789ABCDEF"

# conversion -> (base, digit count, signed)
_NUMERIC = {
    "d": (10, 10, True),
    "i": (10, 10, True),
    "u": (10, 10, False),
    "b": (2, 16, False),
    "o": (8, 5, False),
    "x": (16, 8, False),
    "X": (16, 8, False),
    "p": (16, 8, False),
}


def _to_f32(number: float) -> float:
    return struct.unpack("<f", struct.pack("<f", number))[0]


_ROUNDING = _to_f32(5.0 / 10e6)


def format_int(value: int, limit: int | None = None) -> str:
    """Render an integer in decimal; at most ``limit`` characters in total."""
    value = int(value)
    sign = ""
    if value < 0:
        sign = "-"
        value = -value
    digits = str(value)
    if limit is not None:
        digits = digits[: max(limit - len(sign), 0)]
    return sign + digits


def format_float(value: float, limit: int | None = None) -> str:
    """Render a single-precision float with up to five decimals.

    Trailing zeros are dropped, and the decimal point with them when no
    fraction remains.
    """
    bound = math.inf if limit is None else limit
    number = _to_f32(value)
    text = ""
    if number < 0:
        number = -number
        text = "-"
    if len(text) > bound:
        return ""

    number = _to_f32(number + _ROUNDING)
    whole = int(number)
    if whole:
        number = _to_f32(number - whole)
        text += format_int(whole, None if limit is None else limit - len(text))
    else:
        text += "0"
    text += "."

    for _ in range(5):
        if len(text) >= bound:
            break
        number = _to_f32(number * 10.0)
        digit = int(number)
        text += chr(ord("0") + digit)
        number = _to_f32(number - digit)

    text = text.rstrip("0")
    return text[:-1] if text.endswith(".") else text


def _as_int(arg: Any) -> int:
    if isinstance(arg, (bool, int)):
        return int(arg)
    if isinstance(arg, float):
        return int(arg)
    as_int = getattr(arg, "as_int", None)
    if callable(as_int):
        return int(as_int())
    return 0


def _c_str(arg: Any) -> str | None:
    if isinstance(arg, str):
        return arg.split("\0", 1)[0]
    if isinstance(arg, (bytes, bytearray, memoryview)):
        return bytes(arg).decode("latin-1").split("\0", 1)[0]
    c_str = getattr(arg, "c_str", None)
    if callable(c_str):
        result = c_str()
        return None if result is None else _c_str(result)
    return None


def _justify(text: str, columns: int, pad: str, left: bool, sign: str, prefix: str) -> str:
    parts = []
    if not left and columns > len(text):
        parts.append(pad * (columns - len(text)))
        columns = len(text)
    parts.extend((sign, prefix, text))
    if columns > len(text):
        parts.append(" " * (columns - len(text)))
    return "".join(parts)


def _render_digits(value: int, base: int, width: int, lower: bool) -> str:
    digits = []
    for _ in range(width):
        value, digit = divmod(value, base)
        digits.append(_DIGITS[digit])
    text = "".join(reversed(digits)).lstrip("0") or "0"
    return text.lower() if lower else text


def sprintf(fmt: str | bytes | None, args: Iterable[Any] = ()) -> str:
    """Format ``args`` according to ``fmt``.

    Supports %c, %s, %d, %i, %u, %b, %o, %x, %X, %p and %%, with width,
    zero padding, '-' for left justification and '#' for a 0x prefix.
    A %s whose argument is not a string makes the whole result empty.
    """
    if fmt is None:
        return ""
    fmt = _c_str(fmt)
    if fmt is None:
        return ""

    pending = iter(list(args))
    sentinel = object()
    out: list[str] = []
    chars = iter(fmt)

    for ch in chars:
        if ch != "%":
            out.append(ch)
            continue

        pad = " "
        columns = 0
        left = False
        alt = False
        for ch in chars:
            if "0" <= ch <= "9":
                columns = (columns * 10 + ord(ch) - ord("0")) & 0xFF
                if columns == 0:
                    pad = "0"
                continue
            if ch == "#":
                alt = True
                continue
            if ch == "-":
                left = True
                continue

            if ch == "c":
                arg = next(pending, sentinel)
                if arg is not sentinel:
                    out.append(chr(_as_int(arg) & 0xFF))
            elif ch == "%":
                out.append("%")
            elif ch == "s":
                arg = next(pending, sentinel)
                if arg is sentinel:
                    text = ""
                else:
                    text = _c_str(arg)
                    if text is None:
                        return ""
                out.append(_justify(text, columns, " ", left, "", "0x" if alt else ""))
            elif ch in _NUMERIC:
                base, width, signed = _NUMERIC[ch]
                arg = next(pending, sentinel)
                value = 0 if arg is sentinel else _as_int(arg) & _MASK
                sign = ""
                if signed and value & 0x80000000:
                    sign = "-"
                    value = (-value) & _MASK
                text = _render_digits(value, base, width, ch == "x")
                prefix = "0x" if alt or ch == "p" else ""
                out.append(_justify(text, columns, pad, left, sign, prefix))
            break

    return "".join(out)