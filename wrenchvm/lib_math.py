"""Math library: single-precision wrappers around the usual math functions."""

from __future__ import annotations

import math
import struct
from typing import Callable

from .state import State
from .values import Value


def _to_f32(number: float) -> float:
    return struct.unpack("<f", struct.pack("<f", number))[0]


_PI = _to_f32(math.pi)
_TO_DEGREES = _to_f32(180.0 / _PI)
_TO_RADIANS = _to_f32(1.0 / _TO_DEGREES)


def _guarded(function: Callable[[float], float], overflow_signed: bool = False) -> Callable[[float], float]:
    """Map Python's math errors onto the results C math functions give."""

    def call(x: float) -> float:
        try:
            return function(x)
        except OverflowError:
            return math.copysign(math.inf, x) if overflow_signed else math.inf
        except ValueError:
            return math.nan

    return call


def _log(x: float) -> float:
    return -math.inf if x == 0 else _guarded(math.log)(x)


def _log10(x: float) -> float:
    return -math.inf if x == 0 else _guarded(math.log10)(x)


def _integral(function: Callable[[float], int]) -> Callable[[float], float]:
    def call(x: float) -> float:
        return x if not math.isfinite(x) else float(function(x))

    return call


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        pass
    except ValueError:
        if base != 0:
            return math.nan
    odd = exponent.is_integer() and int(exponent) % 2 == 1
    negative = math.copysign(1.0, base) < 0 and odd
    return -math.inf if negative else math.inf


def _fmod(x: float, y: float) -> float:
    try:
        return math.fmod(x, y)
    except ValueError:
        return math.nan


def _ldexp(x: float, exponent: int) -> float:
    try:
        return math.ldexp(x, exponent)
    except OverflowError:
        return math.copysign(math.inf, x)


def _unary(function: Callable[[float], float]):
    def call(state: State, args: list[Value]) -> Value:
        if len(args) != 1:
            return Value.make_float(0.0)
        return Value.make_float(function(args[0].as_float()))

    return call


def _binary(function: Callable[[float, float], float]):
    # The last argument is handed over first, as the stack is read top down.
    def call(state: State, args: list[Value]) -> Value:
        if len(args) != 2:
            return Value.make_float(0.0)
        return Value.make_float(function(args[1].as_float(), args[0].as_float()))

    return call


def _ldexp_call(state: State, args: list[Value]) -> Value:
    if len(args) != 2:
        return Value.make_float(0.0)
    return Value.make_float(_ldexp(args[1].as_float(), args[0].as_int()))


def _rad2deg(x: float) -> float:
    return _TO_DEGREES * x


def _deg2rad(x: float) -> float:
    return _TO_RADIANS * x


def load_math_lib(state: State) -> None:
    """Register the math:: functions."""
    unary = {
        "sin": _guarded(math.sin),
        "cos": _guarded(math.cos),
        "tan": _guarded(math.tan),
        "sinh": _guarded(math.sinh, overflow_signed=True),
        "cosh": _guarded(math.cosh),
        "tanh": _guarded(math.tanh),
        "asin": _guarded(math.asin),
        "acos": _guarded(math.acos),
        "atan": _guarded(math.atan),
        "log": _log,
        "ln": _log,
        "log10": _log10,
        "exp": _guarded(math.exp),
        "trunc": _integral(math.trunc),
        "sqrt": _guarded(math.sqrt),
        "ceil": _integral(math.ceil),
        "floor": _integral(math.floor),
        "abs": math.fabs,
        "deg2rad": _deg2rad,
        "rad2deg": _rad2deg,
    }
    binary = {
        "atan2": math.atan2,
        "pow": _pow,
        "fmod": _fmod,
    }
    for name, function in unary.items():
        state.register_library_function(f"math::{name}", _unary(function))
    for name, function in binary.items():
        state.register_library_function(f"math::{name}", _binary(function))
    state.register_library_function("math::ldexp", _ldexp_call)