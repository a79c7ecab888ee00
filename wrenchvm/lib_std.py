"""Standard library: a seeded random number generator, and loading every library."""

from __future__ import annotations

from .lib_io import load_file_lib
from .lib_math import load_math_lib
from .lib_msg import load_message_lib
from .lib_string import load_string_lib
from .state import State
from .values import Value

_MASK = 0xFFFFFFFF


def _to_i32(number: int) -> int:
    return ((number + 0x80000000) & _MASK) - 0x80000000


class _ParkMiller:
    """The minimal-standard generator, computed with Schrage's method."""

    def __init__(self) -> None:
        self.seed = 0

    def rand(self, state: State, args: list[Value]) -> Value:
        """std::rand(n): a pseudo-random number in [0, n)."""
        if len(args) != 1:
            return Value()
        limit = args[0].as_int() & _MASK
        if limit == 0:
            raise ZeroDivisionError("std::rand range must not be zero")
        k = int(self.seed / 127773)
        self.seed = _to_i32(16807 * (self.seed - k * 127773) - 2836 * k)
        return Value.make_int((self.seed & _MASK) % limit)

    def srand(self, state: State, args: list[Value]) -> None:
        """std::srand(seed): restart the sequence from ``seed``."""
        if len(args) == 1:
            self.seed = args[0].as_int()


def load_std_lib(state: State) -> None:
    """Register std::rand and std::srand, with their own generator."""
    generator = _ParkMiller()
    state.register_library_function("std::rand", generator.rand)
    state.register_library_function("std::srand", generator.srand)


def load_all_libs(state: State) -> None:
    """Register the math, std, file, string and message libraries."""
    load_math_lib(state)
    load_std_lib(state)
    load_file_lib(state)
    load_string_lib(state)
    load_message_lib(state)