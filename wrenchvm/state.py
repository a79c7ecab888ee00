"""Interpreter state: the global registry of host and library functions."""

from __future__ import annotations

from typing import Any, Callable, Optional

from .hashing import hash_string
from .values import ArrayKind, GCArray, Value

LibraryFunction = Callable[["State", "list[Value]"], Optional[Value]]


def _to_value(arg: Any) -> Value:
    if isinstance(arg, Value):
        return arg
    if isinstance(arg, (bool, int)):
        return Value.make_int(int(arg))
    if isinstance(arg, float):
        return Value.make_float(arg)
    if isinstance(arg, (str, bytes, bytearray)):
        return Value.make_string(arg)
    raise TypeError(f"cannot pass {type(arg).__name__} to a library function")


class State:
    """Shared state for scripts: registered functions and the global registry.

    Library functions are called as ``function(state, args)`` with ``args`` a
    list of Values, and return a Value or None for the integer zero.
    """

    def __init__(self) -> None:
        self.registry = GCArray(0, ArrayKind.VOID_HASH_TABLE)
        self.host_functions: dict[int, tuple[Callable[..., Any], Any]] = {}
        self._library: dict[int, LibraryFunction] = {}

    def register_function(self, name: str, function: Callable[..., Any], usr: Any = None) -> None:
        """Make a host callback, with its user data, callable from scripts as ``name``."""
        self.host_functions[hash_string(name)] = (function, usr)

    def register_library_function(self, signature: str, function: LibraryFunction) -> None:
        """Register ``function`` under a signature such as ``math::sin``."""
        self._library[hash_string(signature)] = function

    def library_function(self, signature: str) -> LibraryFunction | None:
        """The library function registered under ``signature``, or None."""
        return self._library.get(hash_string(signature))

    def call_library(self, signature: str, *args: Any) -> Value:
        """Call a library function with ``args`` converted to Values."""
        function = self.library_function(signature)
        if function is None:
            raise KeyError(f"no library function {signature!r}")
        result = function(self, [_to_value(arg) for arg in args])
        return Value() if result is None else result