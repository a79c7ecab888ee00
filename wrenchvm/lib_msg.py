"""Message-box library: values posted to and read from the shared registry."""

from __future__ import annotations

from .state import State
from .values import Value

# Keeps message keys apart from anything else kept in the registry.
_SCRAMBLER = 0x5BD1E995


def _key(value: Value) -> int:
    return value.get_hash() ^ _SCRAMBLER


def _read(state: State, args: list[Value]) -> Value:
    """msg::read(key, clear=0): the stored value, removed when ``clear`` is set."""
    if args:
        clear = args[1].as_int() if len(args) > 1 else 0
        key = _key(args[0])
        message = state.registry.find(key)
        if message is not None:
            result = Value()
            result.copy_from(message)
            if clear:
                state.registry.remove(key)
            return result
    return Value()


def _write(state: State, args: list[Value]) -> None:
    """msg::write(key, value): store the hash of ``value`` under ``key``."""
    if len(args) > 1:
        message = state.registry.get(_key(args[0]))
        message.copy_from(Value.make_int(args[1].get_hash()))


def _clear(state: State, args: list[Value]) -> None:
    """msg::clear(key): remove the message if it exists."""
    if args:
        state.registry.remove(_key(args[0]))


def _peek(state: State, args: list[Value]) -> Value:
    """msg::peek(key): 1 if a message is waiting under ``key``, else 0."""
    waiting = bool(args) and _key(args[0]) in state.registry
    return Value.make_int(1 if waiting else 0)


def load_message_lib(state: State) -> None:
    """Register msg::read, msg::write, msg::clear and msg::peek."""
    state.register_library_function("msg::read", _read)
    state.register_library_function("msg::write", _write)
    state.register_library_function("msg::clear", _clear)
    state.register_library_function("msg::peek", _peek)