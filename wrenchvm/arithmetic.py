"""Arithmetic, bitwise, compound-assignment and increment operations on script values."""

from __future__ import annotations

import enum
import math

from .values import Value, ValueKind, array_to_value, value_to_array

_NUMERIC = (ValueKind.INT, ValueKind.FLOAT)


class BinaryOp(enum.Enum):
    """Binary operators; the shifts, modulo and bitwise ones accept integers only."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MOD = "%"
    LEFT_SHIFT = "<<"
    RIGHT_SHIFT = ">>"
    AND = "&"
    OR = "|"
    XOR = "^"

    @property
    def integer_only(self) -> bool:
        return self in _INTEGER_ONLY


_INTEGER_ONLY = frozenset(
    {
        BinaryOp.MOD,
        BinaryOp.LEFT_SHIFT,
        BinaryOp.RIGHT_SHIFT,
        BinaryOp.AND,
        BinaryOp.OR,
        BinaryOp.XOR,
    }
)


def _resolve(value: Value) -> Value:
    """Follow references and element references down to a concrete value."""
    while True:
        if value.kind is ValueKind.REF:
            value = value.ref
        elif value.kind is ValueKind.REF_ARRAY:
            value = array_to_value(value)
        else:
            return value


def _int_quotient(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("integer division by zero")
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _int_result(op: BinaryOp, a: int, b: int) -> int:
    if op is BinaryOp.ADD:
        return a + b
    if op is BinaryOp.SUBTRACT:
        return a - b
    if op is BinaryOp.MULTIPLY:
        return a * b
    if op is BinaryOp.DIVIDE:
        return _int_quotient(a, b)
    if op is BinaryOp.MOD:
        return a - b * _int_quotient(a, b)
    if op is BinaryOp.LEFT_SHIFT:
        return a << (b & 31)
    if op is BinaryOp.RIGHT_SHIFT:
        return a >> (b & 31)
    if op is BinaryOp.AND:
        return a & b
    if op is BinaryOp.OR:
        return a | b
    return a ^ b


def _float_result(op: BinaryOp, a: float, b: float) -> float:
    if op is BinaryOp.ADD:
        return a + b
    if op is BinaryOp.SUBTRACT:
        return a - b
    if op is BinaryOp.MULTIPLY:
        return a * b
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _compute(op: BinaryOp, left: Value, right: Value) -> Value | None:
    if left.kind not in _NUMERIC or right.kind not in _NUMERIC:
        return None
    if left.kind is ValueKind.INT and right.kind is ValueKind.INT:
        return Value.make_int(_int_result(op, int(left.number), int(right.number)))
    if op.integer_only:
        return None
    return Value.make_float(_float_result(op, left.as_float(), right.as_float()))


def binary_op(op: BinaryOp, left: Value, right: Value) -> Value | None:
    """Apply ``op`` to two values and return the result as a new value.

    References and array elements are resolved first. Two ints give a
    wrapped 32-bit int; an int mixed with a float gives a float. None is
    returned where the operation is undefined for the operand types, such as
    a float with a bitwise operator or an operand that is not a number.
    """
    return _compute(op, _resolve(left), _resolve(right))


def compound_assign(op: BinaryOp, target: Value, source: Value) -> Value | None:
    """Perform ``target op= source`` in place and return the new value.

    Writes go through references and into array elements. An int target
    combined with a float becomes a float. Returns None, leaving ``target``
    untouched, where the operation is undefined for the operand types.
    """
    operand = _resolve(source)
    while target.kind is ValueKind.REF:
        target = target.ref

    if target.kind is ValueKind.REF_ARRAY:
        result = _compute(op, _resolve(array_to_value(target)), operand)
        if result is None:
            return None
        value_to_array(target, result)
        return result

    result = _compute(op, target, operand)
    if result is None:
        return None
    target.copy_from(result)
    return result


def _stepped(value: Value, delta: int) -> Value | None:
    if value.kind is ValueKind.INT:
        return Value.make_int(int(value.number) + delta)
    if value.kind is ValueKind.FLOAT:
        return Value.make_float(value.number + delta)
    return None


def _step(value: Value, delta: int, post: bool) -> Value | None:
    while value.kind is ValueKind.REF:
        value = value.ref

    if value.kind is ValueKind.REF_ARRAY:
        element = _resolve(array_to_value(value))
        changed = _stepped(element, delta)
        if changed is None:
            return None
        value_to_array(value, changed)
        return element if post else changed

    changed = _stepped(value, delta)
    if changed is None:
        return None
    old = Value()
    old.copy_from(value)
    value.copy_from(changed)
    return old if post else changed


def pre_increment(value: Value) -> Value | None:
    """Add one in place and return the new value; None if not a number."""
    return _step(value, 1, post=False)


def pre_decrement(value: Value) -> Value | None:
    """Subtract one in place and return the new value; None if not a number."""
    return _step(value, -1, post=False)


def post_increment(value: Value) -> Value | None:
    """Add one in place and return the value as it was before."""
    return _step(value, 1, post=True)


def post_decrement(value: Value) -> Value | None:
    """Subtract one in place and return the value as it was before."""
    return _step(value, -1, post=True)