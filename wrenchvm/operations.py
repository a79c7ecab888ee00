"""Comparison, unary, assignment, indexing and iteration operations on script values."""

from __future__ import annotations

import enum
import operator
from typing import Callable

from .values import ArrayKind, GCArray, Value, ValueKind, _assign, array_to_value

_MASK = 0xFFFFFFFF
_NUMERIC = (ValueKind.INT, ValueKind.FLOAT)


class CompareOp(enum.Enum):
    """Comparison and logical operators that yield a truth value."""

    GREATER = ">"
    LESS = "<"
    EQUAL = "=="
    AND = "&&"
    OR = "||"


_COMPARATORS: dict[CompareOp, Callable[[float, float], bool]] = {
    CompareOp.GREATER: operator.gt,
    CompareOp.LESS: operator.lt,
    CompareOp.EQUAL: operator.eq,
    CompareOp.AND: lambda a, b: bool(a) and bool(b),
    CompareOp.OR: lambda a, b: bool(a) or bool(b),
}


def _deref(value: Value) -> Value:
    while value.kind is ValueKind.REF:
        value = value.ref
    return value


def _signed_byte(byte: int) -> int:
    return byte - 0x100 if byte & 0x80 else byte


def _check_position(position: int) -> None:
    if position < 0:
        raise IndexError(f"array index must not be negative: {position}")


def compare(op: CompareOp, left: Value, right: Value) -> bool:
    """Evaluate ``left op right``.

    Numbers compare by value, an int mixed with a float as floats. Array
    elements are resolved first. Two other non-numeric values are equal when
    their hashes match; every other operator is false for them, and a number
    never compares with a non-numeric value.
    """
    left = _deref(left)
    right = _deref(right)
    left_number = left.kind in _NUMERIC
    right_number = right.kind in _NUMERIC
    function = _COMPARATORS[op]

    if left_number and right_number:
        if left.kind is ValueKind.INT and right.kind is ValueKind.INT:
            return function(int(left.number), int(right.number))
        return function(left.as_float(), right.as_float())

    if left.kind is ValueKind.REF_ARRAY and right.kind is ValueKind.REF_ARRAY:
        return compare(op, array_to_value(left), array_to_value(right))

    if left_number != right_number:
        if left.kind is ValueKind.REF_ARRAY:
            return compare(op, array_to_value(left), right)
        if right.kind is ValueKind.REF_ARRAY:
            return compare(op, left, array_to_value(right))
        return False

    return function(0, 0) and left.get_hash() == right.get_hash()


def negate(value: Value) -> Value | None:
    """Return the arithmetic negation, or None if the value is not numeric.

    Bytes of character and raw arrays are read as signed characters; an
    element past the end of an array negates to zero.
    """
    value = _deref(value)
    if value.kind is ValueKind.INT:
        return Value.make_int(-int(value.number))
    if value.kind is ValueKind.FLOAT:
        return Value.make_float(-value.number)
    if value.kind is not ValueKind.REF_ARRAY:
        return None

    holder = value.ref
    position = value.element
    _check_position(position)
    if holder.kind is ValueKind.RAW_ARRAY:
        inside = position < len(holder.raw)
        return Value.make_int(-_signed_byte(holder.raw[position]) if inside else 0)
    storage = holder.storage
    if storage is None:
        return None
    if storage.kind is ArrayKind.VALUE:
        if position < len(storage.values):
            return negate(storage.values[position])
        return Value()
    if storage.kind is ArrayKind.CHAR:
        inside = position < len(storage.chars)
        return Value.make_int(-_signed_byte(storage.chars[position]) if inside else 0)
    return None


def bitwise_not(value: Value) -> Value:
    """Return the bitwise complement of an int; anything else gives zero."""
    value = _deref(value)
    if value.kind is ValueKind.INT:
        return Value.make_int(~int(value.number))
    if value.kind is ValueKind.REF_ARRAY:
        return bitwise_not(array_to_value(value))
    return Value()


def logical_not(value: Value) -> bool:
    """True when a number's bit pattern is zero; false for non-numeric values."""
    value = _deref(value)
    if value.kind in _NUMERIC:
        return value.bits == 0
    if value.kind is ValueKind.REF_ARRAY:
        return logical_not(array_to_value(value))
    return False


def assign(target: Value, source: Value) -> None:
    """Script assignment ``target = source``.

    Writes go through references and into array elements; reading from an
    element reference copies the element.
    """
    _assign(target, source)


def _become_value_array(container: Value, size: int) -> None:
    container.clear()
    container.kind = ValueKind.ARRAY
    container.storage = GCArray(size, ArrayKind.VALUE)


def _index_int(position: int, container: Value) -> Value:
    if container.kind is ValueKind.HASH_TABLE:
        return Value.make_ref(container.storage.get(position & _MASK))
    _check_position(position)
    if container.kind is ValueKind.RAW_ARRAY:
        if position >= len(container.raw):
            return Value()
    elif container.kind is ValueKind.ARRAY:
        storage = container.storage
        if position >= len(storage):
            if storage.skip_gc:
                return Value()
            storage.grow(position)
    else:
        _become_value_array(container, position + 1)
    return Value.make_ref_array(container, position)


def index(key: Value, container: Value) -> Value | None:
    """Return a reference to ``container[key]``.

    An int key on anything that is not an array turns it into a value array
    large enough to hold the key; collected arrays grow to fit, while
    uncollected and raw arrays give zero past their end. Hash tables accept
    any key and create the entry on first use. Returns None where indexing
    is undefined, such as with a float key.
    """
    key = _deref(key)
    container = _deref(container)
    if key.kind is ValueKind.FLOAT:
        return None
    if key.kind is ValueKind.INT:
        return _index_int(int(key.number), container)
    if container.kind is ValueKind.HASH_TABLE:
        return Value.make_ref(container.storage.get(key.get_hash()))
    return None


def index_hash(value: Value, key_hash: int) -> Value | None:
    """Look up a member by hash.

    Hash tables create the entry if needed and return a reference to it; a
    one-byte raw array entry is returned as a reference to its single byte.
    Struct members that do not exist, and numbers, give zero. None means
    the value has no members.
    """
    value = _deref(value)
    if value.kind in _NUMERIC:
        return Value()

    if value.kind is ValueKind.REF_ARRAY:
        holder = value.ref
        storage = holder.storage
        if holder.kind is ValueKind.RAW_ARRAY or storage is None or storage.kind is not ArrayKind.VALUE:
            return None
        position = value.element
        _check_position(position)
        if position >= len(storage.values):
            storage.grow(position)
        return index_hash(storage.values[position], key_hash)

    if value.kind is ValueKind.STRUCT:
        storage = value.storage
        if storage is not None and storage.is_hash_table:
            member = storage.find(key_hash)
            if member is not None:
                return Value.make_ref(member)
        return Value()

    if value.kind is ValueKind.HASH_TABLE:
        entry = value.storage.get(key_hash)
        if entry.kind is ValueKind.RAW_ARRAY and len(entry.raw) == 1:
            return Value.make_ref_array(entry, 0)
        return Value.make_ref(entry)

    return None


def assign_to_hash_table(key: Value, value: Value, table: Value) -> Value:
    """Store ``value`` under ``key`` in ``table`` and return the stored entry.

    A ``table`` that is not yet a hash table becomes an empty one first.
    The key is kept beside the entry.
    """
    if value.kind is ValueKind.REF:
        value = value.ref
    if table.kind is ValueKind.REF:
        table = table.ref

    if table.kind is not ValueKind.HASH_TABLE:
        table.clear()
        table.kind = ValueKind.HASH_TABLE
        table.storage = GCArray(0, ArrayKind.HASH_TABLE)

    key_hash = key.get_hash()
    entry = table.storage.get(key_hash)
    entry.copy_from(value)
    stored_key = table.storage.key(key_hash)
    if stored_key is not None:
        stored_key.copy_from(key.ref if key.kind is ValueKind.REF else key)
    return entry


def push_iterator(value: Value) -> Value | None:
    """Return an iterator over an array or hash table.

    A number cannot be iterated: it is reset to zero and None is returned.
    """
    value = _deref(value)
    if value.kind in _NUMERIC:
        value.clear()
        return None
    if value.kind in (ValueKind.ARRAY, ValueKind.HASH_TABLE):
        iterator = Value()
        iterator.kind = ValueKind.ITERATOR
        iterator.storage = value.storage
        return iterator
    return None