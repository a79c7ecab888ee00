"""Script values, garbage-collected arrays and the helpers that move data between them."""

from __future__ import annotations

import enum
import math
import struct
from typing import Iterator

from .formatting import format_float, format_int
from .hashing import fnv_hash, hash_string

_MASK = 0xFFFFFFFF
_INT_MIN = -0x80000000
_MAX_RAW_ARRAY = 0x1FFFFF


def _to_i32(number: int) -> int:
    return ((int(number) - _INT_MIN) & _MASK) + _INT_MIN


def _to_f32(number: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", number))[0]
    except OverflowError:
        return math.copysign(math.inf, number)


def _trunc_i32(number: float) -> int:
    if not math.isfinite(number):
        return _INT_MIN
    whole = int(number)
    if not _INT_MIN <= whole <= 0x7FFFFFFF:
        return _INT_MIN
    return whole


class ValueKind(enum.Enum):
    """What a value currently holds."""

    INT = "int"
    FLOAT = "float"
    REF = "ref"
    ARRAY = "array"
    REF_ARRAY = "ref_array"
    RAW_ARRAY = "raw_array"
    HASH_TABLE = "hash_table"
    STRUCT = "struct"
    ITERATOR = "iterator"
    USR = "usr"

    @property
    def is_extended(self) -> bool:
        """True for every kind that is not a plain int, float or reference."""
        return self not in (ValueKind.INT, ValueKind.FLOAT, ValueKind.REF)


class ArrayKind(enum.Enum):
    """The layout of a garbage-collected array."""

    VALUE = 1
    CHAR = 2
    HASH_TABLE = 3
    VOID_HASH_TABLE = 4


class GCArray:
    """Storage shared by array, string and hash-table values.

    A VALUE array holds Values, a CHAR array holds bytes, and the two hash
    table kinds map 32-bit hashes to entries. A HASH_TABLE entry also keeps
    the key it was stored under.
    """

    def __init__(self, size: int = 0, kind: ArrayKind = ArrayKind.VALUE, skip_gc: bool = False) -> None:
        if size < 0:
            raise ValueError(f"array size must not be negative: {size}")
        self.kind = kind
        self.skip_gc = skip_gc
        self.values: list[Value] = []
        self.chars = bytearray()
        self._table: dict[int, tuple[Value, Value]] = {}
        if kind is ArrayKind.VALUE:
            self.values = [Value() for _ in range(size)]
        elif kind is ArrayKind.CHAR:
            self.chars = bytearray(size)

    @property
    def is_hash_table(self) -> bool:
        return self.kind in (ArrayKind.HASH_TABLE, ArrayKind.VOID_HASH_TABLE)

    def _require_hash_table(self) -> None:
        if not self.is_hash_table:
            raise TypeError(f"{self.kind.name} array is not a hash table")

    def grow(self, index: int) -> None:
        """Extend the array with zeroed elements so that ``index`` is valid."""
        needed = index + 1
        if self.kind is ArrayKind.VALUE:
            self.values.extend(Value() for _ in range(needed - len(self.values)))
        elif self.kind is ArrayKind.CHAR:
            if needed > len(self.chars):
                self.chars.extend(bytes(needed - len(self.chars)))
        else:
            raise TypeError("hash tables cannot be grown by index")

    def __len__(self) -> int:
        if self.kind is ArrayKind.VALUE:
            return len(self.values)
        if self.kind is ArrayKind.CHAR:
            return len(self.chars)
        return len(self._table)

    def get(self, key_hash: int) -> Value:
        """Return the value stored under ``key_hash``, creating it if absent."""
        self._require_hash_table()
        entry = self._table.get(key_hash)
        if entry is None:
            entry = (Value(), Value())
            self._table[key_hash] = entry
        return entry[0]

    def find(self, key_hash: int) -> Value | None:
        """Return the value stored under ``key_hash``, or None."""
        self._require_hash_table()
        entry = self._table.get(key_hash)
        return None if entry is None else entry[0]

    def key(self, key_hash: int) -> Value | None:
        """Return the key kept beside the entry for ``key_hash``, if any."""
        self._require_hash_table()
        if self.kind is not ArrayKind.HASH_TABLE:
            return None
        entry = self._table.get(key_hash)
        return None if entry is None else entry[1]

    def remove(self, key_hash: int) -> None:
        """Drop the entry for ``key_hash`` if it is present."""
        self._require_hash_table()
        self._table.pop(key_hash, None)

    def hashes(self) -> Iterator[int]:
        """Iterate over the hashes that have entries."""
        self._require_hash_table()
        return iter(list(self._table))

    def __contains__(self, key_hash: object) -> bool:
        return self.is_hash_table and key_hash in self._table

    def __repr__(self) -> str:
        return f"GCArray(kind={self.kind.name}, size={len(self)}, skip_gc={self.skip_gc})"


class Value:
    """A mutable script value cell.

    References point at other cells, so a Value is compared by identity.
    A REF_ARRAY refers to an element ``element`` of the array held by ``ref``.
    """

    __slots__ = ("kind", "number", "ref", "element", "storage", "raw")

    def __init__(self) -> None:
        self.clear()

    def clear(self) -> None:
        """Reset to the integer zero."""
        self.kind = ValueKind.INT
        self.number: int | float = 0
        self.ref: Value | None = None
        self.element = 0
        self.storage: GCArray | None = None
        self.raw: bytearray | None = None

    @classmethod
    def make_int(cls, number: int) -> Value:
        value = cls()
        value.number = _to_i32(number)
        return value

    @classmethod
    def make_float(cls, number: float) -> Value:
        value = cls()
        value.kind = ValueKind.FLOAT
        value.number = _to_f32(float(number))
        return value

    @classmethod
    def make_string(cls, data: str | bytes | bytearray) -> Value:
        """A character array that the collector leaves alone."""
        raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        value = cls()
        value.kind = ValueKind.ARRAY
        value.storage = GCArray(len(raw), ArrayKind.CHAR, skip_gc=True)
        value.storage.chars[:] = raw
        return value

    @classmethod
    def make_array(cls, size: int, kind: ArrayKind = ArrayKind.VALUE, skip_gc: bool = False) -> Value:
        value = cls()
        value.kind = ValueKind.ARRAY
        value.storage = GCArray(size, kind, skip_gc)
        return value

    @classmethod
    def make_container(cls, size_hint: int = 0) -> Value:
        """A host-side hash table for exposing named values to scripts."""
        value = cls()
        value.kind = ValueKind.HASH_TABLE
        value.storage = GCArray(size_hint, ArrayKind.VOID_HASH_TABLE, skip_gc=True)
        return value

    @classmethod
    def make_ref(cls, target: Value) -> Value:
        value = cls()
        value.kind = ValueKind.REF
        value.ref = target
        return value

    @classmethod
    def make_ref_array(cls, target: Value, element: int) -> Value:
        """A reference to element ``element`` of the array in ``target``."""
        value = cls()
        value.kind = ValueKind.REF_ARRAY
        value.ref = target
        value.element = element
        return value

    def copy_from(self, other: Value) -> None:
        """Become a shallow copy of ``other``; storage is shared."""
        self.kind = other.kind
        self.number = other.number
        self.ref = other.ref
        self.element = other.element
        self.storage = other.storage
        self.raw = other.raw

    @property
    def is_array_type(self) -> bool:
        """True for arrays, element references and hash tables."""
        return self.kind in (ValueKind.ARRAY, ValueKind.REF_ARRAY, ValueKind.HASH_TABLE)

    @property
    def bits(self) -> int:
        """The unsigned 32-bit pattern of an int or float; 0 otherwise."""
        if self.kind is ValueKind.INT:
            return int(self.number) & _MASK
        if self.kind is ValueKind.FLOAT:
            return struct.unpack("<I", struct.pack("<f", self.number))[0]
        return 0

    def as_int(self) -> int:
        kind = self.kind
        if kind is ValueKind.INT:
            return int(self.number)
        if kind is ValueKind.REF:
            return self.ref.as_int()
        if kind is ValueKind.FLOAT:
            return _trunc_i32(self.number)
        if kind is ValueKind.REF_ARRAY:
            return _element_value(self).as_int()
        return 0

    def as_float(self) -> float:
        kind = self.kind
        if kind is ValueKind.FLOAT:
            return float(self.number)
        if kind is ValueKind.REF:
            return self.ref.as_float()
        if kind is ValueKind.INT:
            return _to_f32(float(self.number))
        if kind is ValueKind.REF_ARRAY:
            return _element_value(self).as_float()
        return 0.0

    def as_string(self) -> str:
        """Render the value as text the way scripts print it."""
        kind = self.kind
        if kind is ValueKind.ARRAY:
            if self.storage.kind is ArrayKind.CHAR:
                text = bytes(self.storage.chars).split(b"\0", 1)[0]
                return text.decode("utf-8", errors="replace")
            return ""
        if kind is ValueKind.REF_ARRAY:
            if self.ref.is_array_type:
                return array_to_value(self).as_string()
            return self.ref.as_string()
        if kind is ValueKind.FLOAT:
            return format_float(self.number)
        if kind is ValueKind.INT:
            return format_int(self.number)
        if kind is ValueKind.REF:
            return self.ref.as_string()
        return ""

    def array(self) -> GCArray | None:
        """The array storage behind this value, following references."""
        if self.kind is ValueKind.REF:
            return self.ref.array()
        if self.kind is not ValueKind.ARRAY:
            return None
        return self.storage

    def c_str(self) -> bytes | None:
        """The bytes of a character array, or None if this is not a string."""
        storage = self.array()
        if storage is None or storage.kind is not ArrayKind.CHAR:
            return None
        return bytes(storage.chars)

    def get_hash(self) -> int:
        """A 32-bit hash: the bit pattern of numbers, FNV-1 of strings."""
        kind = self.kind
        if kind in (ValueKind.INT, ValueKind.FLOAT):
            return self.bits
        if kind is ValueKind.REF:
            return self.ref.get_hash()
        if kind is ValueKind.REF_ARRAY:
            return array_to_value(self).get_hash()
        if kind is ValueKind.ARRAY and self.storage.kind is ArrayKind.CHAR:
            return fnv_hash(self.storage.chars)
        return 0

    def __repr__(self) -> str:
        kind = self.kind
        if kind in (ValueKind.INT, ValueKind.FLOAT):
            return f"Value({kind.name}, {self.number!r})"
        if kind is ValueKind.REF_ARRAY:
            return f"Value(REF_ARRAY, element={self.element})"
        if kind is ValueKind.RAW_ARRAY:
            return f"Value(RAW_ARRAY, size={len(self.raw)})"
        if self.storage is not None:
            return f"Value({kind.name}, {self.storage!r})"
        return f"Value({kind.name})"


def _clone(value: Value) -> Value:
    result = Value()
    result.copy_from(value)
    return result


def _element_value(ref_array: Value) -> Value:
    """Read an element without growing the array."""
    index = ref_array.element
    target = ref_array.ref
    if target.kind is ValueKind.RAW_ARRAY:
        return Value.make_int(target.raw[index] if index < len(target.raw) else 0)
    storage = target.storage
    if storage is None:
        return Value()
    if storage.kind is ArrayKind.VALUE:
        return _clone(storage.values[index]) if index < len(storage.values) else Value()
    if storage.kind is ArrayKind.CHAR:
        return Value.make_int(storage.chars[index] if index < len(storage.chars) else 0)
    return Value()


def array_to_value(array: Value, index: int | None = None) -> Value:
    """Return a copy of the element ``array`` refers to.

    ``index`` overrides the element held by the reference. Reading past the
    end of a collected value array grows it; an uncollected one yields zero.
    """
    position = array.element if index is None else index
    if position < 0:
        raise IndexError(f"array index must not be negative: {position}")
    target = array.ref
    if target.kind is ValueKind.RAW_ARRAY:
        return Value.make_int(target.raw[position] if position < len(target.raw) else 0)
    storage = target.storage
    if storage is None:
        return Value()
    if storage.kind is ArrayKind.VALUE:
        if position >= len(storage.values):
            if storage.skip_gc:
                return Value()
            storage.grow(position)
        return _clone(storage.values[position])
    if storage.kind is ArrayKind.CHAR:
        return Value.make_int(storage.chars[position] if position < len(storage.chars) else 0)
    return Value()


def value_to_array(array: Value, value: Value) -> None:
    """Store ``value`` into the element ``array`` refers to.

    Byte arrays keep the low eight bits and ignore writes past their end;
    value arrays grow to fit.
    """
    position = array.element
    if position < 0:
        raise IndexError(f"array index must not be negative: {position}")
    target = array.ref
    if target.kind is ValueKind.RAW_ARRAY:
        if position < len(target.raw):
            target.raw[position] = value.bits & 0xFF
        return
    storage = target.storage
    if storage is None:
        return
    if storage.kind is ArrayKind.CHAR:
        if position < len(storage.chars):
            storage.chars[position] = value.bits & 0xFF
    elif storage.kind is ArrayKind.VALUE:
        if position >= len(storage.values):
            storage.grow(position)
        _assign(storage.values[position], value)


def _assign(target: Value, source: Value) -> None:
    """Script assignment: follows references and writes through element references."""
    if target.kind is ValueKind.REF:
        _assign(target.ref, source.ref if source.kind is ValueKind.REF else source)
        return
    if source.kind is ValueKind.REF:
        _assign(target, source.ref)
        return
    if source.kind is ValueKind.REF_ARRAY:
        _assign(target, array_to_value(source))
        return
    if target.kind is ValueKind.REF_ARRAY:
        if not source.kind.is_extended:
            value_to_array(target, source)
            return
        holder = target.ref
        if holder.is_array_type and holder.storage is not None and holder.storage.kind is ArrayKind.VALUE:
            storage = holder.storage
            position = target.element
            if position >= len(storage.values):
                if storage.skip_gc:
                    return
                storage.grow(position)
            storage.values[position].copy_from(source)
            return
    target.copy_from(source)


def count_of_array_element(array: Value) -> Value | None:
    """The element count of an array, as an int value.

    An element reference is resolved first; if the element is not itself an
    array, the element is returned unchanged. None means ``array`` is not an
    array at all.
    """
    if array.kind is ValueKind.REF:
        return count_of_array_element(array.ref)
    if not array.is_array_type:
        return None
    if array.kind is ValueKind.REF_ARRAY:
        element = array_to_value(array)
        counted = count_of_array_element(element)
        return element if counted is None else counted
    return Value.make_int(len(array.storage))


def add_value_to_container(container: Value, name: str, value: Value) -> None:
    """Expose ``value`` under ``name`` as a reference inside ``container``."""
    entry = container.storage.get(hash_string(name))
    entry.clear()
    entry.kind = ValueKind.REF
    entry.ref = value


def add_array_to_container(container: Value, name: str, data: bytearray) -> None:
    """Expose a host byte buffer under ``name``; writes go straight to ``data``."""
    if len(data) > _MAX_RAW_ARRAY:
        raise ValueError(f"raw array of {len(data)} bytes exceeds {_MAX_RAW_ARRAY}")
    entry = container.storage.get(hash_string(name))
    entry.clear()
    entry.kind = ValueKind.RAW_ARRAY
    entry.raw = data