# wrenchvm

The runtime core of a small embeddable scripting virtual machine, in pure
Python with no dependencies. It provides:

- **Values**: `wrenchvm.values.Value` holds ints (wrapped to 32 bits),
  single-precision floats, references, element references, and array,
  string and hash-table containers backed by `GCArray`. Helpers such as
  `array_to_value`, `value_to_array`, `count_of_array_element`,
  `add_value_to_container` and `add_array_to_container` move data between
  them.
- **Arithmetic**: `wrenchvm.arithmetic.binary_op`, `compound_assign` and the
  pre/post increment and decrement functions, with the operators listed in
  `BinaryOp`.
- **Other operations**: `wrenchvm.operations.compare` (with `CompareOp`),
  `negate`, `bitwise_not`, `logical_not`, `assign`, `index`, `index_hash`,
  `assign_to_hash_table` and `push_iterator`, including how arrays grow on
  indexing and how references are followed.
- **Hashing**: 32-bit FNV-1 hashes (`wrenchvm.hashing.fnv_hash`,
  `hash_string`) and a prime-sized open hash table
  (`wrenchvm.hashtable.HashTable`).
- **Formatting**: `wrenchvm.formatting.sprintf` and the number-to-text
  conversions `format_int` and `format_float`.
- **Standard library**: the `math::`, `str::`, `file::`, `io::`, `time::`,
  `msg::` and `std::` functions, registered on a `wrenchvm.state.State` by
  `load_math_lib`, `load_string_lib`, `load_file_lib`, `load_message_lib`,
  `load_std_lib`, or all at once by `wrenchvm.lib_std.load_all_libs`.

## Install

```
pip install .
```

To install with the test tools:

```
pip install ".[test]"
```

## Example

```python
from wrenchvm.state import State
from wrenchvm.lib_std import load_all_libs
from wrenchvm.values import Value

state = State()
load_all_libs(state)

result = state.call_library("math::sqrt", Value.make_float(16.0))
print(result.as_float())          # 4.0

text = state.call_library(
    "str::format",
    Value.make_string(b"%d items, %s"),
    Value.make_int(3),
    Value.make_string(b"ok"),
)
print(text.as_string())           # 3 items, ok
```

`call_library` also accepts plain Python ints, floats, strings and bytes and
converts them to values; it raises `KeyError` for a signature that has not
been registered.

Hashing and formatting can be used without a state:

```python
from wrenchvm.hashing import hash_string
from wrenchvm.formatting import sprintf, format_float

hash_string("std::rand")
sprintf("%04x", [255])            # "00ff"
format_float(1.5, 32)             # "1.5"
```

## What it does not do

This package has no script compiler, no bytecode loader and no instruction
loop: it cannot run script source or compiled programs. `State` keeps
registered host and library functions, but nothing in the package calls the
host functions registered with `register_function`. There is no
command-line tool.

## Tests

```
pytest
```