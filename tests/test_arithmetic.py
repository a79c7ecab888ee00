import pytest

from wrenchvm.arithmetic import (
    BinaryOp,
    binary_op,
    compound_assign,
    post_decrement,
    post_increment,
    pre_decrement,
    pre_increment,
)
from wrenchvm.values import Value, ValueKind, array_to_value, value_to_array


@pytest.mark.parametrize("a, b", [(7, 35), (-100, 3), (0, -9)])
def test_add_then_subtract_round_trips(a, b):
    total = binary_op(BinaryOp.ADD, Value.make_int(a), Value.make_int(b))
    back = binary_op(BinaryOp.SUBTRACT, total, Value.make_int(b))
    assert back.kind is ValueKind.INT
    assert back.number == a


def test_int_plus_float_gives_float():
    result = binary_op(BinaryOp.ADD, Value.make_int(2), Value.make_float(0.5))
    assert result.kind is ValueKind.FLOAT
    assert result.number == 2.5


def test_addition_wraps_to_32_bits():
    result = binary_op(BinaryOp.ADD, Value.make_int(0x7FFFFFFF), Value.make_int(1))
    assert result.number == -0x80000000


@pytest.mark.parametrize("a, b", [(-7, 2), (7, -2), (9, 4)])
def test_division_truncates_toward_zero(a, b):
    quotient = binary_op(BinaryOp.DIVIDE, Value.make_int(a), Value.make_int(b)).number
    remainder = binary_op(BinaryOp.MOD, Value.make_int(a), Value.make_int(b)).number
    assert quotient * b + remainder == a
    assert abs(remainder) < abs(b)
    assert remainder == 0 or (remainder < 0) == (a < 0)


def test_integer_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        binary_op(BinaryOp.DIVIDE, Value.make_int(1), Value.make_int(0))


def test_bitwise_with_float_is_undefined():
    assert binary_op(BinaryOp.AND, Value.make_int(3), Value.make_float(1.0)) is None


def test_xor_with_itself_is_zero():
    value = Value.make_int(12345)
    assert binary_op(BinaryOp.XOR, value, value).number == 0


def test_shift_round_trip():
    shifted = binary_op(BinaryOp.LEFT_SHIFT, Value.make_int(5), Value.make_int(3))
    back = binary_op(BinaryOp.RIGHT_SHIFT, shifted, Value.make_int(3))
    assert back.number == 5


def test_references_are_followed():
    a, b = Value.make_int(11), Value.make_int(4)
    direct = binary_op(BinaryOp.MULTIPLY, a, b)
    through = binary_op(BinaryOp.MULTIPLY, Value.make_ref(a), Value.make_ref(b))
    assert through.number == direct.number


def test_array_element_operand():
    array = Value.make_array(3)
    element = Value.make_ref_array(array, 1)
    value_to_array(element, Value.make_int(4))
    result = binary_op(BinaryOp.MULTIPLY, element, Value.make_int(1))
    assert result.number == 4


def test_non_number_operand_is_undefined():
    assert binary_op(BinaryOp.ADD, Value.make_string("abc"), Value.make_int(1)) is None


def test_compound_assign_round_trip():
    target = Value.make_int(10)
    compound_assign(BinaryOp.ADD, target, Value.make_int(5))
    compound_assign(BinaryOp.SUBTRACT, target, Value.make_int(5))
    assert target.kind is ValueKind.INT
    assert target.number == 10


def test_compound_assign_int_with_float_becomes_float():
    target = Value.make_int(1)
    result = compound_assign(BinaryOp.MULTIPLY, target, Value.make_float(1.0))
    assert target.kind is ValueKind.FLOAT
    assert target.number == result.number


def test_compound_assign_through_reference():
    cell = Value.make_int(3)
    compound_assign(BinaryOp.ADD, Value.make_ref(cell), Value.make_int(4))
    compound_assign(BinaryOp.SUBTRACT, cell, Value.make_int(4))
    assert cell.number == 3


def test_compound_assign_writes_back_to_array():
    array = Value.make_array(2)
    element = Value.make_ref_array(array, 0)
    value_to_array(element, Value.make_int(6))
    result = compound_assign(BinaryOp.ADD, element, Value.make_int(6))
    assert array_to_value(element).number == result.number


def test_compound_assign_on_string_character():
    text = Value.make_string(b"a")
    compound_assign(BinaryOp.ADD, Value.make_ref_array(text, 0), Value.make_int(1))
    assert text.c_str() == b"b"


def test_compound_assign_undefined_leaves_target():
    target = Value.make_float(1.5)
    assert compound_assign(BinaryOp.LEFT_SHIFT, target, Value.make_int(1)) is None
    assert target.number == 1.5


def test_pre_increment_and_decrement_round_trip():
    value = Value.make_int(41)
    bumped = pre_increment(value)
    assert bumped.number == value.number
    pre_decrement(value)
    assert value.number == 41


def test_post_increment_returns_old_value():
    value = Value.make_float(2.5)
    old = post_increment(value)
    assert old.number == 2.5
    assert value.number > old.number
    post_decrement(value)
    assert value.number == 2.5


def test_post_increment_through_reference():
    cell = Value.make_int(7)
    old = post_increment(Value.make_ref(cell))
    assert old.number == 7
    assert pre_decrement(cell).number == 7


def test_increment_array_element():
    array = Value.make_array(1)
    element = Value.make_ref_array(array, 0)
    value_to_array(element, Value.make_int(9))
    new = pre_increment(element)
    assert array_to_value(element).number == new.number
    assert post_decrement(element).number == new.number
    assert array_to_value(element).number == 9


def test_increment_of_string_is_undefined():
    assert pre_increment(Value.make_string("x")) is None