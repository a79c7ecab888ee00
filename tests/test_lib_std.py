import pytest

from wrenchvm.lib_std import load_all_libs, load_std_lib
from wrenchvm.state import State


@pytest.fixture
def state():
    st = State()
    load_std_lib(st)
    return st


def test_first_value_after_seed_one(state):
    state.call_library("std::srand", 1)
    assert state.call_library("std::rand", 2147483647).as_int() == 16807


def test_unseeded_generator_stays_at_zero(state):
    values = [state.call_library("std::rand", 100).as_int() for _ in range(5)]
    assert values == [0] * 5


def test_same_seed_same_sequence(state):
    state.call_library("std::srand", 1234)
    first = [state.call_library("std::rand", 1000).as_int() for _ in range(10)]
    state.call_library("std::srand", 1234)
    second = [state.call_library("std::rand", 1000).as_int() for _ in range(10)]
    assert first == second


def test_values_stay_in_range(state):
    state.call_library("std::srand", 99)
    values = [state.call_library("std::rand", 6).as_int() for _ in range(200)]
    assert all(0 <= v < 6 for v in values)
    assert len(set(values)) > 1


def test_states_have_separate_generators(state):
    other = State()
    load_std_lib(other)
    state.call_library("std::srand", 7)
    assert other.call_library("std::rand", 50).as_int() == 0


def test_zero_range_raises(state):
    state.call_library("std::srand", 5)
    with pytest.raises(ZeroDivisionError):
        state.call_library("std::rand", 0)


def test_wrong_argument_count_returns_zero(state):
    state.call_library("std::srand", 5)
    assert state.call_library("std::rand").as_int() == 0


def test_load_all_libs_registers_every_library():
    state = State()
    with pytest.raises(KeyError):
        state.call_library("str::strlen", "abc")
    load_all_libs(state)
    assert state.call_library("str::strlen", "abc").as_int() == len("abc")
    assert state.call_library("math::floor", 2.5).as_float() <= 2.5
    assert state.call_library("msg::peek", "nothing").as_int() == 0
    state.call_library("std::srand", 1)
    assert state.call_library("std::rand", 2147483647).as_int() == 16807
    assert callable(state.library_function("file::read"))