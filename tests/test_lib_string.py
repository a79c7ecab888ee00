import pytest

from wrenchvm.lib_string import load_string_lib
from wrenchvm.state import State
from wrenchvm.values import Value, ValueKind


@pytest.fixture
def state():
    st = State()
    load_string_lib(st)
    return st


def call(state, name, *args):
    return state.call_library(f"str::{name}", *args)


def test_strlen(state):
    assert call(state, "strlen", "hello").as_int() == len("hello")
    assert call(state, "strlen", Value.make_ref(Value.make_string("abc"))).as_int() == 3
    assert call(state, "strlen", 12).as_int() == 0


def test_format_builds_string(state):
    result = call(state, "format", "%s-%d", "ab", 5)
    assert result.kind is ValueKind.ARRAY
    assert result.c_str() == b"ab-5"


def test_format_with_non_string_format_is_empty(state):
    assert call(state, "format", 7).c_str() == b""


def test_printf_writes_and_returns_length(state, capsys):
    count = call(state, "printf", "x=%d\n", 9)
    assert capsys.readouterr().out == "x=9\n"
    assert count.as_int() == len("x=9\n")


def test_sprintf_writes_through_reference(state):
    target = Value()
    count = call(state, "sprintf", Value.make_ref(target), "v%d", 42)
    assert target.c_str() == b"v42"
    assert count.as_int() == len(b"v42")


def test_sprintf_requires_reference(state):
    target = Value.make_int(3)
    assert call(state, "sprintf", target, "v%d", 1).as_int() == 0
    assert target.as_int() == 3


@pytest.mark.parametrize("ch, space, digit, alpha", [
    (" ", 1, 0, 0), ("\t", 1, 0, 0), ("7", 0, 1, 0), ("q", 0, 0, 1), ("Q", 0, 0, 1), ("#", 0, 0, 0),
])
def test_character_classes(state, ch, space, digit, alpha):
    assert call(state, "isspace", ord(ch)).as_int() == space
    assert call(state, "isdigit", ord(ch)).as_int() == digit
    assert call(state, "isalpha", ord(ch)).as_int() == alpha


def test_mid(state):
    assert call(state, "mid", "hello", 1, 3).c_str() == b"hello"[1:4]
    assert call(state, "mid", "hello", 2).c_str() == b"hello"[2:]
    assert call(state, "mid", "hello", 3, 99).c_str() == b"hello"[3:]
    assert call(state, "mid", "hello", 10).c_str() == b""
    assert call(state, "mid", "", 0).kind is ValueKind.INT


def test_chr(state):
    assert call(state, "chr", "hello", ord("l")).as_int() == "hello".index("l")
    assert call(state, "chr", "hello", ord("z")).as_int() == -1
    assert call(state, "chr", "hello", 0).as_int() == len("hello")
    assert call(state, "chr", 5, ord("a")).as_int() == -1


@pytest.mark.parametrize("letter", "azAZm")
def test_case_round_trip(state, letter):
    lower = call(state, "tolower", ord(letter)).as_int()
    upper = call(state, "toupper", ord(letter)).as_int()
    assert chr(lower) == letter.lower()
    assert chr(upper) == letter.upper()
    assert call(state, "tolower", upper).as_int() == lower


@pytest.mark.parametrize("number", [0, 17, -250, 123456, 2147483647])
def test_tol_round_trip(state, number):
    assert call(state, "tol", str(number)).as_int() == number
    assert call(state, "tol", f"  {number}xyz").as_int() == number


@pytest.mark.parametrize("number", [1, 255, 48879])
def test_tol_with_base(state, number):
    assert call(state, "tol", f"{number:x}", 16).as_int() == number
    assert call(state, "tol", f"0x{number:x}", 16).as_int() == number
    assert call(state, "tol", f"{number:b}", 2).as_int() == number
    assert call(state, "tol", f"0{number:o}", 0).as_int() == number


def test_tol_rejects_non_string(state):
    assert call(state, "tol", 5).as_int() == 0