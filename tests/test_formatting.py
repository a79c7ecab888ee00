import pytest

from wrenchvm.formatting import format_float, format_int, sprintf


@pytest.mark.parametrize("number", [0, 7, 42, -1, -12345, 2147483647, -(2**31)])
def test_format_int_round_trip(number):
    assert int(format_int(number)) == number


def test_format_float_whole_number_drops_point():
    assert format_float(2.0) == "2"


def test_format_float_zero():
    assert format_float(0.0) == "0"


def test_format_float_five_places():
    assert format_float(1.0 / 3.0) == "0.33333"


@pytest.mark.parametrize("number", [0.5, 1.25, -3.75, 100.125, 12345.5, -0.5])
def test_format_float_round_trip(number):
    text = format_float(number)
    assert float(text) == pytest.approx(number, abs=1e-4)
    assert not text.endswith("0")
    assert not text.endswith(".")


def test_format_float_negative_has_sign():
    assert format_float(-1.25).startswith("-")
    assert format_float(-1.25)[1:] == format_float(1.25)


def test_format_float_limit_is_prefix():
    assert format_float(3.14159, 3) == format_float(3.14159)[:3]


def test_literal_text_passes_through():
    assert sprintf("plain text", []) == "plain text"


def test_none_format_is_empty():
    assert sprintf(None, [1]) == ""


def test_percent_escape():
    assert sprintf("a%%b", []) == sprintf("a%cb", [ord("%")])


def test_invalid_specifier_is_dropped():
    assert sprintf("a%qb", []) == sprintf("ab", [])


@pytest.mark.parametrize("number", [0, 5, -42, 123456, -(2**31), 2**31 - 1])
def test_decimal_matches_format_int(number):
    assert sprintf("%d", [number]) == format_int(number)
    assert sprintf("%i", [number]) == format_int(number)


def test_unsigned_of_negative():
    assert int(sprintf("%u", [-1])) == (1 << 32) - 1


def test_float_argument_truncates():
    assert sprintf("%d", [3.9]) == format_int(3)


def test_missing_argument_is_zero():
    assert sprintf("%d", []) == format_int(0)


@pytest.mark.parametrize("number", [0, 1, 255, 0xDEADBEEF, 4096])
def test_hex_round_trip(number):
    lower = sprintf("%x", [number])
    assert int(lower, 16) == number
    assert lower == lower.lower()
    assert sprintf("%X", [number]) == lower.upper()


def test_alternate_hex_prefix():
    text = sprintf("%#x", [300])
    assert text.startswith("0x")
    assert int(text[2:], 16) == 300


def test_pointer_is_prefixed_upper_hex():
    assert sprintf("%p", [255]) == "0x" + sprintf("%X", [255])


def test_binary_keeps_low_sixteen_bits():
    number = 0x12345
    assert int(sprintf("%b", [number]), 2) == number & 0xFFFF


def test_octal_keeps_five_digits():
    number = 0o1234567
    text = sprintf("%o", [number])
    assert len(text) <= 5
    assert int(text, 8) == number % (8**5)


def test_zero_padding():
    assert sprintf("%05d", [42]) == format_int(42).rjust(5, "0")


def test_right_justified_string():
    text = sprintf("%6s", ["ab"])
    assert len(text) == 6
    assert text.endswith("ab")
    assert text[:4].strip() == ""


def test_left_justified_string():
    text = sprintf("%-6s", ["ab"])
    assert len(text) == 6
    assert text.startswith("ab")
    assert text[2:].strip() == ""


def test_string_ignores_zero_padding():
    text = sprintf("%06s", ["ab"])
    assert text.endswith("ab")
    assert "0" not in text


def test_string_argument_passes_through():
    assert sprintf("<%s>", ["hello"]) == "<" + "hello" + ">"


def test_bytes_string_argument():
    assert sprintf("%s", [b"raw"]) == sprintf("%s", ["raw"])


def test_non_string_for_s_empties_result():
    assert sprintf("prefix %s", [5]) == ""


def test_missing_string_argument_is_blank():
    assert sprintf("[%s]", []) == sprintf("[]", [])


def test_char_takes_low_byte():
    assert sprintf("%c", [65]) == chr(65)
    assert sprintf("%c", [256 + 65]) == chr(65)


def test_arguments_consumed_in_order():
    text = sprintf("%d,%s,%d", [1, "x", 2])
    assert text.split(",") == [format_int(1), "x", format_int(2)]


def test_duck_typed_arguments():
    class Arg:
        def as_int(self):
            return 7

        def c_str(self):
            return "hi"

    assert sprintf("%d", [Arg()]) == format_int(7)
    assert sprintf("%s", [Arg()]) == "hi"