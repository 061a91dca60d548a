import pytest

from pkapps.fixed import (
    fixed_div,
    fixed_mul,
    format_dec,
    format_dec_extend,
    format_fixed,
    format_hex,
    format_sdec,
    to_fixed,
)


@pytest.mark.parametrize("value", [0, 1, 3, 17, -5, 1000])
def test_to_fixed_round_trip(value):
    assert to_fixed(value) >> 10 == value


@pytest.mark.parametrize("x,y", [(2, 3), (-4, 5), (7, -7), (-3, -3), (0, 9)])
def test_mul_of_integers_is_exact(x, y):
    assert fixed_mul(to_fixed(x), to_fixed(y)) == to_fixed(x * y)


@pytest.mark.parametrize("x,y", [(6, 3), (-8, 2), (9, -3), (-12, -4)])
def test_div_of_integers_is_exact(x, y):
    assert fixed_div(to_fixed(x), to_fixed(y)) == to_fixed(x // y)


@pytest.mark.parametrize("value", [1, 5, 333, -777, 123456])
def test_one_is_identity(value):
    assert fixed_mul(value, to_fixed(1)) == value
    assert fixed_div(value, to_fixed(1)) == value


@pytest.mark.parametrize("a,b", [(3, 5), (1000, 77), (12345, 678)])
def test_sign_symmetry(a, b):
    assert fixed_mul(-a, b) == -fixed_mul(a, b)
    assert fixed_mul(a, -b) == -fixed_mul(a, b)
    assert fixed_div(-a, b) == -fixed_div(a, b)
    assert fixed_mul(-a, -b) == fixed_mul(a, b)


def test_mul_truncates_towards_zero():
    assert fixed_mul(-1, 1) == 0
    assert fixed_mul(1, 1) == 0


def test_div_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        fixed_div(to_fixed(1), 0)


def test_format_dec_plain_numbers():
    assert format_dec(0) == "0"
    assert format_dec(12345) == "12345"
    assert format_dec(2**64 - 1) == str(2**64 - 1)


def test_format_dec_wraps_negative_to_unsigned():
    assert format_dec(-1) == str(2**64 - 1)


def test_format_sdec():
    assert format_sdec(-42) == "-42"
    assert format_sdec(42) == "42"
    assert format_sdec(0) == "0"


def test_format_hex_is_padded():
    assert format_hex(255) == "00000000000000FF"


@pytest.mark.parametrize("value", [0, 1, 0xDEADBEEF, 2**64 - 1])
def test_format_hex_round_trip(value):
    text = format_hex(value)
    assert len(text) == 16
    assert int(text, 16) == value
    assert text == text.upper()


def test_format_dec_extend_zero_is_single_digit():
    assert format_dec_extend(0, 9, 4) == "0"


@pytest.mark.parametrize("value", [5, 42, 996093750, 1234567890])
def test_format_dec_extend_pads_to_field(value):
    text = format_dec_extend(value, 9, 10)
    assert len(text) == 10
    assert int(text) == value


def test_format_dec_extend_truncates_to_decimals():
    full = format_dec_extend(1234567890, 9, 10)
    assert format_dec_extend(1234567890, 9, 4) == full[:4]


def test_format_dec_extend_rejects_oversized_field():
    with pytest.raises(ValueError):
        format_dec_extend(1, 21, 3)


def test_format_fixed_half():
    assert format_fixed(to_fixed(1) // 2, 4) == "0.5000"


def test_format_fixed_learning_rate():
    assert format_fixed(to_fixed(1) // 10, 10) == "0.0996093750"


def test_format_fixed_negative_has_sign():
    half = to_fixed(1) // 2
    assert format_fixed(-half, 4) == "-" + format_fixed(half, 4)


def test_format_fixed_integer_part():
    assert format_fixed(to_fixed(3), 4).startswith("3.")
    assert format_fixed(to_fixed(12) + to_fixed(1) // 2, 4).startswith("12.")