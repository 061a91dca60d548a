"""Fixed-point arithmetic with ten fractional bits, and its text formatting."""

DECIMAL_LOC = 10
_ONE = 1 << DECIMAL_LOC
_UINT64_MASK = (1 << 64) - 1
_DIGITS = 21


def to_fixed(num):
    """Convert an integer to fixed point."""
    return num << DECIMAL_LOC


def _split_sign(a, b):
    negative = (a < 0) != (b < 0)
    return abs(a), abs(b), negative


def fixed_mul(a, b):
    """Multiply two fixed-point numbers, truncating towards zero."""
    a, b, negative = _split_sign(a, b)
    result = a * b // _ONE
    return -result if negative else result


def fixed_div(a, b):
    """Divide two fixed-point numbers, truncating towards zero."""
    a, b, negative = _split_sign(a, b)
    result = a * _ONE // b
    return -result if negative else result


def format_dec(num):
    """Format an unsigned 64-bit integer in decimal."""
    return str(num & _UINT64_MASK)


def format_sdec(num):
    """Format a signed integer in decimal."""
    if num < 0:
        return "-" + format_dec(-num)
    return format_dec(num)


def format_dec_extend(num, size, decimals):
    """Format the low ``size + 1`` digits of ``num``, zero padded, cut to ``decimals`` characters.

    Zero is always written as a single ``"0"``.
    """
    if size < 0 or size >= _DIGITS:
        raise ValueError(f"digit field size out of range: {size}")
    if num == 0:
        return "0"
    padded = f"{num % 10 ** _DIGITS:0{_DIGITS}d}"
    start = _DIGITS - 1 - size
    return padded[start:start + decimals]


def format_hex(num):
    """Format an unsigned 64-bit integer as 16 upper-case hex digits."""
    return f"{num & _UINT64_MASK:016X}"


def format_fixed(num, decimals):
    """Format a fixed-point number with at most ``decimals`` fraction digits."""
    sign = ""
    if num < 0:
        sign = "-"
        num = -num
    integer = num >> DECIMAL_LOC
    fraction = (num & (_ONE - 1)) * 10 ** DECIMAL_LOC // _ONE
    return (
        sign
        + format_sdec(integer)
        + "."
        + format_dec_extend(fraction, DECIMAL_LOC - 1, decimals)
    )