"""Integer to text conversion with a chosen radix.

Integers are 32 bits wide, as on the boards this library targets. Only a
decimal conversion of a signed value shows a minus sign; any other radix
shows the two's complement bit pattern.
"""

from __future__ import annotations

__all__ = ["itoa", "ltoa", "utoa", "ultoa"]

_BITS = 32
_MASK = (1 << _BITS) - 1
_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _check_radix(radix: int) -> None:
    if not 2 <= radix <= len(_DIGITS):
        raise ValueError(f"invalid radix: {radix}")


def _digits(value: int, radix: int) -> str:
    out = []
    while True:
        value, rem = divmod(value, radix)
        out.append(_DIGITS[rem])
        if not value:
            break
    return "".join(reversed(out))


def _signed(value: int, radix: int) -> str:
    _check_radix(radix)
    value &= _MASK
    if radix == 10 and value >> (_BITS - 1):
        return "-" + _digits((1 << _BITS) - value, radix)
    return _digits(value, radix)


def _unsigned(value: int, radix: int) -> str:
    _check_radix(radix)
    return _digits(value & _MASK, radix)


def itoa(value: int, radix: int) -> str:
    """Convert a signed int to text in the given radix."""
    return _signed(value, radix)


def ltoa(value: int, radix: int) -> str:
    """Convert a signed long to text in the given radix."""
    return _signed(value, radix)


def utoa(value: int, radix: int) -> str:
    """Convert an unsigned int to text in the given radix."""
    return _unsigned(value, radix)


def ultoa(value: int, radix: int) -> str:
    """Convert an unsigned long to text in the given radix."""
    return _unsigned(value, radix)