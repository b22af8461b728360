"""Character classification and conversion in the C locale.

Every function takes a character code (an ``int``) or a one-character
``str``. Codes outside the 7-bit ASCII range never belong to any class,
as with the C library's default locale.
"""

from __future__ import annotations

__all__ = [
    "is_alpha_numeric",
    "is_alpha",
    "is_ascii",
    "is_whitespace",
    "is_control",
    "is_digit",
    "is_graph",
    "is_lower_case",
    "is_printable",
    "is_punct",
    "is_space",
    "is_upper_case",
    "is_hexadecimal_digit",
    "to_ascii",
    "to_lower_case",
    "to_upper_case",
]

_SPACE_CODES = frozenset(map(ord, " \t\n\v\f\r"))
_BLANK_CODES = frozenset(map(ord, " \t"))


def _code(c: int | str) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        return ord(c)
    return int(c)


def is_alpha_numeric(c: int | str) -> bool:
    """Return True for a letter or a decimal digit."""
    return is_alpha(c) or is_digit(c)


def is_alpha(c: int | str) -> bool:
    """Return True for an upper- or lower-case letter."""
    return is_upper_case(c) or is_lower_case(c)


def is_ascii(c: int | str) -> bool:
    """Return True if the code fits in 7 bits."""
    return (_code(c) & ~0x7F) == 0


def is_whitespace(c: int | str) -> bool:
    """Return True for a blank: space or horizontal tab."""
    return _code(c) in _BLANK_CODES


def is_control(c: int | str) -> bool:
    """Return True for a control character."""
    code = _code(c)
    return 0 <= code < 0x20 or code == 0x7F


def is_digit(c: int | str) -> bool:
    """Return True for a decimal digit."""
    return ord("0") <= _code(c) <= ord("9")


def is_graph(c: int | str) -> bool:
    """Return True for a printable character other than space."""
    return 0x21 <= _code(c) <= 0x7E


def is_lower_case(c: int | str) -> bool:
    """Return True for a lower-case letter."""
    return ord("a") <= _code(c) <= ord("z")


def is_printable(c: int | str) -> bool:
    """Return True for a printable character, space included."""
    return 0x20 <= _code(c) <= 0x7E


def is_punct(c: int | str) -> bool:
    """Return True for a printable character that is neither space nor alphanumeric."""
    return is_printable(c) and not is_space(c) and not is_alpha_numeric(c)


def is_space(c: int | str) -> bool:
    """Return True for space, form feed, newline, carriage return, or a tab."""
    return _code(c) in _SPACE_CODES


def is_upper_case(c: int | str) -> bool:
    """Return True for an upper-case letter."""
    return ord("A") <= _code(c) <= ord("Z")


def is_hexadecimal_digit(c: int | str) -> bool:
    """Return True for 0-9, a-f or A-F."""
    code = _code(c)
    return (
        is_digit(code)
        or ord("a") <= code <= ord("f")
        or ord("A") <= code <= ord("F")
    )


def to_ascii(c: int | str) -> int:
    """Clear every bit above the low seven."""
    return _code(c) & 0x7F


def to_lower_case(c: int | str) -> int:
    """Return the lower-case code of a letter, any other code unchanged."""
    code = _code(c)
    return code + 0x20 if is_upper_case(code) else code


def to_upper_case(c: int | str) -> int:
    """Return the upper-case code of a letter, any other code unchanged."""
    code = _code(c)
    return code - 0x20 if is_lower_case(code) else code