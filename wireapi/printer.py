"""Text and number output on top of a byte sink."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

__all__ = [
    "DEC",
    "HEX",
    "OCT",
    "BIN",
    "Printable",
    "Print",
    "Server",
    "format_number",
    "format_float",
]

DEC = 10
HEX = 16
OCT = 8
BIN = 2

_CRLF = b"\r\n"
_OVERFLOW_LIMIT = 4294967040.0


def format_number(n: int, base: int = DEC) -> str:
    """Return the digits of a non-negative integer in the given base.

    A base below 2 is taken as 10. Digits above 9 are upper-case letters.
    """
    if n < 0:
        raise ValueError("format_number takes a non-negative integer")
    if base < 2:
        base = DEC
    out = []
    while True:
        n, rem = divmod(n, base)
        out.append(chr(ord("0") + rem) if rem < 10 else chr(ord("A") + rem - 10))
        if not n:
            break
    return "".join(reversed(out))


def format_float(number: float, digits: int = 2) -> str:
    """Return a float rounded to a fixed number of decimals.

    Gives "nan", "inf" or "ovf" for values that cannot be shown.
    """
    if digits < 0:
        digits = 2
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf"
    if number > _OVERFLOW_LIMIT or number < -_OVERFLOW_LIMIT:
        return "ovf"

    parts = []
    if number < 0.0:
        parts.append("-")
        number = -number

    rounding = 0.5
    for _ in range(digits):
        rounding /= 10.0
    number += rounding

    int_part = int(number)
    remainder = number - float(int_part)
    parts.append(format_number(int_part))
    if digits > 0:
        parts.append(".")
    for _ in range(digits):
        remainder *= 10.0
        digit = int(remainder)
        parts.append(format_number(digit))
        remainder -= digit
    return "".join(parts)


def _as_unsigned(n: int) -> int:
    if n >= 0:
        return n
    bits = 32 if n >= -(1 << 31) else 64
    return n & ((1 << bits) - 1)


class Printable(ABC):
    """An object that knows how to print itself."""

    @abstractmethod
    def print_to(self, printer: "Print") -> int:
        """Print this object and return the number of bytes written."""


class Print(ABC):
    """A byte sink with print and println helpers.

    Subclasses supply ``write_byte``; everything else is built on it.
    """

    def __init__(self) -> None:
        self.write_error = 0

    @abstractmethod
    def write_byte(self, byte: int) -> int:
        """Write one byte; return 1 on success and 0 on failure."""

    def write(self, data: Any) -> int:
        """Write bytes, text or a single byte value; return the count written.

        Writing stops at the first byte that fails.
        """
        if data is None:
            return 0
        if isinstance(data, int):
            return self.write_byte(data & 0xFF)
        if isinstance(data, str):
            data = data.encode("utf-8")
        count = 0
        for byte in bytes(data):
            if not self.write_byte(byte):
                break
            count += 1
        return count

    def available_for_write(self) -> int:
        """Bytes that can be written without blocking; 0 means unknown."""
        return 0

    def clear_write_error(self) -> None:
        """Reset the recorded write error."""
        self.write_error = 0

    def print(self, value: Any, base: int | None = None) -> int:
        """Print a value and return the number of bytes written.

        For integers ``base`` is the radix (decimal by default; 0 writes the
        low byte of the value as raw data). For floats it is the number of
        decimals, 2 by default.
        """
        if isinstance(value, Printable):
            return value.print_to(self)
        if isinstance(value, (str, bytes, bytearray, memoryview)):
            return self.write(value)
        if isinstance(value, float):
            return self.write(format_float(value, 2 if base is None else base))
        if isinstance(value, int):
            return self._print_int(value, DEC if base is None else base)
        raise TypeError(f"cannot print value of type {type(value).__name__}")

    def _print_int(self, n: int, base: int) -> int:
        if base == 0:
            return self.write_byte(n & 0xFF)
        if base == DEC and n < 0:
            sign = self.write("-")
            return self.write(format_number(-n, DEC)) + sign
        return self.write(format_number(_as_unsigned(n), base))

    def println(self, value: Any = None, base: int | None = None) -> int:
        """Print a value, if any, followed by a CR LF line ending."""
        written = 0 if value is None else self.print(value, base)
        return written + self.write(_CRLF)

    def printf(self, fmt: str, *args: Any) -> int:
        """Print ``fmt % args`` and return the number of bytes written."""
        return self.write(fmt % args)

    def flush(self) -> None:
        """Wait until all output is sent; nothing to do by default."""


class Server(Print):
    """A Print that also accepts incoming connections once started."""

    @abstractmethod
    def begin(self) -> None:
        """Start listening."""