"""Character streams with timed reads, searching and number parsing."""

from __future__ import annotations

import time
from abc import abstractmethod
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Union

from wireapi.printer import Print

__all__ = [
    "PARSE_TIMEOUT",
    "NO_IGNORE_CHAR",
    "LookaheadMode",
    "Stream",
]

PARSE_TIMEOUT = 1000
NO_IGNORE_CHAR = "\x01"

_WHITESPACE = frozenset(b" \t\r\n")
_DIGITS = frozenset(b"0123456789")
_MINUS = ord("-")
_DOT = ord(".")
_FLOAT32_MAX = 3.4028234663852886e38

Target = Union[str, bytes, bytearray, int]


class LookaheadMode(Enum):
    """How number parsing skips characters before the first valid one."""

    SKIP_ALL = 0
    """Every invalid character is skipped."""
    SKIP_NONE = 1
    """Nothing is skipped; the stream is left alone unless the next character is valid."""
    SKIP_WHITESPACE = 2
    """Only spaces, tabs, carriage returns and line feeds are skipped."""


def _millis() -> float:
    return time.monotonic() * 1000.0


def _as_bytes(target: Target) -> bytes:
    if isinstance(target, int):
        return bytes([target & 0xFF])
    if isinstance(target, str):
        return target.encode("latin-1")
    return bytes(target)


def _char_code(ch: str | int) -> int:
    if isinstance(ch, int):
        return ch & 0xFF
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ord(ch) & 0xFF


def _to_float32(value: float) -> float:
    if abs(value) > _FLOAT32_MAX:
        return float("inf") if value > 0 else float("-inf")
    import struct

    return struct.unpack("<f", struct.pack("<f", value))[0]


class Stream(Print):
    """A readable and writable character stream.

    Subclasses supply ``available``, ``read``, ``peek`` and ``write_byte``.
    ``read`` and ``peek`` return a byte value, or -1 when nothing is waiting.
    The blocking helpers retry until ``timeout`` milliseconds pass, measured
    with ``clock``, a callable returning milliseconds.
    """

    def __init__(
        self,
        timeout: float = PARSE_TIMEOUT,
        clock: Callable[[], float] | None = None,
    ) -> None:
        super().__init__()
        self.timeout = timeout
        self._clock = clock if clock is not None else _millis

    @abstractmethod
    def available(self) -> int:
        """Return the number of bytes ready to read."""

    @abstractmethod
    def read(self) -> int:
        """Remove and return the next byte, or -1 if none is waiting."""

    @abstractmethod
    def peek(self) -> int:
        """Return the next byte without removing it, or -1 if none is waiting."""

    def _timed(self, op: Callable[[], int]) -> int:
        start = self._clock()
        while True:
            c = op()
            if c >= 0:
                return c
            if self._clock() - start >= self.timeout:
                return -1

    def _timed_read(self) -> int:
        return self._timed(self.read)

    def _timed_peek(self) -> int:
        return self._timed(self.peek)

    def _peek_next_digit(self, lookahead: LookaheadMode, detect_decimal: bool) -> int:
        while True:
            c = self._timed_peek()
            if c < 0 or c == _MINUS or c in _DIGITS or (detect_decimal and c == _DOT):
                return c
            if lookahead is LookaheadMode.SKIP_NONE:
                return -1
            if lookahead is LookaheadMode.SKIP_WHITESPACE and c not in _WHITESPACE:
                return -1
            self.read()

    def find(self, target: Target, length: int | None = None) -> bool:
        """Read until ``target`` (its first ``length`` bytes, if given) is seen.

        Returns False if the stream times out first.
        """
        data = _as_bytes(target)
        if length is not None:
            data = data[:length]
        return self.find_multi([data]) == 0

    def find_until(self, target: Target, terminator: Target | None = None) -> bool:
        """Like ``find``, but give up with False once ``terminator`` is seen."""
        if terminator is None:
            return self.find(target)
        return self.find_multi([_as_bytes(target), _as_bytes(terminator)]) == 0

    def find_multi(self, targets: Sequence[Target]) -> int:
        """Read until one of ``targets`` is seen; return its index, or -1 on timeout.

        An empty target matches at once.
        """
        patterns = [_as_bytes(t) for t in targets]
        for i, pattern in enumerate(patterns):
            if not pattern:
                return i
        indexes = [0] * len(patterns)

        while True:
            c = self._timed_read()
            if c < 0:
                return -1
            for i, pattern in enumerate(patterns):
                idx = indexes[i]
                if c == pattern[idx]:
                    idx += 1
                    indexes[i] = idx
                    if idx == len(pattern):
                        return i
                    continue
                if idx == 0:
                    continue
                # Fall back to the longest prefix that still matches what was read.
                orig = idx
                while True:
                    idx -= 1
                    if c == pattern[idx]:
                        if idx == 0:
                            idx += 1
                            break
                        diff = orig - idx
                        if pattern[:idx] == pattern[diff:diff + idx]:
                            idx += 1
                            break
                    if idx == 0:
                        break
                indexes[i] = idx

    def parse_int(
        self,
        lookahead: LookaheadMode = LookaheadMode.SKIP_ALL,
        ignore: str | int = NO_IGNORE_CHAR,
    ) -> int:
        """Return the first integer in the stream, or 0 if none arrives in time.

        ``ignore`` is skipped once parsing has started.
        """
        ignore_code = _char_code(ignore)
        c = self._peek_next_digit(lookahead, False)
        if c < 0:
            return 0
        negative = False
        value = 0
        while True:
            if c == ignore_code:
                pass
            elif c == _MINUS:
                negative = True
            elif c in _DIGITS:
                value = value * 10 + (c - ord("0"))
            self.read()
            c = self._timed_peek()
            if not (c in _DIGITS or c == ignore_code):
                break
        return -value if negative else value

    def parse_float(
        self,
        lookahead: LookaheadMode = LookaheadMode.SKIP_ALL,
        ignore: str | int = NO_IGNORE_CHAR,
    ) -> float:
        """Return the first decimal number in the stream as a single-precision value.

        Returns 0.0 if none arrives in time.
        """
        ignore_code = _char_code(ignore)
        c = self._peek_next_digit(lookahead, True)
        if c < 0:
            return 0.0
        negative = False
        is_fraction = False
        value = 0.0
        fraction = 1.0
        while True:
            if c == ignore_code:
                pass
            elif c == _MINUS:
                negative = True
            elif c == _DOT:
                is_fraction = True
            elif c in _DIGITS:
                digit = c - ord("0")
                if is_fraction:
                    fraction *= 0.1
                    value += fraction * digit
                else:
                    value = value * 10 + digit
            self.read()
            c = self._timed_peek()
            if not (c in _DIGITS or (c == _DOT and not is_fraction) or c == ignore_code):
                break
        return _to_float32(-value if negative else value)

    def read_bytes(self, length: int) -> bytes:
        """Read up to ``length`` bytes, stopping early on timeout."""
        out = bytearray()
        while len(out) < length:
            c = self._timed_read()
            if c < 0:
                break
            out.append(c)
        return bytes(out)

    def read_bytes_until(self, terminator: str | int, length: int) -> bytes:
        """Read up to ``length`` bytes, stopping at ``terminator`` or on timeout.

        The terminator is consumed but not returned.
        """
        term = _char_code(terminator)
        out = bytearray()
        while len(out) < length:
            c = self._timed_read()
            if c < 0 or c == term:
                break
            out.append(c)
        return bytes(out)

    def read_string(self) -> str:
        """Read characters until the stream times out."""
        out = bytearray()
        c = self._timed_read()
        while c >= 0:
            out.append(c)
            c = self._timed_read()
        return out.decode("latin-1")

    def read_string_until(self, terminator: str | int) -> str:
        """Read characters until ``terminator`` or a timeout; the terminator is consumed."""
        term = _char_code(terminator)
        out = bytearray()
        c = self._timed_read()
        while c >= 0 and c != term:
            out.append(c)
            c = self._timed_read()
        return out.decode("latin-1")