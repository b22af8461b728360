"""Serial line settings and the hardware serial port interface."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from enum import Enum

from wireapi.stream import Stream

__all__ = [
    "SERIAL_PARITY_MASK",
    "SERIAL_STOP_BIT_MASK",
    "SERIAL_DATA_MASK",
    "Parity",
    "StopBits",
    "DataBits",
    "SerialConfig",
    "HardwareSerial",
    "serial_config",
    "PRESETS",
    "SERIAL_8N1",
]

SERIAL_PARITY_MASK = 0x00F
SERIAL_STOP_BIT_MASK = 0x0F0
SERIAL_DATA_MASK = 0xF00


class Parity(Enum):
    """Parity setting, encoded in the low nibble of a config code."""

    EVEN = 0x1
    ODD = 0x2
    NONE = 0x3
    MARK = 0x4
    SPACE = 0x5

    @property
    def letter(self) -> str:
        return self.name[0]

    @classmethod
    def from_letter(cls, letter: str) -> "Parity":
        for parity in cls:
            if parity.letter == letter.upper():
                return parity
        raise ValueError(f"unknown parity: {letter!r}")


class StopBits(Enum):
    """Stop bit setting, encoded in the second nibble of a config code."""

    ONE = 0x10
    ONE_AND_HALF = 0x20
    TWO = 0x30

    @property
    def count(self) -> float:
        return {StopBits.ONE: 1, StopBits.ONE_AND_HALF: 1.5, StopBits.TWO: 2}[self]

    @classmethod
    def from_count(cls, count: float) -> "StopBits":
        for stop in cls:
            if stop.count == count:
                return stop
        raise ValueError(f"unsupported stop bits: {count!r}")


class DataBits(Enum):
    """Data bit setting, encoded in the third nibble of a config code."""

    FIVE = 0x100
    SIX = 0x200
    SEVEN = 0x300
    EIGHT = 0x400

    @property
    def bits(self) -> int:
        return (self.value >> 8) + 4

    @classmethod
    def from_bits(cls, bits: int) -> "DataBits":
        for data in cls:
            if data.bits == bits:
                return data
        raise ValueError(f"unsupported data bits: {bits!r}")


@dataclass(frozen=True)
class SerialConfig:
    """Data bits, parity and stop bits of a serial line."""

    data_bits: DataBits = DataBits.EIGHT
    parity: Parity = Parity.NONE
    stop_bits: StopBits = StopBits.ONE

    @property
    def code(self) -> int:
        """The packed configuration code."""
        return self.stop_bits.value | self.parity.value | self.data_bits.value

    @property
    def name(self) -> str:
        """Short form such as ``8N1``."""
        count = self.stop_bits.count
        stop = str(int(count)) if count == int(count) else str(count)
        return f"{self.data_bits.bits}{self.parity.letter}{stop}"

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_code(cls, code: int) -> "SerialConfig":
        """Unpack a configuration code; raise ValueError if it is not valid."""
        if code & ~(SERIAL_PARITY_MASK | SERIAL_STOP_BIT_MASK | SERIAL_DATA_MASK):
            raise ValueError(f"invalid serial config code: {code:#x}")
        return cls(
            DataBits(code & SERIAL_DATA_MASK),
            Parity(code & SERIAL_PARITY_MASK),
            StopBits(code & SERIAL_STOP_BIT_MASK),
        )


def serial_config(
    data_bits: DataBits | int = 8,
    parity: Parity | str = "N",
    stop_bits: StopBits | float = 1,
) -> SerialConfig:
    """Build a config from enums or plain values such as ``8, "N", 1``."""
    if not isinstance(data_bits, DataBits):
        data_bits = DataBits.from_bits(data_bits)
    if not isinstance(parity, Parity):
        parity = Parity.from_letter(parity)
    if not isinstance(stop_bits, StopBits):
        stop_bits = StopBits.from_count(stop_bits)
    return SerialConfig(data_bits, parity, stop_bits)


PRESETS: dict[str, int] = {
    f"SERIAL_{cfg.name}": cfg.code
    for cfg in (
        SerialConfig(data, parity, stop)
        for parity in Parity
        for stop in (StopBits.ONE, StopBits.TWO)
        for data in DataBits
    )
}

SERIAL_8N1 = SerialConfig().code


class HardwareSerial(Stream):
    """A serial port: a Stream that is opened with a baud rate and line settings.

    Subclasses supply ``_open`` and ``_close`` plus the Stream primitives.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.baudrate: int | None = None
        self.config: SerialConfig | None = None

    def begin(self, baudrate: int, config: SerialConfig | int = SERIAL_8N1) -> None:
        """Open the port at ``baudrate`` with the given line settings."""
        if baudrate <= 0:
            raise ValueError(f"baud rate must be positive, got {baudrate}")
        if not isinstance(config, SerialConfig):
            config = SerialConfig.from_code(config)
        self._open(baudrate, config)
        self.baudrate = baudrate
        self.config = config

    def end(self) -> None:
        """Close the port."""
        self._close()
        self.baudrate = None
        self.config = None

    def __bool__(self) -> bool:
        return self.baudrate is not None

    @abstractmethod
    def _open(self, baudrate: int, config: SerialConfig) -> None:
        """Set up the hardware."""

    @abstractmethod
    def _close(self) -> None:
        """Release the hardware."""