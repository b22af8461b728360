# wireapi

Pure-Python versions of the classic microcontroller I/O abstractions:
character helpers, integer-to-text conversion, text printing on a byte sink,
stream searching and number parsing, serial line settings, pools of sample
buffers, and a registry for pluggable USB function modules. Useful for
simulating firmware logic and writing host-side test doubles.

The package has no dependencies outside the standard library.

## Installation

```
pip install wireapi
```

## Modules

- `wireapi.wcharacter`: character classification in the C locale, taking a
  code or a one-character string: `is_alpha`, `is_alpha_numeric`,
  `is_ascii`, `is_whitespace` (space or tab), `is_space`, `is_control`,
  `is_digit`, `is_graph`, `is_printable`, `is_punct`, `is_lower_case`,
  `is_upper_case`, `is_hexadecimal_digit`, and the conversions `to_ascii`,
  `to_lower_case`, `to_upper_case` (which return codes).
- `wireapi.itoa`: `itoa`, `ltoa`, `utoa` and `ultoa` turn a 32-bit integer
  into text in a radix from 2 to 36. Only a signed decimal conversion shows a
  minus sign; other radixes show the two's complement bit pattern. A radix
  outside 2..36 raises `ValueError`.
- `wireapi.printer`: the abstract `Print` class, built on one method,
  `write_byte`. It offers `write`, `print`, `println` (ending in CR LF),
  `printf` (`%`-style formatting), `flush`, `available_for_write`, a
  `write_error` attribute with `clear_write_error`, and the radix constants
  `DEC`, `HEX`, `OCT`, `BIN`. For integers the second argument of `print` is
  the radix (0 writes the low byte as raw data); for floats it is the number
  of decimals, 2 by default. Also the `Printable` interface (`print_to`),
  the abstract `Server` (`begin`), and the helpers `format_number` and
  `format_float` (which gives `nan`, `inf` or `ovf` for values it cannot
  show).
- `wireapi.stream`: the abstract `Stream` class, a `Print` that also
  supplies `available`, `read` and `peek`. On top of those it offers `find`,
  `find_until`, `find_multi`, `parse_int`, `parse_float` (single precision),
  `read_bytes`, `read_bytes_until`, `read_string` and `read_string_until`.
  Blocking helpers retry until `timeout` milliseconds pass (1000 by default),
  measured with an optional `clock` callable. `LookaheadMode` (`SKIP_ALL`,
  `SKIP_NONE`, `SKIP_WHITESPACE`) controls what number parsing skips.
- `wireapi.serial`: `Parity`, `StopBits`, `DataBits`, the frozen
  `SerialConfig` (with `code`, `name` such as `8N1`, and `from_code`),
  `serial_config(8, "N", 1)`, the `PRESETS` table of named codes,
  `SERIAL_8N1`, and the abstract `HardwareSerial` with `begin` and `end`.
- `wireapi.dma_pool`: `SPSCQueue`, a bounded FIFO; `DMABuffer`, a block of
  interleaved samples with flags and a timestamp; `DMAPool`, which carves a
  fixed number of aligned buffers from one block of memory and hands them
  between a write (free) queue and a read (filled) queue; and the
  `DMABufferFlag` flags.
- `wireapi.pluggable_usb`: `USBSetup`, the eight-byte control setup packet
  (`from_bytes`, `to_bytes`); the abstract `PluggableUSBModule`; and
  `PluggableUSB`, which hands out interface and endpoint numbers as modules
  are plugged and routes `setup`, `get_interface`, `get_descriptor` and
  `get_short_name` to them. A module that fails in `get_interface` raises
  `USBError`.

## Example: a printer that collects output

```python
from wireapi.printer import Print

class StringPrinter(Print):
    def __init__(self):
        super().__init__()
        self.text = ""

    def write_byte(self, byte):
        self.text += chr(byte)
        return 1

p = StringPrinter()
p.print(255, 16)
p.print(" ")
p.println(3.14159, 3)
print(repr(p.text))  # 'FF 3.142\r\n'
```

## Example: parsing a stream

```python
from collections import deque
from wireapi.stream import Stream, LookaheadMode

class BufferStream(Stream):
    def __init__(self, text):
        super().__init__(timeout=0)
        self._data = deque(text.encode())

    def write_byte(self, byte):
        self._data.append(byte)
        return 1

    def available(self):
        return len(self._data)

    def read(self):
        return self._data.popleft() if self._data else -1

    def peek(self):
        return self._data[0] if self._data else -1

s = BufferStream("temp: -12 C")
print(s.parse_int())                         # -12
print(s.find("C"))                           # True
print(s.parse_int(LookaheadMode.SKIP_NONE))  # 0
```

## Example: a buffer pool

```python
from wireapi.dma_pool import DMAPool, DMABufferFlag

pool = DMAPool(n_samples=4, n_channels=2, n_buffers=3)
buf = pool.alloc(DMABufferFlag.WRITE)   # take a free buffer
buf[0] = 1234
buf.release()                           # now waiting in the read queue
ready = pool.alloc(DMABufferFlag.READ)
print(ready[0])                         # 1234
ready.release()                         # back to the free queue
```

## What the package does not do

The classes here are abstractions. `HardwareSerial` does not open any real
port: a subclass supplies `_open`, `_close` and the stream primitives.
`PluggableUSB` only numbers interfaces and endpoints and dispatches requests
to modules; it does not talk to a USB controller or send anything on a bus.
`DMAPool` buffers are ordinary memory, with no cache maintenance or
hardware transfers.

## Running the tests

```
pip install wireapi[test]
pytest
```