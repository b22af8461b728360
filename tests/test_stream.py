import itertools
from collections import deque

import pytest

from wireapi.stream import LookaheadMode, Stream


class StreamMock(Stream):
    def __init__(self):
        counter = itertools.count()
        super().__init__(clock=lambda: next(counter))
        self._data = deque()
        self.written = bytearray()

    def feed(self, text):
        self._data.extend(text.encode("latin-1"))

    def write_byte(self, byte):
        self.written.append(byte)
        return 1

    def available(self):
        return len(self._data)

    def read(self):
        return self._data.popleft() if self._data else -1

    def peek(self):
        return self._data[0] if self._data else -1


@pytest.fixture
def mock():
    return StreamMock()


def test_find_target_contained(mock):
    mock.feed("This is a test string")
    assert Stream.find(mock, "test") is True
    assert Stream.read_string(mock) == " string"


def test_find_target_missing(mock):
    mock.feed("This is a string")
    assert Stream.find(mock, "test") is False
    assert Stream.read_string(mock) == ""


def test_find_with_length_contained(mock):
    mock.feed("This is a test string")
    assert Stream.find(mock, "test", 3) is True
    assert Stream.read_string(mock) == "t string"


def test_find_with_length_missing(mock):
    mock.feed("This is a string")
    assert Stream.find(mock, "test", 3) is False
    assert Stream.read_string(mock) == ""


def test_find_char_contained(mock):
    mock.feed("This is a test string")
    assert Stream.find(mock, "t") is True
    assert Stream.read_string(mock) == "est string"


def test_find_char_missing(mock):
    mock.feed("This is a string")
    assert Stream.find(mock, "!") is False
    assert Stream.read_string(mock) == ""


def test_find_until_terminator_before_target(mock):
    mock.feed("This is a : test string")
    assert Stream.find_until(mock, "test", ": ") is False
    assert Stream.read_string(mock) == "test string"


def test_find_until_terminator_after_target(mock):
    mock.feed("This is a test : string")
    assert Stream.find_until(mock, "test", ": ") is True
    assert Stream.read_string(mock) == " : string"


def test_find_until_no_terminator(mock):
    mock.feed("This is a test string")
    assert Stream.find_until(mock, "test", ": ") is True
    assert Stream.read_string(mock) == " string"


def test_find_until_target_missing(mock):
    mock.feed("This is a test string")
    assert Stream.find_until(mock, "abc", "def") is False
    assert Stream.read_string(mock) == ""


def test_find_multi_backtracks_partial_match(mock):
    mock.feed("11112x")
    assert Stream.find_multi(mock, ["1112"]) == 0
    assert Stream.read_string(mock) == "x"


def test_find_multi_empty_target_matches_at_once(mock):
    mock.feed("abc")
    assert Stream.find_multi(mock, ["zz", ""]) == 1
    assert Stream.read_string(mock) == "abc"


def test_find_multi_timeout(mock):
    mock.feed("abc")
    assert Stream.find_multi(mock, ["x", "y"]) == -1


def test_default_timeout(mock):
    assert mock.timeout == 1000
    assert Stream.read_bytes(mock, 1) == b""


def test_set_timeout(mock):
    mock.timeout = 100
    assert mock.timeout == 100
    mock.feed("abc")
    assert Stream.read_string(mock) == "abc"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("12", 12.0),
        ("12.34", 12.34),
        ("-12.34", -12.34),
        ("abcdef12.34", 12.34),
        ("\r\n\t 12.34", 12.34),
    ],
)
def test_parse_float_skip_all(mock, text, expected):
    mock.feed(text)
    assert Stream.parse_float(mock) == pytest.approx(expected, rel=1e-6)


def test_parse_float_many_digits(mock):
    mock.feed(
        "3.14159265358979323846264338327950288419716939937510582097494459230781640628"
        "62089986280348253421170679821480865132823066470938446095505822317253594081284811"
    )
    assert Stream.parse_float(mock) == pytest.approx(3.141592654, rel=1e-6)


def test_parse_float_larger_than_long(mock):
    mock.feed("602200000000000000000000.00")
    assert Stream.parse_float(mock) == pytest.approx(6.022e23, rel=1e-6)


def test_parse_float_skip_none_valid(mock):
    mock.feed("12.34")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_NONE) == pytest.approx(12.34, rel=1e-6)
    assert Stream.read_string(mock) == ""


def test_parse_float_skip_none_letters(mock):
    mock.feed("abcdef12.34")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_NONE) == 0
    assert Stream.read_string(mock) == "abcdef12.34"


def test_parse_float_skip_none_whitespace(mock):
    mock.feed("\r\n\t 12.34")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_NONE) == 0
    assert Stream.read_string(mock) == "\r\n\t 12.34"


def test_parse_float_skip_whitespace(mock):
    mock.feed("\r\n\t 12.34")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_WHITESPACE) == pytest.approx(
        12.34, rel=1e-6
    )
    assert Stream.read_string(mock) == ""


def test_parse_float_ignore_plain(mock):
    mock.feed("12.34")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_ALL, "a") == pytest.approx(
        12.34, rel=1e-6
    )
    assert Stream.read_string(mock) == ""


def test_parse_float_ignore_chars_skipped(mock):
    mock.feed("12a.3a4a")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_ALL, "a") == pytest.approx(
        12.34, rel=1e-6
    )
    assert Stream.read_string(mock) == ""


def test_parse_float_stops_at_other_chars(mock):
    mock.feed("1bed234")
    assert Stream.parse_float(mock, LookaheadMode.SKIP_ALL, "a") == 1.0
    assert Stream.read_string(mock) == "bed234"


@pytest.mark.parametrize(
    "text, expected",
    [("1234", 1234), ("-1234", -1234), ("abcdef1234", 1234), ("\r\n\t 1234", 1234)],
)
def test_parse_int_skip_all(mock, text, expected):
    mock.feed(text)
    assert Stream.parse_int(mock) == expected


def test_parse_int_skip_none_valid(mock):
    mock.feed("1234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_NONE) == 1234
    assert Stream.read_string(mock) == ""


def test_parse_int_skip_none_letters(mock):
    mock.feed("abcdef1234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_NONE) == 0
    assert Stream.read_string(mock) == "abcdef1234"


def test_parse_int_skip_none_whitespace(mock):
    mock.feed("\r\n\t 1234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_NONE) == 0
    assert Stream.read_string(mock) == "\r\n\t 1234"


def test_parse_int_skip_whitespace(mock):
    mock.feed("\r\n\t 1234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_WHITESPACE) == 1234
    assert Stream.read_string(mock) == ""


def test_parse_int_skip_whitespace_stops_at_letter(mock):
    mock.feed(" x12")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_WHITESPACE) == 0
    assert Stream.read_string(mock) == "x12"


def test_parse_int_ignore_plain(mock):
    mock.feed("1234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_ALL, "a") == 1234
    assert Stream.read_string(mock) == ""


def test_parse_int_ignore_chars_skipped(mock):
    mock.feed("12a3a4a")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_ALL, "a") == 1234
    assert Stream.read_string(mock) == ""


def test_parse_int_stops_at_other_chars(mock):
    mock.feed("1bed234")
    assert Stream.parse_int(mock, LookaheadMode.SKIP_ALL, "a") == 1
    assert Stream.read_string(mock) == "bed234"


def test_parse_int_empty_stream(mock):
    assert Stream.parse_int(mock) == 0


def test_read_bytes_empty(mock):
    assert Stream.read_bytes(mock, 32) == b""


def test_read_bytes_less_than_requested(mock):
    mock.feed("some stream content")
    assert Stream.read_bytes(mock, 32) == b"some stream content"
    assert Stream.read_string(mock) == ""


def test_read_bytes_more_than_requested(mock):
    mock.feed("some stream content")
    assert Stream.read_bytes(mock, 5) == b"some "
    assert Stream.read_string(mock) == "stream content"


def test_read_bytes_until_empty(mock):
    assert Stream.read_bytes_until(mock, " ", 32) == b""


def test_read_bytes_until_terminator_present(mock):
    mock.feed("some stream content")
    assert Stream.read_bytes_until(mock, " ", 32) == b"some"
    assert Stream.read_string(mock) == "stream content"


def test_read_bytes_until_terminator_absent(mock):
    mock.feed("some stream content")
    assert Stream.read_bytes_until(mock, "!", 32) == b"some stream content"
    assert Stream.read_string(mock) == ""


def test_read_string(mock):
    mock.timeout = 10
    mock.feed("This is test stream content")
    assert Stream.read_string(mock) == "This is test stream content"


def test_read_string_until_separator_present(mock):
    mock.timeout = 10
    mock.feed("This is test! lorem ipsum lalala")
    assert Stream.read_string_until(mock, "!") == "This is test"


def test_read_string_until_separator_absent(mock):
    mock.timeout = 10
    mock.feed("This is test ... lorem ipsum lalala")
    assert Stream.read_string_until(mock, "!") == "This is test ... lorem ipsum lalala"


def test_ignore_must_be_single_character(mock):
    mock.feed("12")
    with pytest.raises(ValueError):
        Stream.parse_int(mock, LookaheadMode.SKIP_ALL, "ab")


def test_stream_prints_through_write_byte(mock):
    assert Stream.println(mock, 42) == 4
    assert bytes(mock.written) == b"42\r\n"