import pytest

from rawed.keys import ESC, Key, KeyDecoder, ctrl, key_label, parse_key_name
from tests.helpers import byte_reader


def decode(data: bytes):
    return KeyDecoder(byte_reader(data)).read_key()


def decode_all(data: bytes, count: int):
    decoder = KeyDecoder(byte_reader(data))
    return [decoder.read_key() for _ in range(count)]


def test_plain_bytes_pass_through():
    assert decode(b"a") == ord("a")
    assert decode(b"\r") == ord("\r")
    assert decode(bytes([ctrl("q")])) == 17


def test_del_byte_is_backspace():
    key = decode(b"\x7f")
    assert key is Key.BACKSPACE


@pytest.mark.parametrize("seq, expected", [
    (b"\x1b[A", Key.ARROW_UP),
    (b"\x1b[B", Key.ARROW_DOWN),
    (b"\x1b[C", Key.ARROW_RIGHT),
    (b"\x1b[D", Key.ARROW_LEFT),
    (b"\x1b[H", Key.HOME),
    (b"\x1b[F", Key.END),
    (b"\x1b[1~", Key.HOME),
    (b"\x1b[7~", Key.HOME),
    (b"\x1b[3~", Key.DELETE),
    (b"\x1b[4~", Key.END),
    (b"\x1b[8~", Key.END),
    (b"\x1b[5~", Key.PAGE_UP),
    (b"\x1b[6~", Key.PAGE_DOWN),
    (b"\x1bOH", Key.HOME),
    (b"\x1bOF", Key.END),
])
def test_escape_sequences(seq, expected):
    assert decode(seq) is expected


@pytest.mark.parametrize("seq", [
    b"\x1b",
    b"\x1b[",
    b"\x1b[5",
    b"\x1b[2~",
    b"\x1b[5x",
    b"\x1b[Z",
    b"\x1bx",
    b"\x1bOA",
])
def test_unknown_or_short_sequences_are_bare_escape(seq):
    assert decode(seq) == ESC


def test_timeouts_before_first_byte_are_retried():
    reads = iter([b"", b"", b"", b"z"])
    decoder = KeyDecoder(lambda: next(reads))
    assert decoder.read_key() == ord("z")


def test_consecutive_keys():
    assert decode_all(b"\x1b[Ah\x1b[3~", 3) == [Key.ARROW_UP, ord("h"), Key.DELETE]


def test_parse_key_name():
    assert parse_key_name("ctrl-q") == ctrl("q")
    assert parse_key_name("Ctrl+S") == ctrl("s")
    assert parse_key_name("^d") == ctrl("d")
    assert parse_key_name("esc") == ESC
    assert parse_key_name("pageup") is Key.PAGE_UP
    assert parse_key_name("x") == ord("x")
    with pytest.raises(ValueError):
        parse_key_name("hyper-q")


def test_key_label():
    assert key_label(ctrl("q")) == "Ctrl-Q"
    assert key_label(ESC) == "Esc"
    assert key_label(Key.ARROW_UP) == "Up"


def test_escape_always_consumes_two_following_bytes():
    assert decode_all(b"\x1bxyz", 2) == [ESC, ord("z")]
