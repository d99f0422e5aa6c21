import pytest

from gbf.api.irep.cursor import ByteCursor
from gbf.api.irep.errors import TruncatedInputError


def test_peek_and_get_sequence():
    cur = ByteCursor(bytes([1, 2, 3]))
    assert cur.peek() == 1
    assert cur.peek() == 1
    assert cur.get() == 1
    assert cur.peek() == 2
    assert cur.get() == 2
    assert cur.position == 2
    assert cur.remaining == 1


def test_peek_and_get_at_end_raise_truncated():
    cur = ByteCursor(b"\x07")
    cur.get()
    assert cur.at_end
    with pytest.raises(TruncatedInputError):
        cur.peek()
    with pytest.raises(TruncatedInputError) as info:
        cur.get()
    assert info.value.offset == 1
    assert info.value.needed == 1
    assert info.value.available == 0


def test_read_word_is_big_endian():
    cur = ByteCursor(bytes([0x12, 0x34, 0x56, 0x78]))
    assert cur.read_word() == 0x12345678
    assert cur.position == 4


def test_read_word_bounds_and_sequence():
    cur = ByteCursor(bytes([0xFF] * 4 + [0, 0, 0, 0] + [0, 0, 0, 3]))
    assert cur.read_word() == 0xFFFFFFFF
    assert cur.read_word() == 0
    assert cur.read_word() == 3


def test_read_word_short_buffer_raises():
    cur = ByteCursor(bytes([0, 0, 1]))
    with pytest.raises(TruncatedInputError) as info:
        cur.read_word()
    assert info.value.needed == 4
    assert info.value.available == 3


def test_read_escaped_string_simple_and_empty():
    cur = ByteCursor(b"hello\x00\x00rest")
    assert cur.read_escaped_string() == "hello"
    assert cur.position == 6
    assert cur.read_escaped_string() == ""
    assert cur.position == 7


def test_read_escaped_string_keeps_escaped_nul():
    cur = ByteCursor(b"a\\\x00b\x00")
    value = cur.read_escaped_string()
    assert value == "a\x00b"
    assert cur.at_end


def test_read_escaped_string_keeps_escaped_backslash():
    cur = ByteCursor(b"x\\\\y\x00")
    assert cur.read_escaped_string() == "x\\y"


def test_read_escaped_string_replaces_invalid_utf8():
    cur = ByteCursor(b"ok\xff\x00")
    assert cur.read_escaped_string() == "ok\ufffd"


def test_read_escaped_string_decodes_utf8():
    cur = ByteCursor("größe".encode("utf-8") + b"\x00")
    assert cur.read_escaped_string() == "größe"


def test_read_escaped_string_without_terminator_raises():
    with pytest.raises(TruncatedInputError):
        ByteCursor(b"abc").read_escaped_string()


def test_read_escaped_string_dangling_escape_raises():
    with pytest.raises(TruncatedInputError):
        ByteCursor(b"abc\\").read_escaped_string()


def test_read_bytes_exact():
    cur = ByteCursor(b"GBFxyz")
    assert cur.read_bytes(3) == b"GBF"
    with pytest.raises(TruncatedInputError):
        cur.read_bytes(4)
