from datetime import timedelta

from everpage_api.util import mask_token, redact_query, timedelta_ms, to_hex


def test_to_hex_lowercase_two_chars_per_byte() -> None:
    assert to_hex(bytes([0, 255, 16])) == "00ff10"
    assert to_hex(bytes([0xAB, 0xCD])) == "abcd"
    assert to_hex(b"") == ""
    assert len(to_hex(bytes(range(256)))) == 512


def test_to_hex_accepts_bytearray() -> None:
    assert to_hex(bytearray(b"\x01\x02")) == "0102"


def test_mask_token_keeps_short_prefix() -> None:
    assert mask_token("S=s1:U=abcdef:E=123") == "S=s1:U..."
    assert mask_token("abc") == "***"


def test_redact_query_hides_auth_token() -> None:
    out = redact_query("authToken=secret&noteId=abc")
    assert "secret" not in out
    assert "noteId=abc" in out


def test_timedelta_ms() -> None:
    assert timedelta_ms(timedelta(milliseconds=1500)) == 1500.0
