from __future__ import annotations

from datetime import timedelta
from urllib.parse import parse_qsl, urlencode


def to_hex(data: bytes) -> str:
    return bytes(data).hex()


def mask_token(token: str, keep: int = 6) -> str:
    if len(token) <= keep:
        return "*" * len(token)
    return token[:keep] + "..."


_REDACTED_PARAMS = {"authToken"}


def redact_query(query: str) -> str:
    pairs = parse_qsl(query, keep_blank_values=True)
    return urlencode([(k, "***" if k in _REDACTED_PARAMS else v) for (k, v) in pairs])


def timedelta_ms(delta: timedelta) -> float:
    return delta.total_seconds() * 1000.0
