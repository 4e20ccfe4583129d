from __future__ import annotations

from dataclasses import dataclass

MISSING_ARGUMENT = "missing_argument"
UNRECOGNIZED_IDENTITY = "unrecognized_identity"
MISSING_OPEN_TAG = "missing_open_tag"
MISSING_CLOSE_TAG = "missing_close_tag"
UPSTREAM_FETCH_ERROR = "upstream_fetch_error"
INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class PageError:
    kind: str
    message: str
    operation: str | None = None
