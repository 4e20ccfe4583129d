from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable

from ..util import to_hex
from .entities import Resource

EN_NOTE_END_TAG = "</en-note>"

_EN_NOTE_BEGIN_TAG_RE = re.compile(r"<en-note[^>]*>")
_EN_MEDIA_TAG_RE = re.compile(r"<en-media[^>]*>")
_HASH_ATTR_RE = re.compile(r'hash="([0-9a-f]+)"')

_EN_MEDIA_TAG_OPEN = "<en-media"
_IMG_TAG_OPEN = "<img"


@dataclass(frozen=True)
class ContentTransform:
    body: str
    error: str | None
    unknown_hashes: list[str] = field(default_factory=list)


def substitute_matches(pattern: re.Pattern[str], text: str, replace: Callable[[re.Match[str]], str]) -> str:
    """
    Replace every non-overlapping match of ``pattern`` in ``text``, scanning
    left to right. Text between matches is copied through unchanged.
    """
    out: list[str] = []
    pos = 0
    length = len(text)
    while pos <= length:
        m = pattern.search(text, pos)
        if not m:
            break
        out.append(text[pos : m.start()])
        out.append(replace(m))
        if m.end() > m.start():
            pos = m.end()
            continue
        # Empty match: copy one character so the scan always advances.
        if m.start() < length:
            out.append(text[m.start()])
        pos = m.start() + 1
    out.append(text[pos:])
    return "".join(out)


def build_resource_index(resources: Iterable[Resource]) -> dict[str, Resource]:
    # A later resource with the same hash replaces an earlier one.
    return {to_hex(r.body_hash): r for r in resources}


def en_media_to_img(
    tag: str,
    resources: dict[str, Resource],
    url_prefix: str,
    unknown_hashes: list[str] | None = None,
) -> str:
    hash_match = _HASH_ATTR_RE.search(tag)
    if not hash_match:
        return tag

    hex_hash = hash_match.group(1)
    res = resources.get(hex_hash)
    if res is None:
        if unknown_hashes is not None:
            unknown_hashes.append(hex_hash)
        return f"Unknown resource (hash={hex_hash})"

    begin = len(_EN_MEDIA_TAG_OPEN)
    return (
        _IMG_TAG_OPEN
        + tag[begin : hash_match.start()]
        + f'src="{url_prefix}res/{res.guid}" '
        + tag[hash_match.start() :]
    )


def transform_content(content: str, resources: Iterable[Resource], url_prefix: str) -> ContentTransform:
    begin = _EN_NOTE_BEGIN_TAG_RE.search(content)
    if not begin:
        return ContentTransform(body="", error="missing_open_tag")

    start = begin.end()
    # Deliberately the last occurrence anywhere in the content, not a balanced match.
    end = content.rfind(EN_NOTE_END_TAG)
    if end < start:
        return ContentTransform(body="", error="missing_close_tag")

    body = content[start:end]
    index = build_resource_index(resources)
    unknown: list[str] = []

    def replace(m: re.Match[str]) -> str:
        return en_media_to_img(m.group(0), index, url_prefix, unknown)

    return ContentTransform(body=substitute_matches(_EN_MEDIA_TAG_RE, body, replace), error=None, unknown_hashes=unknown)
