from __future__ import annotations

import re
from dataclasses import dataclass

GUID_PATTERN = "[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"

_GUID_RE = re.compile(GUID_PATTERN)
_LINK_RE = re.compile(r"^evernote:///view/\d+/s\d+/(" + GUID_PATTERN + r")/")
_WEB_ADDRESS_RE = re.compile(r"^https://www.evernote.com/shard/s\d+/view/notebook/(" + GUID_PATTERN + ")")


@dataclass(frozen=True)
class GuidResolution:
    guid: str | None
    form: str | None
    error: str | None


def resolve_note_guid(note_id: str) -> GuidResolution:
    """
    Extract the note GUID from a bare GUID, an ``evernote:///view/...`` link
    or a ``https://www.evernote.com/shard/...`` web address, in that order.
    """
    if _GUID_RE.fullmatch(note_id):
        return GuidResolution(guid=note_id, form="guid", error=None)

    m = _LINK_RE.match(note_id)
    if m:
        return GuidResolution(guid=m.group(1), form="link", error=None)

    m = _WEB_ADDRESS_RE.match(note_id)
    if m:
        return GuidResolution(guid=m.group(1), form="web_address", error=None)

    return GuidResolution(guid=None, form=None, error="unrecognized_identity")
