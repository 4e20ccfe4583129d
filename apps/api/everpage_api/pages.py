from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta

from everpage_api.domain.content import transform_content
from everpage_api.domain.entities import NotePage
from everpage_api.domain.errors import (
    MISSING_ARGUMENT,
    MISSING_CLOSE_TAG,
    MISSING_OPEN_TAG,
    UNRECOGNIZED_IDENTITY,
    UPSTREAM_FETCH_ERROR,
    PageError,
)
from everpage_api.domain.identity import resolve_note_guid
from everpage_api.domain.ports import UserStore
from everpage_api.evernote.edam import EvernoteError
from everpage_api.util import mask_token, timedelta_ms

logger = logging.getLogger("everpage.pages")

_CONTENT_ERROR_MESSAGES = {
    MISSING_OPEN_TAG: "Cannot find the begin tag <en-note> in the content.",
    MISSING_CLOSE_TAG: "Cannot find the end tag </en-note> in the content.",
}


@dataclass(frozen=True)
class NotePageResult:
    page: NotePage | None
    error: PageError | None


def _failed(kind: str, message: str, operation: str | None = None) -> NotePageResult:
    return NotePageResult(page=None, error=PageError(kind=kind, message=message, operation=operation))


def _upstream_failed(operation: str, message: str, cause: EvernoteError) -> NotePageResult:
    logger.warning("upstream_fetch_error", extra={"operation": operation, "cause": str(cause)})
    return _failed(UPSTREAM_FETCH_ERROR, f"{message}: {cause}", operation=operation)


def load_note_page(auth_token: str | None, note_id: str | None, user_store: UserStore) -> NotePageResult:
    """
    Fetch one note and turn it into a renderable page.

    Upstream calls run in sequence (user, public user info, note store, note)
    without retries; the first failure ends the request. ``load_time`` spans
    identifier resolution and the upstream calls, not the content transform.
    """
    if auth_token is None or not auth_token.strip():
        return _failed(MISSING_ARGUMENT, 'Argument "authToken" is required.')
    if note_id is None or not note_id.strip():
        return _failed(MISSING_ARGUMENT, 'Argument "noteId" is required.')

    auth_token = auth_token.strip()
    note_id = note_id.strip()
    masked = mask_token(auth_token)

    start = time.perf_counter()

    resolution = resolve_note_guid(note_id)
    if resolution.error or not resolution.guid:
        return _failed(UNRECOGNIZED_IDENTITY, f"Unrecognized note identity: {note_id}")
    guid = resolution.guid

    try:
        user = user_store.get_user(auth_token)
    except EvernoteError as e:
        return _upstream_failed("get_user", f"Error occurred when getting user by authentication token '{masked}'", e)

    try:
        user_info = user_store.get_public_user_info(user.username)
    except EvernoteError as e:
        return _upstream_failed(
            "get_public_user_info", f"Error occurred when getting public info for user '{user.username}'", e
        )

    try:
        note_store = user_store.get_note_store(auth_token)
    except EvernoteError as e:
        return _upstream_failed("get_note_store", "Error occurred when getting note store", e)

    try:
        note = note_store.get_note(auth_token, guid)
    except EvernoteError as e:
        return _upstream_failed("get_note", f"Error occurred when getting note by id {guid}", e)

    load_time = timedelta(seconds=time.perf_counter() - start)

    transformed = transform_content(note.content, note.resources, user_info.web_api_url_prefix)
    if transformed.error:
        logger.warning("note_content_error", extra={"guid": guid, "error": transformed.error})
        return _failed(transformed.error, _CONTENT_ERROR_MESSAGES.get(transformed.error, transformed.error))
    if transformed.unknown_hashes:
        logger.warning("unknown_resources", extra={"guid": guid, "hashes": transformed.unknown_hashes})

    logger.info(
        "note_page",
        extra={"guid": guid, "form": resolution.form, "resources": len(note.resources), "ms": timedelta_ms(load_time)},
    )
    return NotePageResult(page=NotePage(title=note.title, content=transformed.body, load_time=load_time), error=None)
