import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse

from everpage_api.dependencies import get_user_store
from everpage_api.domain.errors import (
    MISSING_ARGUMENT,
    MISSING_CLOSE_TAG,
    MISSING_OPEN_TAG,
    UNRECOGNIZED_IDENTITY,
    UPSTREAM_FETCH_ERROR,
    PageError,
)
from everpage_api.domain.ports import UserStore
from everpage_api.domain.schemas import ErrorOut, NotePageOut
from everpage_api.pages import load_note_page
from everpage_api.rendering import render_error_page, render_index_page, render_note_page
from everpage_api.util import timedelta_ms

router = APIRouter()
logger = logging.getLogger("everpage.api")

ERROR_STATUS = {
    MISSING_ARGUMENT: 400,
    UNRECOGNIZED_IDENTITY: 400,
    UPSTREAM_FETCH_ERROR: 502,
    MISSING_OPEN_TAG: 502,
    MISSING_CLOSE_TAG: 502,
}


def error_status(error: PageError) -> int:
    return ERROR_STATUS.get(error.kind, 500)


@router.get("/health")
def health():
    return {"ok": True}


@router.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(render_index_page())


@router.get("/note", response_class=HTMLResponse)
def note_page(
    authToken: Optional[str] = None,
    noteId: Optional[str] = None,
    user_store: UserStore = Depends(get_user_store),
):
    result = load_note_page(authToken, noteId, user_store)
    if result.error:
        logger.info("note_page_error", extra={"kind": result.error.kind, "operation": result.error.operation})
        return HTMLResponse(render_error_page(result.error), status_code=error_status(result.error))
    return HTMLResponse(render_note_page(result.page))


@router.get("/api/note", response_model=NotePageOut, responses={400: {"model": ErrorOut}, 502: {"model": ErrorOut}})
def note_json(
    authToken: Optional[str] = None,
    noteId: Optional[str] = None,
    user_store: UserStore = Depends(get_user_store),
):
    result = load_note_page(authToken, noteId, user_store)
    if result.error:
        out = ErrorOut(detail=result.error.kind, message=result.error.message, operation=result.error.operation)
        return JSONResponse(status_code=error_status(result.error), content=out.model_dump())
    page = result.page
    return NotePageOut(title=page.title, content=page.content, load_time_ms=timedelta_ms(page.load_time))
