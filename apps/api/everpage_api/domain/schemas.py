from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class NotePageOut(BaseModel):
    title: str
    content: str
    load_time_ms: float


class ErrorOut(BaseModel):
    detail: str
    message: str
    operation: Optional[str] = None
