from __future__ import annotations

from typing import Protocol, runtime_checkable

from everpage_api.domain.entities import Note, PublicUserInfo, User


@runtime_checkable
class NoteStore(Protocol):
    def get_note(self, auth_token: str, guid: str) -> Note:
        ...


@runtime_checkable
class UserStore(Protocol):
    def get_user(self, auth_token: str) -> User:
        ...

    def get_public_user_info(self, username: str) -> PublicUserInfo:
        ...

    def get_note_store(self, auth_token: str) -> NoteStore:
        ...
