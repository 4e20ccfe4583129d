from __future__ import annotations

import logging
from typing import Callable, TypeVar

import httpx
from evernote.edam.notestore import NoteStore
from evernote.edam.type import ttypes as Types
from evernote.edam.userstore import UserStore
from evernote.edam.userstore import ttypes as UserStoreTypes
from thrift.protocol.TBinaryProtocol import TBinaryProtocol

from everpage_api.domain.entities import Note, PublicUserInfo, Resource, User

from .edam import EdamError, EvernoteError, to_evernote_error
from .transport import HttpxTransport

LOGGER = logging.getLogger(__name__)

__all__ = ["EdamError", "EvernoteError", "EvernoteNoteStore", "EvernoteUserStore"]

T = TypeVar("T")


def _call(operation: str, fn: Callable[..., T], *args: object) -> T:
    try:
        return fn(*args)
    except Exception as e:
        err = to_evernote_error(operation, e)
        LOGGER.debug("edam_error", extra={"operation": operation, "error": str(err)})
        raise err from e


def _user_from_ttype(user: Types.User) -> User:
    return User(id=user.id, username=user.username or "")


def _public_user_info_from_ttype(info: UserStoreTypes.PublicUserInfo) -> PublicUserInfo:
    return PublicUserInfo(
        user_id=info.userId,
        shard_id=info.shardId,
        username=info.username,
        web_api_url_prefix=info.webApiUrlPrefix or "",
    )


def _resource_from_ttype(resource: Types.Resource) -> Resource:
    body_hash = resource.data.bodyHash if resource.data is not None else None
    return Resource(guid=resource.guid or "", body_hash=body_hash or b"")


def _note_from_ttype(note: Types.Note) -> Note:
    return Note(
        guid=note.guid or "",
        title=note.title or "",
        content=note.content or "",
        resources=[_resource_from_ttype(r) for r in note.resources or []],
    )


class _ThriftService:
    def __init__(
        self,
        url: str,
        *,
        timeout_s: float = 30.0,
        user_agent: str = "everpage/0.1",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self.transport = transport

    def _protocol(self) -> TBinaryProtocol:
        # one transport per call; the buffers are not shared between requests
        http = HttpxTransport(self.url, timeout_s=self.timeout_s, user_agent=self.user_agent, transport=self.transport)
        return TBinaryProtocol(http)


class EvernoteNoteStore(_ThriftService):
    def get_note(self, auth_token: str, guid: str) -> Note:
        client = NoteStore.Client(self._protocol())
        # content only; resource bodies, recognition and alternate data are not needed
        note = _call("getNote", client.getNote, auth_token, guid, True, False, False, False)
        return _note_from_ttype(note)


class EvernoteUserStore(_ThriftService):
    def _client(self) -> UserStore.Client:
        return UserStore.Client(self._protocol())

    def get_user(self, auth_token: str) -> User:
        return _user_from_ttype(_call("getUser", self._client().getUser, auth_token))

    def get_public_user_info(self, username: str) -> PublicUserInfo:
        return _public_user_info_from_ttype(_call("getPublicUserInfo", self._client().getPublicUserInfo, username))

    def get_note_store_url(self, auth_token: str) -> str:
        url = _call("getNoteStoreUrl", self._client().getNoteStoreUrl, auth_token)
        if not url:
            raise EdamError("getNoteStoreUrl: empty_result")
        return url

    def get_note_store(self, auth_token: str) -> EvernoteNoteStore:
        url = self.get_note_store_url(auth_token)
        return EvernoteNoteStore(url, timeout_s=self.timeout_s, user_agent=self.user_agent, transport=self.transport)
