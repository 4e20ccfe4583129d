from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class User:
    id: int | None
    username: str


@dataclass(frozen=True)
class PublicUserInfo:
    user_id: int | None
    shard_id: str | None
    username: str | None
    web_api_url_prefix: str


@dataclass(frozen=True)
class Resource:
    guid: str
    body_hash: bytes


@dataclass(frozen=True)
class Note:
    guid: str
    title: str
    content: str
    resources: list[Resource] = field(default_factory=list)


@dataclass(frozen=True)
class NotePage:
    title: str
    content: str
    load_time: timedelta
