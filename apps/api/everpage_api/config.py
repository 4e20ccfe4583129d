from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    evernote_user_store_url: str
    evernote_timeout_s: float
    evernote_user_agent: str
    api_debug_log: bool


def load_settings() -> Settings:
    evernote_user_store_url = os.environ.get("EVERNOTE_USER_STORE_URL", "https://www.evernote.com/edam/user")
    evernote_timeout_s = float(os.environ.get("EVERNOTE_TIMEOUT_S", "30"))
    evernote_user_agent = os.environ.get("EVERNOTE_USER_AGENT", "everpage/0.1")
    api_debug_log = os.environ.get("API_DEBUG_LOG", "false").lower() == "true"
    return Settings(
        evernote_user_store_url=evernote_user_store_url,
        evernote_timeout_s=evernote_timeout_s,
        evernote_user_agent=evernote_user_agent,
        api_debug_log=api_debug_log,
    )
