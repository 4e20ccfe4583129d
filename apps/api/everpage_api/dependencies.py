from functools import lru_cache

from everpage_api.config import load_settings
from everpage_api.evernote.client import EvernoteUserStore


@lru_cache()
def get_settings():
    return load_settings()


@lru_cache()
def get_user_store():
    settings = get_settings()
    return EvernoteUserStore(
        settings.evernote_user_store_url,
        timeout_s=settings.evernote_timeout_s,
        user_agent=settings.evernote_user_agent,
    )
