"""
HTML for the note page, the error page and the index form. No I/O.

Titles, messages and error kinds are escaped; the note body is embedded as
produced by the content transform.
"""

from __future__ import annotations

import html

from everpage_api.domain.entities import NotePage
from everpage_api.domain.errors import PageError
from everpage_api.util import timedelta_ms

_STYLE = """
body { font-family: "Helvetica Neue", Helvetica, Arial, sans-serif; max-width: 50em; margin: 2em auto; padding: 0 1em; }
.note-content img { max-width: 100%; }
footer { margin-top: 3em; color: #888; font-size: 0.85em; }
.error-kind { font-family: monospace; color: #a00; }
"""


def _document(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html>\n<head>\n<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>{_STYLE}</style>\n"
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )


def render_note_page(page: NotePage) -> str:
    title = page.title or "Untitled"
    body = (
        f"<h1>{html.escape(title)}</h1>\n"
        f'<div class="note-content">{page.content}</div>\n'
        f"<footer>Loaded in {timedelta_ms(page.load_time):.0f} ms</footer>"
    )
    return _document(title, body)


def render_error_page(error: PageError) -> str:
    parts = [
        "<h1>Error</h1>",
        f'<p class="error-kind">{html.escape(error.kind)}</p>',
        f'<p class="error-message">{html.escape(error.message)}</p>',
    ]
    if error.operation:
        parts.append(f'<p class="error-operation">Operation: {html.escape(error.operation)}</p>')
    return _document("Error", "\n".join(parts))


def render_index_page() -> str:
    body = (
        "<h1>Everpage</h1>\n"
        '<form method="get" action="/note">\n'
        '<p><label>Authentication token <input type="text" name="authToken" size="60"></label></p>\n'
        '<p><label>Note (GUID, note link or web address) <input type="text" name="noteId" size="60"></label></p>\n'
        '<p><button type="submit">Show note</button></p>\n'
        "</form>"
    )
    return _document("Everpage", body)
