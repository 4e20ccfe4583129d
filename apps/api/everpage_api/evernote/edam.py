"""
EDAM error translation.

The SDK raises its generated ``EDAM*Exception`` structs and plain Thrift
exceptions; callers of this package only ever see ``EvernoteError`` (or its
``EdamError`` subclass when the service declared the failure).
"""

from __future__ import annotations

from evernote.edam.error.ttypes import (
    EDAMErrorCode,
    EDAMNotFoundException,
    EDAMSystemException,
    EDAMUserException,
)
from thrift.Thrift import TApplicationException

EDAM_EXCEPTIONS = (EDAMUserException, EDAMSystemException, EDAMNotFoundException)


class EvernoteError(RuntimeError):
    pass


class EdamError(EvernoteError):
    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


def error_code_name(code: int | None) -> str | None:
    if code is None:
        return None
    return EDAMErrorCode._VALUES_TO_NAMES.get(code, str(code))


def describe_exception(exc: Exception) -> tuple[str, str | None]:
    """
    Returns (description, error_code_name) for a declared EDAM exception.
    """
    kind = exc.__class__.__name__
    if isinstance(exc, EDAMNotFoundException):
        return (f"{kind}(identifier={exc.identifier}, key={exc.key})", None)

    code_name = error_code_name(exc.errorCode)
    if isinstance(exc, EDAMSystemException):
        desc = f"{kind}(errorCode={code_name}, message={exc.message})"
        if exc.rateLimitDuration is not None:
            desc += f" rateLimitDuration={exc.rateLimitDuration}s"
        return (desc, code_name)
    return (f"{kind}(errorCode={code_name}, parameter={exc.parameter})", code_name)


def to_evernote_error(operation: str, exc: Exception) -> EvernoteError:
    if isinstance(exc, EvernoteError):
        return EvernoteError(f"{operation}: {exc}")
    if isinstance(exc, EDAM_EXCEPTIONS):
        desc, code_name = describe_exception(exc)
        return EdamError(f"{operation}: {desc}", error_code=code_name)
    if isinstance(exc, TApplicationException):
        # the vendored protocol leaves the message as raw bytes
        message = exc.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return EdamError(f"{operation}: {message or 'application_exception'}")
    return EvernoteError(f"{operation}: bad_response ({exc.__class__.__name__})")
