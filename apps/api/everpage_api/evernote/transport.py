from __future__ import annotations

import logging
from io import BytesIO

import httpx
from thrift.transport.TTransport import TTransportBase, TTransportException

from .edam import EvernoteError

LOGGER = logging.getLogger(__name__)


class HttpxTransport(TTransportBase):
    """
    Thrift transport that POSTs each buffered message with httpx.

    Each ``flush()`` sends everything written since the previous flush and
    replaces the read buffer with the response body, so one generated client
    call (send, flush, recv) maps onto one HTTP round trip.
    """

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
        self._wbuf = BytesIO()
        self._rbuf = BytesIO()

    def isOpen(self) -> bool:
        return True

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def write(self, buf: bytes) -> None:
        self._wbuf.write(buf)

    def read(self, sz: int) -> bytes:
        return self._rbuf.read(sz)

    def readAll(self, sz: int) -> bytes:
        data = self._rbuf.read(sz)
        if len(data) < sz:
            raise TTransportException(TTransportException.END_OF_FILE, f"short_read ({len(data)}/{sz})")
        return data

    def flush(self) -> None:
        payload = self._wbuf.getvalue()
        self._wbuf = BytesIO()
        headers = {
            "Content-Type": "application/x-thrift",
            "Accept": "application/x-thrift",
            "User-Agent": self.user_agent,
        }
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                resp = client.post(self.url, headers=headers, content=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise EvernoteError(f"request_failed ({e.__class__.__name__})") from e

        if resp.status_code >= 400:
            raise EvernoteError(f"http_{resp.status_code}")

        LOGGER.debug("edam_call", extra={"url": self.url, "bytes": len(resp.content)})
        self._rbuf = BytesIO(resp.content)
