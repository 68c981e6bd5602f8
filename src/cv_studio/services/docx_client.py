"""Client for the remote HTML-to-DOCX conversion endpoint.

Wire contract: ``POST {endpoint}/docx`` with JSON ``{"html", "filename"}``.
Success returns the DOCX bytes; failure returns JSON ``{"error": "..."}``.

Uses httpx for the async request and tenacity for a single retry on
transport failures (timeouts, refused connections). HTTP error responses
are final and never retried.
"""

from __future__ import annotations

import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from cv_studio.services.errors import RemoteConversionError

logger = logging.getLogger(__name__)

__all__ = ["DocxConversionClient"]


def _server_message(response: httpx.Response) -> str | None:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error.strip():
            return error.strip()
    return None


class DocxConversionClient:
    """Convert rendered markup to DOCX through the remote service.

    Usage:
        client = DocxConversionClient("https://example.com/api")
        content = await client.convert(html, "jane-doe.docx")
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        *,
        attempts: int = 2,
        retry_wait: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.attempts = max(1, attempts)
        self.retry_wait = retry_wait
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self.endpoint}/docx"

    async def _post(self, client: httpx.AsyncClient, payload: dict[str, str]) -> httpx.Response:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await client.post(self.url, json=payload)
        raise AssertionError("unreachable")

    async def convert(self, html: str, filename: str) -> bytes:
        """Return the DOCX bytes for *html*.

        Raises:
            RemoteConversionError: On transport failure after the retry, on
                any other request error (bad URL, undecodable body, redirect
                loop), or on any non-success response. The server's ``error``
                text is used as the message when present.
        """
        payload = {"html": html, "filename": filename}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await self._post(client, payload)
        except httpx.TransportError as exc:
            raise RemoteConversionError(
                f"DOCX conversion service unreachable: {exc.__class__.__name__}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RemoteConversionError(
                f"DOCX conversion request failed: {exc.__class__.__name__}"
            ) from exc

        if response.is_error:
            server_message = _server_message(response)
            message = server_message or f"DOCX conversion failed (HTTP {response.status_code})"
            raise RemoteConversionError(message, server_message=server_message)
        if not response.content:
            raise RemoteConversionError("DOCX conversion returned an empty document")
        return response.content
