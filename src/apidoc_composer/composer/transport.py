"""Sends a request descriptor over HTTP and captures the outcome."""

import json
from dataclasses import dataclass
from typing import Any

import httpx

from apidoc_composer.composer.assembler import RequestDescriptor
from apidoc_composer.logging import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class Outcome:
    """Result of one send. Failures are values here, never exceptions."""

    ok: bool
    status_code: int | None = None
    data: Any = None
    text: str = ""
    error: str | None = None

    def display(self) -> str:
        """What to show as the response; failures lead with the error text."""
        if self.data is not None:
            body = json.dumps(self.data, indent=2, ensure_ascii=False)
        else:
            body = self.text

        if self.ok:
            return body
        return "\n".join(part for part in (self.error, body) if part)


class TransportExecutor:
    """Thin wrapper around httpx; one best-effort attempt per send.

    An injected ``client`` is reused and left open. Without one, a client
    is opened for the single send and closed right after.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def send(self, descriptor: RequestDescriptor) -> Outcome:
        if self._client is not None:
            return await self._send(self._client, descriptor)

        async with httpx.AsyncClient() as client:
            return await self._send(client, descriptor)

    async def _send(self, client: httpx.AsyncClient, descriptor: RequestDescriptor) -> Outcome:
        url = descriptor.full_url
        content = descriptor.body_string.encode("utf-8") if descriptor.body else None

        _LOGGER.debug(
            "request_sent",
            method=descriptor.method,
            url=url,
            headers=len(descriptor.headers),
            has_body=content is not None,
        )

        try:
            request = client.build_request(
                descriptor.method,
                url,
                headers=descriptor.headers,
                content=content,
            )
            response = await client.send(request)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            _LOGGER.warning("request_failed", method=descriptor.method, url=url, error=str(e))
            return Outcome(ok=False, error=str(e) or e.__class__.__name__)

        return _outcome_from(response)


def _outcome_from(response: httpx.Response) -> Outcome:
    data = None
    try:
        data = response.json()
    except ValueError:
        pass

    if response.is_success:
        return Outcome(ok=True, status_code=response.status_code, data=data, text=response.text)

    _LOGGER.warning("request_failed", status_code=response.status_code, url=str(response.request.url))
    return Outcome(
        ok=False,
        status_code=response.status_code,
        data=data,
        text=response.text,
        error=f"Request failed with status code {response.status_code}",
    )
