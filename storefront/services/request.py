"""Thin async HTTP wrapper around the storefront backend.

Every call goes to a fixed base URL with a JSON content type and a fixed
timeout. Successful calls return only the decoded body; failures are
reported on the notification channel and re-raised as ``RequestError``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from storefront.constants import MSG_REQUEST_FAILED
from storefront.services.notify import Notifier

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Transport failure or non-2xx response from the backend."""

    def __init__(self, message: str, status_code: int | None = None, data: Any = None):
        self.message = message
        self.status_code = status_code
        self.data = data
        super().__init__(message)

    @property
    def server_message(self) -> Optional[str]:
        if isinstance(self.data, dict):
            msg = self.data.get("message")
            if msg:
                return str(msg)
        return None


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Request:
    def __init__(
        self,
        base_url: str,
        timeout: float,
        notifier: Notifier,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.notifier = notifier
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def timeout(self) -> httpx.Timeout:
        return self._client.timeout

    async def request(self, method: str, path: str, body: Any = None) -> Any:
        method = method.upper()
        logger.info("Request: %s %s body=%r", method, path, body)
        try:
            response = await self._client.request(method, path, json=body)
            logger.info("Response: %s %s -> %s", method, path, response.status_code)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            data = _decode(e.response)
            logger.error("Request error: %s %s -> %s %r", method, path, e.response.status_code, data)
            raise self._fail(data, e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Request error: %s %s -> %s", method, path, e)
            raise self._fail(None, None) from e

        data = _decode(response)
        logger.info("Response data: %r", data)
        return data

    def _fail(self, data: Any, status_code: int | None) -> RequestError:
        message = MSG_REQUEST_FAILED
        if isinstance(data, dict) and data.get("message"):
            message = str(data["message"])
        self.notifier.error(message)
        return RequestError(message, status_code=status_code, data=data)

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Request":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
