"""Common HTTP client utilities."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

FilePart = tuple[str, tuple[str | None, bytes]]


def to_json_body(body: Any) -> Any:
    """Make a request body JSON-serializable; Pydantic models are dumped."""

    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True)
    if isinstance(body, list):
        return [to_json_body(item) for item in body]
    return body


class BaseServiceClient:
    """Reusable Async HTTP client wrapper.

    Responses are returned as-is, without ``raise_for_status``: error bodies
    carry the information callers need.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BaseServiceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _send_json(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s params=%s has_body=%s", method, url, params, body is not None)
        return await self._client.request(
            method,
            url,
            params=params,
            json=to_json_body(body) if body is not None else None,
            headers=headers,
        )

    async def _send_multipart(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        fields: Mapping[str, str] | None = None,
        files: Sequence[FilePart] = (),
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        form = dict(fields or {})
        parts = list(files)
        logger.debug(
            "%s %s multipart fields=%s parts=%s",
            method,
            url,
            list(form.keys()),
            [name for name, _ in parts],
        )
        if not parts:
            # httpx falls back to urlencoding without file parts; send the
            # fields as filename-less parts to stay multipart/form-data.
            parts = [(name, (None, value.encode("utf-8"))) for name, value in form.items()]
            form = {}
        return await self._client.request(
            method,
            url,
            params=params,
            data=form or None,
            files=parts or None,
            headers=headers,
        )
