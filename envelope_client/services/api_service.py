"""Caller-facing API surface: one coroutine per HTTP verb."""

from __future__ import annotations

import logging
from typing import Any, Hashable, Mapping, Protocol, Sequence

from envelope_client.models import MultipartFile, Result

from .dispatcher import HttpMethod, RequestDispatcher

logger = logging.getLogger(__name__)


class ApiProvider(Protocol):
    """What application code depends on; satisfied by :class:`ApiService`."""

    async def get(
        self,
        url: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result: ...

    async def post(self, url: str, body: Any = None, **options: Any) -> Result: ...

    async def put(self, url: str, body: Any = None, **options: Any) -> Result: ...

    async def patch(self, url: str, body: Any = None, **options: Any) -> Result: ...

    async def delete(self, url: str, **options: Any) -> Result: ...

    async def post_multipart(
        self,
        url: str,
        fields: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Result: ...

    async def patch_multipart(
        self,
        url: str,
        fields: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Result: ...


class ApiService(RequestDispatcher):
    """Verb-per-method wrapper around :class:`RequestDispatcher`.

    ``full_envelope=True`` returns the whole :class:`ResponseEnvelope` on
    success instead of only its payload; ``decode_as`` names the registered
    type each payload element is decoded into.
    """

    async def get(
        self,
        url: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        return await self.dispatch(
            HttpMethod.GET,
            url,
            query=query,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def post(
        self,
        url: str,
        body: Any = None,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        return await self.dispatch(
            HttpMethod.POST,
            url,
            query=query,
            body=body,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def put(
        self,
        url: str,
        body: Any = None,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        return await self.dispatch(
            HttpMethod.PUT,
            url,
            query=query,
            body=body,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def patch(
        self,
        url: str,
        body: Any = None,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        return await self.dispatch(
            HttpMethod.PATCH,
            url,
            query=query,
            body=body,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def delete(
        self,
        url: str,
        *,
        body: Any = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        return await self.dispatch(
            HttpMethod.DELETE,
            url,
            query=query,
            body=body,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def post_multipart(
        self,
        url: str,
        fields: Mapping[str, Any] | None = None,
        *,
        files: Sequence[MultipartFile] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        logger.debug("Uploading %d file(s) to %s", len(files or []), url)
        return await self.dispatch_multipart(
            HttpMethod.POST,
            url,
            fields=fields,
            files=files,
            query=query,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def patch_multipart(
        self,
        url: str,
        fields: Mapping[str, Any] | None = None,
        *,
        files: Sequence[MultipartFile] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        logger.debug("Uploading %d file(s) to %s", len(files or []), url)
        return await self.dispatch_multipart(
            HttpMethod.PATCH,
            url,
            fields=fields,
            files=files,
            query=query,
            headers=headers,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )
