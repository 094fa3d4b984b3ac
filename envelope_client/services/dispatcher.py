"""Request dispatch: reachability gate, transport call, normalization, auth retry."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Hashable, Iterable, Mapping

import httpx

from envelope_client.config import DispatcherConfig
from envelope_client.core.connectivity import (
    ConnectivityProbe,
    SocketConnectivityProbe,
    is_reachable,
)
from envelope_client.core.curl import build_curl_command, summarize_response, url_tag
from envelope_client.core.decoders import DecoderRegistry, default_registry
from envelope_client.core.errors import (
    ResponseFormatError,
    UploadFileError,
    auth_expired_error,
    generic_error,
    map_exception,
    no_internet_error,
)
from envelope_client.models import (
    ErrorDetail,
    Failure,
    MultipartFile,
    ResponseEnvelope,
    Result,
    Success,
)

from .base import BaseServiceClient, FilePart, to_json_body

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class HttpMethod(str, Enum):
    """Verbs the dispatcher can issue."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: "HttpMethod | str") -> "HttpMethod | None":
        """Case-insensitive lookup; ``None`` for verbs the dispatcher cannot issue."""

        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            return None


MULTIPART_METHODS = frozenset({HttpMethod.POST, HttpMethod.PATCH})

Sender = Callable[[dict[str, str]], Awaitable[httpx.Response]]


def drop_empty_query(query: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Remove parameters whose value is absent; empty strings are kept."""

    if not query:
        return None
    params = {key: value for key, value in query.items() if value is not None}
    return params or None


def encode_form_fields(fields: Mapping[str, Any] | None) -> dict[str, str]:
    """Strings pass verbatim, other values are JSON-encoded, ``None`` is skipped."""

    encoded: dict[str, str] = {}
    for key, value in (fields or {}).items():
        if value is None:
            continue
        encoded[key] = value if isinstance(value, str) else json.dumps(value)
    return encoded


def _read_part(upload: MultipartFile) -> FilePart:
    try:
        content = Path(upload.file_path).read_bytes()
    except OSError as exc:
        raise UploadFileError(f"Cannot read upload file {upload.file_path}: {exc}") from exc
    return upload.resolved_field_name, (upload.filename, content)


class RequestDispatcher(BaseServiceClient):
    """Issues one logical API call and normalizes whatever comes back.

    Every call resolves to a :class:`Failure` or a :class:`Success`; nothing
    raised during the call escapes. An auth-expired envelope (status 401) is
    retried up to ``config.max_auth_retries`` times, invoking the configured
    token refresher between attempts.
    """

    def __init__(
        self,
        config: DispatcherConfig,
        *,
        probe: ConnectivityProbe | None = None,
        registry: DecoderRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config.base_url, timeout=config.timeout, transport=transport)
        self.config = config
        self.probe = probe if probe is not None else SocketConnectivityProbe()
        self.registry = registry if registry is not None else default_registry

    async def dispatch(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        """Send a JSON request; ``body`` is ignored for GET."""

        verb = HttpMethod.parse(method)
        if verb is None:
            logger.error("Unsupported HTTP method %r for %s", method, url)
            return Failure(error=generic_error())
        params = drop_empty_query(query)
        payload = None if verb is HttpMethod.GET else body

        async def send(request_headers: dict[str, str]) -> httpx.Response:
            self._trace_request(verb, url, params, request_headers, body=to_json_body(payload))
            return await self._send_json(
                verb.value,
                url,
                params=params,
                body=payload,
                headers=request_headers,
            )

        return await self._run(
            url,
            send,
            headers=headers,
            json_content=True,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def dispatch_multipart(
        self,
        method: HttpMethod | str,
        url: str,
        *,
        fields: Mapping[str, Any] | None = None,
        files: Iterable[MultipartFile] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        full_envelope: bool = False,
        decode_as: Hashable | None = None,
        show_loader: bool = False,
    ) -> Result:
        """Upload form fields plus one part per file descriptor."""

        verb = HttpMethod.parse(method)
        if verb not in MULTIPART_METHODS:
            logger.error("Multipart upload does not support %r for %s", method, url)
            return Failure(error=generic_error())

        params = drop_empty_query(query)
        form_fields = encode_form_fields(fields)
        uploads = list(files or [])
        parts: list[FilePart] | None = None

        async def send(request_headers: dict[str, str]) -> httpx.Response:
            nonlocal parts
            if parts is None:
                parts = await asyncio.to_thread(lambda: [_read_part(upload) for upload in uploads])
            self._trace_request(
                verb, url, params, request_headers, fields=form_fields, files=uploads
            )
            return await self._send_multipart(
                verb.value,
                url,
                params=params,
                fields=form_fields,
                files=parts,
                headers=request_headers,
            )

        return await self._run(
            url,
            send,
            headers=headers,
            json_content=False,
            full_envelope=full_envelope,
            decode_as=decode_as,
            show_loader=show_loader,
        )

    async def _run(
        self,
        url: str,
        send: Sender,
        *,
        headers: Mapping[str, str] | None,
        json_content: bool,
        full_envelope: bool,
        decode_as: Hashable | None,
        show_loader: bool,
    ) -> Result:
        retries = self.config.max_auth_retries
        decode = self.registry.decoder_for(decode_as)
        tag = url_tag(url, self.base_url)

        if show_loader:
            self._set_loading(True)
        try:
            for attempt in range(retries + 1):
                if not await is_reachable(self.probe):
                    logger.info("Skipping %s: network unreachable", tag)
                    return Failure(error=no_internet_error())

                response = await send(self.build_headers(headers, json_content=json_content))
                body = self._decode_body(response)
                envelope = ResponseEnvelope.from_json(body, decode=decode)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Response %s\n%s",
                        tag,
                        summarize_response(
                            envelope.is_success,
                            response.status_code,
                            response.text,
                            envelope.message,
                        ),
                    )

                if not envelope.is_auth_expired:
                    if envelope.is_success:
                        return Success(value=envelope if full_envelope else envelope.payload)
                    return Failure(error=ErrorDetail.from_json(body))

                if attempt < retries:
                    logger.info("Auth expired for %s; retry %d/%d", tag, attempt + 1, retries)
                    await self._refresh_token()

            logger.warning("Auth still expired for %s after %d retries", tag, retries)
            return Failure(error=auth_expired_error())
        except Exception as exc:  # noqa: BLE001
            return Failure(error=map_exception(exc))
        finally:
            if show_loader:
                self._set_loading(False)

    def build_headers(
        self,
        overrides: Mapping[str, str] | None = None,
        *,
        json_content: bool = True,
    ) -> dict[str, str]:
        """Base headers for one attempt, overlaid with the caller's headers."""

        config = self.config
        token = config.token_supplier() if config.token_supplier else None
        language = config.language_supplier() if config.language_supplier else None

        headers: dict[str, str] = {}
        if json_content:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        headers["Accept-Language"] = language or config.default_language
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if overrides:
            # Header names are case-insensitive; drop base entries the caller replaces.
            replaced = {name.lower() for name in overrides}
            headers = {name: value for name, value in headers.items() if name.lower() not in replaced}
            headers.update(overrides)
        return headers

    @staticmethod
    def _decode_body(response: httpx.Response) -> dict[str, Any]:
        body = response.json()
        if not isinstance(body, dict):
            raise ResponseFormatError(
                f"Expected a JSON object, got {type(body).__name__} (HTTP {response.status_code})"
            )
        return body

    async def _refresh_token(self) -> None:
        refresher = self.config.token_refresher
        if refresher is None:
            return
        outcome = refresher()
        if inspect.isawaitable(outcome):
            await outcome

    def _set_loading(self, visible: bool) -> None:
        indicator = self.config.loading_indicator
        if indicator is None:
            return
        try:
            indicator(visible)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Loading indicator hook failed: %s", exc)

    def _trace_request(
        self,
        verb: HttpMethod,
        url: str,
        params: Mapping[str, Any] | None,
        headers: Mapping[str, str],
        *,
        body: Any = None,
        fields: Mapping[str, Any] | None = None,
        files: Iterable[MultipartFile] | None = None,
    ) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        target = url if "://" in url else f"{self.base_url}/{url.lstrip('/')}"
        curl = build_curl_command(
            verb.value,
            str(httpx.URL(target, params=params)),
            headers,
            body=body,
            fields=fields,
            files=files,
        )
        logger.debug("CURL %s\n%s", url_tag(url, self.base_url), curl)
