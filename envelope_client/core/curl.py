"""Debug-only request/response tracing."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping

from envelope_client.models import MultipartFile

_MASKED_BEARER = "Bearer ***"


def _mask(name: str, value: str) -> str:
    if name.lower() == "authorization" and value.lower().startswith("bearer "):
        return _MASKED_BEARER
    return value


def _field_value(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def build_curl_command(
    method: str,
    url: str,
    headers: Mapping[str, str],
    body: Any = None,
    files: Iterable[MultipartFile] | None = None,
    fields: Mapping[str, Any] | None = None,
) -> str:
    """Render an equivalent curl invocation for a request."""

    parts = [f"curl -X {method.upper()}"]
    for name, value in headers.items():
        parts.append(f'-H "{name}: {_mask(name, value)}"')

    files = list(files or [])
    if files or fields:
        for key, value in (fields or {}).items():
            if value is None:
                continue
            escaped = _field_value(value).replace('"', '\\"')
            parts.append(f'-F "{key}={escaped}"')
        for upload in files:
            parts.append(
                f'-F "{upload.resolved_field_name}=@{upload.file_path};filename={upload.filename}"'
            )
    elif body is not None:
        body_text = body if isinstance(body, str) else json.dumps(body, default=str)
        parts.append("-d '{}'".format(body_text.replace("'", "\\'")))

    parts.append(f'"{url}"')
    return " ".join(parts)


def url_tag(url: str, base_url: str) -> str:
    """Short label for log lines: the URL with the configured base stripped."""

    base = base_url.rstrip("/")
    if base and url.startswith(base):
        return url[len(base):] or "/"
    return url


def summarize_response(is_success: bool, status_code: int, body_text: str, message: str | None) -> str:
    if is_success:
        return f"Success {body_text}\nStatusCode: {status_code}"
    return f"Error: {message}\nStatusCode: {status_code}"
