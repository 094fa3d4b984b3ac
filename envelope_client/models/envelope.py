"""Normalized wrapper around any decoded server response."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Hashable, Mapping

from pydantic import BaseModel, ConfigDict, model_validator

from .common import ErrorDetail, Meta, coerce_status_code, join_messages

if TYPE_CHECKING:
    from envelope_client.core.decoders import DecoderRegistry

SUCCESS_STATUS_CODES = frozenset({200, 201})
AUTH_EXPIRED_STATUS_CODE = 401

PayloadDecoder = Callable[[Any], Any]


def _passthrough(value: Any) -> Any:
    return value


class ResponseEnvelope(BaseModel):
    """Status, message, payload, errors and pagination of one server response.

    Server bodies are expected in the shape::

        {
            "success": true,
            "statusCode": 200,
            "message": "optional",
            "data": {"result": [...] | {...}, "meta": {...}},
            "errors": [{"statusCode": .., "message": .. | [".."], "error": .., "data": ..}]
        }

    ``data.result`` is preferred over ``data`` itself as the payload source.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status_code: int | None = None
    message: str | None = None
    payload: Any = None
    errors: list[ErrorDetail] | None = None
    success: bool = False
    meta: Meta | None = None

    @model_validator(mode="after")
    def _message_from_errors(self) -> "ResponseEnvelope":
        if self.message is None and self.errors:
            messages = [error.message for error in self.errors if error.message is not None]
            self.message = ", ".join(messages)
        return self

    @property
    def is_success(self) -> bool:
        return self.success or self.status_code in SUCCESS_STATUS_CODES

    @property
    def is_auth_expired(self) -> bool:
        return self.status_code == AUTH_EXPIRED_STATUS_CODE

    @classmethod
    def from_json(
        cls,
        body: Mapping[str, Any],
        decode_as: Hashable | None = None,
        registry: DecoderRegistry | None = None,
        *,
        decode: PayloadDecoder | None = None,
    ) -> "ResponseEnvelope":
        """Normalize a decoded JSON object.

        Each payload element is decoded into the type registered under
        ``decode_as`` in ``registry`` (the default registry when omitted).
        A ready-made ``decode`` callable takes precedence over both. Without
        either, the raw JSON is kept.
        """

        if decode is None and decode_as is not None:
            if registry is None:
                from envelope_client.core.decoders import default_registry

                registry = default_registry
            decode = registry.decoder_for(decode_as)
        decode = decode or _passthrough
        data = body.get("data")

        errors: list[ErrorDetail] | None = None
        message: str | None = None
        if body.get("errors") is not None:
            errors = []
            raw_errors = body["errors"]
            if isinstance(raw_errors, list):
                for entry in raw_errors:
                    if isinstance(entry, Mapping):
                        errors.append(ErrorDetail.from_json(entry))
                    elif entry is not None:
                        errors.append(ErrorDetail(message=str(entry)))
        else:
            message = _extract_message(body, data)

        payload: Any = None
        meta: Meta | None = None
        if data is not None:
            if isinstance(data, Mapping) and data.get("result") is not None:
                source = data["result"]
            else:
                source = data
            if isinstance(source, list):
                payload = [decode(item) for item in source]
            else:
                payload = decode(source)
            if isinstance(data, Mapping) and isinstance(data.get("meta"), Mapping):
                meta = Meta.from_json(data["meta"])

        return cls(
            status_code=coerce_status_code(body.get("statusCode")),
            message=message,
            payload=payload,
            errors=errors,
            success=body.get("success") is True,
            meta=meta,
        )

    @classmethod
    def from_error(cls, error: Any) -> "ResponseEnvelope":
        """Wrap an error body or an arbitrary failure in an envelope."""

        if isinstance(error, Mapping):
            return cls.from_json(error)
        return cls(status_code=500, message=str(error), success=False)

    def to_json(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "success": self.success,
            "statusCode": self.status_code,
            "message": self.message,
        }
        if self.payload is not None:
            if isinstance(self.payload, list):
                body["data"] = [_encode(item) for item in self.payload]
            else:
                body["data"] = _encode(self.payload)
        if self.errors is not None:
            body["errors"] = [error.to_json() for error in self.errors]
        return body


def _extract_message(body: Mapping[str, Any], data: Any) -> str | None:
    message = body.get("message")
    if message is None:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            return ""
        message = data.get("message")
    if message is None:
        return None
    message = join_messages(message)
    return message if isinstance(message, str) else str(message)


def _encode(value: Any) -> Any:
    if isinstance(value, BaseModel):
        if hasattr(value, "to_json"):
            return value.to_json()
        return value.model_dump(mode="json")
    return value
