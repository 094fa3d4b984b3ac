"""Tests for the payload decoder registry."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from envelope_client.core import DecoderRegistry
from envelope_client.models import Meta


class User(BaseModel):
    id: int
    name: str


def test_builtin_decoders() -> None:
    registry = DecoderRegistry()

    assert registry.decode(Meta, {"total": 3}) == Meta(total=3)
    assert registry.decode(dict, {"a": 1}) == {"a": 1}
    assert registry.decode(str, 42) == "42"


def test_unknown_tag_passes_raw_json_through() -> None:
    registry = DecoderRegistry()
    raw = {"id": 1, "name": "Ada"}

    assert User not in registry
    assert registry.decode(User, raw) is raw
    assert registry.decode(None, raw) is raw


def test_register_model_uses_model_validate() -> None:
    registry = DecoderRegistry()
    registry.register_model(User)

    assert registry.decode(User, {"id": 1, "name": "Ada"}) == User(id=1, name="Ada")


def test_string_tags_and_unregister() -> None:
    registry = DecoderRegistry(include_builtins=False)
    registry.register("upper", lambda value: str(value).upper())

    assert registry.decoder_for("upper")("abc") == "ABC"
    registry.unregister("upper")
    assert registry.decoder_for("upper")("abc") == "abc"
    assert dict not in registry


def test_registered_decoder_failures_propagate() -> None:
    registry = DecoderRegistry()
    registry.register_model(User)

    with pytest.raises(ValidationError):
        registry.decode(User, {"id": "not-a-number"})
