"""Registry mapping a declared payload type to its decode function."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Mapping

from pydantic import BaseModel

from envelope_client.models import Meta

logger = logging.getLogger(__name__)

Decoder = Callable[[Any], Any]


def _decode_meta(value: Any) -> Any:
    if isinstance(value, Mapping):
        return Meta.from_json(value)
    return value


def _passthrough(value: Any) -> Any:
    return value


def _stringify(value: Any) -> str:
    return str(value)


class DecoderRegistry:
    """Type tag -> decoder lookup; unknown tags pass raw JSON through.

    Tags are usually classes (``Meta``, ``dict``, an application model) but any
    hashable value works, which lets callers register string tags too.
    """

    def __init__(self, *, include_builtins: bool = True) -> None:
        self._decoders: dict[Hashable, Decoder] = {}
        if include_builtins:
            self.register(Meta, _decode_meta)
            self.register(dict, _passthrough)
            self.register(str, _stringify)

    def register(self, tag: Hashable, decoder: Decoder) -> None:
        self._decoders[tag] = decoder

    def register_model(self, model: type[BaseModel], tag: Hashable | None = None) -> None:
        """Decode payload elements of ``model`` with ``model_validate``."""

        self.register(tag if tag is not None else model, model.model_validate)

    def unregister(self, tag: Hashable) -> None:
        self._decoders.pop(tag, None)

    def __contains__(self, tag: object) -> bool:
        return tag in self._decoders

    def decode(self, tag: Hashable | None, value: Any) -> Any:
        if tag is None:
            return value
        decoder = self._decoders.get(tag)
        if decoder is None:
            logger.debug("No decoder registered for %r; returning raw payload", tag)
            return value
        return decoder(value)

    def decoder_for(self, tag: Hashable | None) -> Decoder:
        """Single-argument decoder bound to ``tag``."""

        if tag is None:
            return _passthrough
        return lambda value: self.decode(tag, value)


default_registry = DecoderRegistry()
