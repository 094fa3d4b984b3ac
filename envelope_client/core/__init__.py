"""Core building blocks."""

from .connectivity import (
    ConnectivityProbe,
    SocketConnectivityProbe,
    StaticConnectivityProbe,
    is_reachable,
)
from .decoders import DecoderRegistry, default_registry
from .errors import ResponseFormatError, map_exception

__all__ = [
    "ConnectivityProbe",
    "DecoderRegistry",
    "ResponseFormatError",
    "SocketConnectivityProbe",
    "StaticConnectivityProbe",
    "default_registry",
    "is_reachable",
    "map_exception",
]
