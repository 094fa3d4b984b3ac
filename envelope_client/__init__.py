"""Async HTTP API client that normalizes every response into one envelope shape."""

from envelope_client.config import DispatcherConfig, Settings, get_settings
from envelope_client.core import (
    DecoderRegistry,
    SocketConnectivityProbe,
    StaticConnectivityProbe,
    default_registry,
)
from envelope_client.main import create_api_service
from envelope_client.models import (
    ErrorDetail,
    Failure,
    Meta,
    MultipartFile,
    ResponseEnvelope,
    Result,
    Success,
)
from envelope_client.params import ApiParams
from envelope_client.services import ApiProvider, ApiService, HttpMethod, RequestDispatcher

__all__ = [
    "ApiParams",
    "ApiProvider",
    "ApiService",
    "DecoderRegistry",
    "DispatcherConfig",
    "ErrorDetail",
    "Failure",
    "HttpMethod",
    "Meta",
    "MultipartFile",
    "RequestDispatcher",
    "ResponseEnvelope",
    "Result",
    "Settings",
    "SocketConnectivityProbe",
    "StaticConnectivityProbe",
    "Success",
    "create_api_service",
    "default_registry",
    "get_settings",
]
