"""Public service client exports."""

from .api_service import ApiProvider, ApiService
from .base import BaseServiceClient
from .dispatcher import HttpMethod, RequestDispatcher

__all__ = [
    "ApiProvider",
    "ApiService",
    "BaseServiceClient",
    "HttpMethod",
    "RequestDispatcher",
]
