"""Map local failures onto user-facing ErrorDetail values."""

from __future__ import annotations

import logging

import httpx

from envelope_client.models import ErrorDetail

logger = logging.getLogger(__name__)

NO_INTERNET_MESSAGE = "No internet connection. Please check your network."
TIMEOUT_MESSAGE = "Request timeout. Please try again."
INVALID_FORMAT_MESSAGE = "Invalid response format from server."
GENERIC_MESSAGE = "Something went wrong. Please try again."

NETWORK_FALLBACK_MESSAGE = "Network error occurred. Please check your connection and try again."
SOCKET_FALLBACK_MESSAGE = "Connection error. Please check your internet connection."

# (substrings, message); first match wins, compared case-insensitively
NETWORK_ERROR_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (
        ("connection reset by peer",),
        "Connection lost. Please check your internet connection and try again.",
    ),
    (("connection refused",), "Unable to connect to server. Please try again later."),
    (("network is unreachable",), "Network unreachable. Please check your internet connection."),
    (("connection timed out",), "Connection timed out. Please try again."),
    (
        ("handshake", "ssl", "certificate"),
        "Secure connection failed. Please check your network settings.",
    ),
)

SOCKET_ERROR_MESSAGES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("no route to host",), "No route to host. Please check your internet connection."),
    (("address already in use",), "Connection conflict. Please try again in a moment."),
    (("connection refused",), "Connection refused by server. Please try again later."),
)

NO_CONNECTION_STATUS = 0
TIMEOUT_STATUS = 408
INVALID_FORMAT_STATUS = 500


class ResponseFormatError(ValueError):
    """Raised when a response body decodes to something other than a JSON object."""


class UploadFileError(RuntimeError):
    """Raised when a local file for a multipart part cannot be read."""


def _match(description: str, table, fallback: str) -> str:
    lowered = description.lower()
    for needles, message in table:
        if any(needle in lowered for needle in needles):
            return message
    return fallback


def network_error_message(description: str) -> str:
    return _match(description, NETWORK_ERROR_MESSAGES, NETWORK_FALLBACK_MESSAGE)


def socket_error_message(description: str) -> str:
    return _match(description, SOCKET_ERROR_MESSAGES, SOCKET_FALLBACK_MESSAGE)


def _describe(exc: BaseException) -> str:
    # httpx wraps the OS-level error; its text carries the useful detail
    parts = [type(exc).__name__, str(exc)]
    cause = exc.__cause__ or exc.__context__
    if cause is not None:
        parts.extend([type(cause).__name__, str(cause)])
    return " ".join(part for part in parts if part)


def no_internet_error() -> ErrorDetail:
    return ErrorDetail(status_code=NO_CONNECTION_STATUS, message=NO_INTERNET_MESSAGE)


def auth_expired_error() -> ErrorDetail:
    return ErrorDetail(status_code=401)


def generic_error() -> ErrorDetail:
    return ErrorDetail(status_code=NO_CONNECTION_STATUS, message=GENERIC_MESSAGE)


def map_exception(exc: Exception) -> ErrorDetail:
    """Convert any failure raised during a dispatch into an ErrorDetail."""

    description = _describe(exc)
    if isinstance(exc, httpx.TimeoutException):
        logger.warning("Timeout error: %s", description)
        return ErrorDetail(status_code=TIMEOUT_STATUS, message=TIMEOUT_MESSAGE)
    if isinstance(exc, httpx.TransportError):
        logger.warning("Network error: %s", description)
        return ErrorDetail(
            status_code=NO_CONNECTION_STATUS,
            message=network_error_message(description),
        )
    if isinstance(exc, OSError):
        logger.warning("Socket error: %s", description)
        return ErrorDetail(
            status_code=NO_CONNECTION_STATUS,
            message=socket_error_message(description),
        )
    if isinstance(exc, ValueError):
        logger.warning("Format error: %s", description)
        return ErrorDetail(status_code=INVALID_FORMAT_STATUS, message=INVALID_FORMAT_MESSAGE)

    logger.error("Unexpected error: %s", description, exc_info=exc)
    return generic_error()
