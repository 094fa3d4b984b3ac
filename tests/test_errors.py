"""Tests mapping local failures to user-facing errors."""

from __future__ import annotations

import json

import httpx
import pytest

from envelope_client.core.errors import (
    GENERIC_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    NETWORK_FALLBACK_MESSAGE,
    SOCKET_FALLBACK_MESSAGE,
    TIMEOUT_MESSAGE,
    ResponseFormatError,
    UploadFileError,
    map_exception,
    network_error_message,
    socket_error_message,
)


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("[Errno 104] Connection reset by peer", "Connection lost."),
        ("[Errno 111] Connection refused", "Unable to connect to server."),
        ("[Errno 101] Network is unreachable", "Network unreachable."),
        ("Connection timed out", "Connection timed out."),
        ("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed", "Secure connection failed."),
    ],
)
def test_network_messages(description: str, expected: str) -> None:
    assert network_error_message(description).startswith(expected)


def test_network_fallback() -> None:
    assert network_error_message("something odd") == NETWORK_FALLBACK_MESSAGE


def test_socket_messages() -> None:
    assert socket_error_message("[Errno 113] No route to host").startswith("No route to host")
    assert socket_error_message("[Errno 98] Address already in use").startswith("Connection conflict")
    assert socket_error_message("Connection refused").startswith("Connection refused by server")
    assert socket_error_message("bad file descriptor") == SOCKET_FALLBACK_MESSAGE


def test_timeout_maps_to_408() -> None:
    error = map_exception(httpx.ReadTimeout("timed out"))

    assert error.status_code == 408
    assert error.message == TIMEOUT_MESSAGE


def test_transport_error_maps_to_status_zero() -> None:
    error = map_exception(httpx.ConnectError("[Errno 111] Connection refused"))

    assert error.status_code == 0
    assert error.message == "Unable to connect to server. Please try again later."


def test_socket_error_maps_to_status_zero() -> None:
    error = map_exception(OSError(113, "No route to host"))

    assert error.status_code == 0
    assert error.message == "No route to host. Please check your internet connection."


def test_malformed_body_maps_to_500() -> None:
    try:
        json.loads("<html>")
    except json.JSONDecodeError as exc:
        error = map_exception(exc)

    assert error.status_code == 500
    assert error.message == INVALID_FORMAT_MESSAGE
    assert map_exception(ResponseFormatError("list")).status_code == 500


def test_anything_else_is_generic() -> None:
    for exc in (RuntimeError("boom"), UploadFileError("missing"), KeyError("k")):
        error = map_exception(exc)
        assert error.status_code == 0
        assert error.message == GENERIC_MESSAGE
