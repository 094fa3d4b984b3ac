"""Entrypoint helpers wiring settings, probe, registry and service together."""

from __future__ import annotations

from typing import Any

import httpx

from envelope_client.config import DispatcherConfig, Settings, get_settings
from envelope_client.core import (
    ConnectivityProbe,
    DecoderRegistry,
    SocketConnectivityProbe,
    StaticConnectivityProbe,
)
from envelope_client.logging import configure_logging
from envelope_client.services import ApiService


def build_probe(settings: Settings) -> ConnectivityProbe:
    if not settings.check_connectivity:
        return StaticConnectivityProbe(online=True)
    return SocketConnectivityProbe(
        settings.connectivity_host,
        settings.connectivity_port,
        timeout=settings.connectivity_timeout,
    )


def create_api_service(
    settings: Settings | None = None,
    *,
    probe: ConnectivityProbe | None = None,
    registry: DecoderRegistry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logs: bool = True,
    **hooks: Any,
) -> ApiService:
    """Build an :class:`ApiService` from settings.

    ``hooks`` are forwarded to :class:`DispatcherConfig` (``token_supplier``,
    ``language_supplier``, ``token_refresher``, ``loading_indicator``).
    """

    settings = settings or get_settings()
    if configure_logs:
        configure_logging(settings.log_level)

    config = DispatcherConfig.from_settings(settings, **hooks)
    return ApiService(
        config,
        probe=probe if probe is not None else build_probe(settings),
        registry=registry,
        transport=transport,
    )
