"""Shared fixtures."""

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from envelope_client.config import DispatcherConfig
from envelope_client.core import DecoderRegistry, StaticConnectivityProbe
from envelope_client.services import ApiService
from tests.helpers import BASE_URL, RecordingTransport


@pytest.fixture
def make_service() -> Callable[..., tuple[ApiService, RecordingTransport]]:
    """Factory for an ApiService backed by a recording mock transport."""

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        online: bool = True,
        registry: DecoderRegistry | None = None,
        **config: Any,
    ) -> tuple[ApiService, RecordingTransport]:
        transport = RecordingTransport(handler)
        service = ApiService(
            DispatcherConfig(base_url=BASE_URL, **config),
            probe=StaticConnectivityProbe(online=online),
            registry=registry or DecoderRegistry(),
            transport=transport,
        )
        return service, transport

    return factory
