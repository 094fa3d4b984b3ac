"""Network reachability probes consulted before every dispatch."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Protocol, Union

logger = logging.getLogger(__name__)


class ConnectivityProbe(Protocol):
    """Answers whether the network is reachable right now."""

    def check_internet(self) -> Union[bool, Awaitable[bool]]: ...


class SocketConnectivityProbe:
    """Considers the network reachable when a TCP handshake to ``host:port`` succeeds."""

    def __init__(self, host: str = "1.1.1.1", port: int = 53, *, timeout: float = 3.0) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout

    async def check_internet(self) -> bool:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.timeout,
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.debug("Reachability check to %s:%s failed: %s", self.host, self.port, exc)
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return True


class StaticConnectivityProbe:
    """Fixed answer; used when reachability checks are disabled."""

    def __init__(self, online: bool = True) -> None:
        self.online = online

    def check_internet(self) -> bool:
        return self.online


async def is_reachable(probe: ConnectivityProbe) -> bool:
    """Consult ``probe``; a failing probe counts as offline."""

    try:
        result = probe.check_internet()
        if inspect.isawaitable(result):
            result = await result
    except Exception as exc:  # noqa: BLE001
        logger.warning("Could not check connectivity status: %s", exc)
        return False
    return bool(result)
