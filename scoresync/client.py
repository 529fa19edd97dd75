"""Client side of the score relay.

A :class:`ClientSyncAgent` keeps one socket to the relay open, caches the
last snapshot it received and lets the UI publish its own score::

    async with ClientSyncAgent("ws://localhost:8911/ws") as agent:
        await agent.publish("Alice", 5)
        print(agent.players)
"""
from __future__ import annotations

import asyncio
import enum
import json
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional

import websockets
from loguru import logger
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, WebSocketException

from .config import Config
from .schemas import PlayerUpdate, Snapshot


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


class ConnectionState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class ClientSyncAgent:
    """One long-lived connection to the relay plus the cached board."""

    def __init__(
        self,
        url: Optional[str] = None,
        on_snapshot: Optional[Callable[[Snapshot], Any]] = None,
        connect: Callable = websockets.connect,
        open_timeout: Optional[float] = None,
    ):
        self.url = url or Config.RELAY_URL
        self.state = ConnectionState.DISCONNECTED
        self._players: Dict[str, Any] = {}
        self._on_snapshot = on_snapshot
        self._connect = connect
        self._open_timeout = Config.CLIENT_OPEN_TIMEOUT_SEC if open_timeout is None else open_timeout
        self._ws = None
        self._listener: Optional[asyncio.Task] = None

    @property
    def players(self) -> Snapshot:
        return MappingProxyType(self._players)

    # -------------------- Lifecycle -------------------- #

    async def start(self) -> None:
        """Open the socket and start listening. Failure leaves the agent ``CLOSED``."""
        if self.state is not ConnectionState.DISCONNECTED:
            logger.debug("start() ignored, agent is {}", self.state.value)
            return
        self.state = ConnectionState.CONNECTING
        try:
            ws = await self._connect(self.url, open_timeout=self._open_timeout)
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            logger.error("socket error connecting to {}: {}", self.url, exc)
            self.state = ConnectionState.CLOSED
            return
        if self.state is not ConnectionState.CONNECTING:
            # close() ran while the handshake was in flight
            logger.info("socket opened after teardown, closing {}", self.url)
            await ws.close()
            return
        self._ws = ws
        self.state = ConnectionState.OPEN
        logger.info("socket open {}", self.url)
        self._listener = asyncio.create_task(self._listen())

    async def close(self) -> None:
        if self.state is ConnectionState.CLOSED:
            return
        self.state = ConnectionState.CLOSED
        if self._ws is not None:
            await self._ws.close()
        if self._listener is not None:
            await self._listener
            self._listener = None
        self._ws = None

    async def __aenter__(self) -> "ClientSyncAgent":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # -------------------- Inbound -------------------- #

    async def _listen(self) -> None:
        try:
            async for message in self._ws:
                self.apply_snapshot(message)
        except ConnectionClosedError as exc:
            logger.warning("socket error: {}", exc)
        finally:
            self.state = ConnectionState.CLOSED
            logger.info("socket close {}", self.url)

    def apply_snapshot(self, raw) -> bool:
        """Replace the cached board with *raw*; keep the old one if it does not parse."""
        logger.debug("onmessage {!r}", raw)
        try:
            players = json.loads(raw, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as exc:
            logger.error("JSON parse error {}", exc)
            return False
        if not isinstance(players, dict):
            logger.error("Snapshot is not an object: {!r}", raw)
            return False
        self._players = players
        if self._on_snapshot is not None:
            try:
                self._on_snapshot(self.players)
            except Exception:
                logger.exception("on_snapshot callback failed")
        return True

    # -------------------- Outbound -------------------- #

    async def publish(self, player_id: str, score: Any) -> bool:
        """Send ``{"playerId", "score"}``. Returns ``False`` if nothing was sent."""
        if self.state is not ConnectionState.OPEN or self._ws is None:
            logger.debug("publish dropped, agent is {}", self.state.value)
            return False
        payload = json.dumps(PlayerUpdate(player_id=player_id, score=score).to_wire())
        try:
            await self._ws.send(payload)
        except ConnectionClosed as exc:
            logger.warning("publish failed: {}", exc)
            return False
        return True


__all__ = ["ClientSyncAgent", "ConnectionState"]
