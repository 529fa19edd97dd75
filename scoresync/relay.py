"""Broadcast relay: apply one inbound update, then push the full board to everyone.

The relay stays free of FastAPI specifics. It only needs handles with an
async ``send_text`` method, so the router hands it Starlette websockets and
the tests hand it fakes.
"""
from __future__ import annotations

import asyncio
import json
from typing import Optional, Union

from loguru import logger
from pydantic import ValidationError

from .registry import Connection, ConnectionRegistry
from .schemas import PlayerUpdate
from .store import PlayerStateStore


def encode_snapshot(snapshot) -> str:
    return json.dumps(dict(snapshot), separators=(",", ":"), allow_nan=False)


class BroadcastRelay:
    """Owns the registry and the score store for one room."""

    def __init__(
        self,
        registry: Optional[ConnectionRegistry] = None,
        store: Optional[PlayerStateStore] = None,
    ):
        self.registry = registry if registry is not None else ConnectionRegistry()
        self.store = store if store is not None else PlayerStateStore()
        # Sends yield to the event loop; the lock keeps parse -> mutate -> fan-out
        # of one message from interleaving with another's.
        self._lock = asyncio.Lock()

    # -------------------- Inbound -------------------- #

    @staticmethod
    def parse(raw: Union[str, bytes]) -> PlayerUpdate:
        """Parse a raw frame into a :class:`PlayerUpdate`.

        Raises
        ------
        pydantic.ValidationError
            If *raw* is not JSON, not an object, lacks ``playerId`` / ``score``, or carries NaN or Infinity.
        """
        return PlayerUpdate.model_validate_json(raw)

    async def handle_message(self, raw: Union[str, bytes], handle: Connection) -> bool:
        """Process one frame received on *handle*.

        Returns ``False`` when the frame was malformed and dropped. A dropped
        frame leaves the store untouched, sends nothing and keeps the
        connection open.
        """
        logger.debug("/ws message: {!r}", raw)
        try:
            update = self.parse(raw)
        except ValidationError as exc:
            logger.warning("Could not parse input {!r}: {}", raw, exc)
            return False

        async with self._lock:
            self.registry.register(update.player_id, handle)
            self.store.set_score(update.player_id, update.score)
            await self.broadcast()
        return True

    # -------------------- Fan-out -------------------- #

    async def broadcast(self) -> int:
        """Send the current snapshot to every registered connection.

        A failing recipient is logged and released; the remaining recipients
        still get the message. Returns the number of successful sends.
        """
        payload = encode_snapshot(self.store.snapshot())
        delivered = 0
        for handle in list(self.registry.all_handles()):
            try:
                await handle.send_text(payload)
            except Exception as exc:
                logger.warning("Send failed, dropping connection: {}", exc)
                released = self.registry.release(handle)
                logger.info("Released player ids {} after failed send", released)
                continue
            delivered += 1
        return delivered

    # -------------------- Lifecycle -------------------- #

    async def disconnect(self, handle: Connection) -> None:
        """Forget *handle*. Scores stay on the board."""
        async with self._lock:
            released = self.registry.release(handle)
        logger.info("Client disconnected (player ids: {})", released or "none")


__all__ = ["BroadcastRelay", "encode_snapshot"]
