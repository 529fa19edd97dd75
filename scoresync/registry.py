"""Player id -> live connection bookkeeping."""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Protocol


class Connection(Protocol):
    """What the relay needs from a transport handle (a Starlette ``WebSocket`` fits)."""

    async def send_text(self, data: str) -> None:
        ...


class ConnectionRegistry:
    """Maps each player id to the connection that most recently spoke for it.

    Several ids may point at the same connection; one id never points at
    more than one. The registry does not own the connections, the transport
    layer does.
    """

    def __init__(self) -> None:
        self._handles: Dict[str, Connection] = {}

    def register(self, player_id: str, handle: Connection) -> None:
        """Bind *player_id* to *handle*, replacing any earlier binding."""
        self._handles[player_id] = handle

    def unregister(self, player_id: str, handle: Optional[Connection] = None) -> bool:
        """Drop the binding for *player_id*.

        With *handle* given, the binding is only dropped while it still points
        at that connection, so a stale connection closing cannot evict the
        one that took the id over.
        """
        current = self._handles.get(player_id)
        if current is None:
            return False
        if handle is not None and current is not handle:
            return False
        del self._handles[player_id]
        return True

    def release(self, handle: Connection) -> List[str]:
        """Unregister every id bound to *handle* and return them."""
        released = self.ids_for(handle)
        for player_id in released:
            self.unregister(player_id, handle)
        return released

    def ids_for(self, handle: Connection) -> List[str]:
        return [pid for pid, h in self._handles.items() if h is handle]

    def all_handles(self) -> Iterator[Connection]:
        """Yield each distinct registered connection once, in registration order.

        A generator, so every call starts a fresh pass.
        """
        seen = set()
        for handle in list(self._handles.values()):
            if id(handle) in seen:
                continue
            seen.add(id(handle))
            yield handle

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._handles


__all__ = ["Connection", "ConnectionRegistry"]
