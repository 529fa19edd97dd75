from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict

from .schemas import Snapshot


class PlayerStateStore:
    """Latest score per player id. Later writes overwrite, never merge."""

    def __init__(self) -> None:
        self._scores: Dict[str, Any] = {}

    def set_score(self, player_id: str, score: Any) -> None:
        self._scores[player_id] = score

    def get(self, player_id: str, default: Any = None) -> Any:
        return self._scores.get(player_id, default)

    def snapshot(self) -> Snapshot:
        """Return a read-only copy; later ``set_score`` calls do not show through."""
        return MappingProxyType(dict(self._scores))

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._scores


__all__ = ["PlayerStateStore"]
