"""Pydantic data schemas for the score relay wire protocol.

Client -> server messages are ``{"playerId": <string>, "score": <value>}``.
Server -> client messages carry no envelope: they are the full snapshot, a
JSON object mapping player id to score.
"""
from __future__ import annotations

import math
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

# player id -> score, exactly as clients sent it
Snapshot = Mapping[str, Any]


def is_json_finite(value: Any) -> bool:
    """``False`` if *value* holds NaN or an infinity anywhere inside it."""
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(is_json_finite(v) for v in value.values())
    if isinstance(value, list):
        return all(is_json_finite(v) for v in value)
    return True


class PlayerUpdate(BaseModel):
    """One inbound score update.

    ``score`` is opaque to the relay: any JSON value (number, string, null,
    even a nested object) is stored and forwarded verbatim. ``NaN`` and the
    infinities are not JSON and are rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    player_id: StrictStr = Field(alias="playerId")
    score: Any

    @field_validator("score")
    @classmethod
    def score_must_be_finite(cls, value: Any) -> Any:
        if not is_json_finite(value):
            raise ValueError("score must not contain NaN or Infinity")
        return value

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


__all__ = ["Snapshot", "PlayerUpdate", "is_json_finite"]
