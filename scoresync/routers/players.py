from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter(prefix="", tags=["players"])


@router.get("/players", response_model=Dict[str, Any])
async def list_players(request: Request):
    """Current board, same shape as a ``/ws`` broadcast."""
    return dict(request.app.state.relay.store.snapshot())
