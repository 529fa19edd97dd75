from __future__ import annotations

import contextlib
import sys
from typing import Optional, Type

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import Config
from .relay import BroadcastRelay
from .routers import players as players_router
from .routers import websockets as ws_router


_handler_id: Optional[int] = None


def configure_logging(level: str) -> None:
    """Install the relay's stderr sink, replacing only the one added earlier."""
    global _handler_id
    if _handler_id is not None:
        logger.remove(_handler_id)
    else:
        with contextlib.suppress(ValueError):
            logger.remove(0)  # loguru's default handler
    _handler_id = logger.add(sys.stderr, format="{time} | {level} | {message}", level=level)


def create_app(config_class: Type[Config] = Config, relay: Optional[BroadcastRelay] = None) -> FastAPI:
    """Build the relay application.

    Each call gets its own :class:`BroadcastRelay` unless one is passed in,
    so tests can run isolated instances side by side.
    """
    configure_logging(config_class.LOG_LEVEL)
    logger.info("Starting score relay ({})", config_class.APP_ENV)

    app = FastAPI(title="Score Sync Relay")
    app.state.config = config_class
    app.state.relay = relay if relay is not None else BroadcastRelay()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config_class.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(players_router.router)
    app.include_router(ws_router.router)
    return app


# -----------------------------
# FastAPI app instance
# -----------------------------

app = create_app()

__all__ = ["app", "create_app", "configure_logging"]
