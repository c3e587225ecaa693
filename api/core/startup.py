"""
Two-phase startup: create the DB pool, probe it, then serve.

States:
    UNSTARTED -> POOL_READY -> SERVING
    UNSTARTED | POOL_READY -> FAILED

FAILED is terminal. A failed process is expected to exit, not to retry.
"""

from __future__ import annotations

import enum
import logging

from . import db

logger = logging.getLogger(__name__)


class StartupState(str, enum.Enum):
    UNSTARTED = "unstarted"
    POOL_READY = "pool_ready"
    SERVING = "serving"
    FAILED = "failed"


class StartupError(RuntimeError):
    pass


class StartupSequence:
    def __init__(self) -> None:
        self.state = StartupState.UNSTARTED

    async def start(self) -> None:
        if self.state is not StartupState.UNSTARTED:
            raise StartupError(f"Cannot start from state {self.state.value}.")

        try:
            await db.init_pool()
        except Exception as exc:
            self.state = StartupState.FAILED
            logger.exception("startup_failed phase=pool")
            raise StartupError("Could not create the database pool.") from exc
        self.state = StartupState.POOL_READY

        try:
            await db.probe()
        except Exception as exc:
            self.state = StartupState.FAILED
            logger.exception("startup_failed phase=probe")
            await db.close_pool()
            raise StartupError("Database liveness probe failed.") from exc
        self.state = StartupState.SERVING
        logger.info("startup_complete state=%s", self.state.value)

    async def stop(self) -> None:
        await db.close_pool()
