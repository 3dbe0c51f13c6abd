"""
SkillSwap — single-statement execution against the store.

Every service operation issues exactly one statement through the session it
was handed.  ``execute`` is the one place where driver errors are turned
into ``StoreFailure``; nothing is retried.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import Executable
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.exceptions import StoreFailure

logger = structlog.get_logger("skillswap.store")


async def execute(
    db_session: AsyncSession,
    stmt: Executable,
    operation: str,
    **context: Any,
) -> Result:
    """Run ``stmt`` and return its result, or raise ``StoreFailure``.

    ``operation`` names the failing call in the log line and in the raised
    error; ``context`` is bound onto the log event (user ids, typically).
    """
    try:
        return await db_session.execute(stmt)
    except SQLAlchemyError as exc:
        logger.exception(f"{operation}_failed", **context)
        raise StoreFailure(operation) from exc
