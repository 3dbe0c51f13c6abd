"""
SkillSwap — History Ledger

Archived connections between two users.  Rows are stored in the direction
the caller supplied; ``forget_connection`` deletes either direction, while
``list_history`` only reads the ``first_user`` side.
``list_connection_history`` gives the symmetric closure.
"""

from __future__ import annotations

import structlog
from sqlalchemy import Integer, and_, delete, insert, literal, or_, select, union
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.history import History
from skillswap.services.store import execute

logger = structlog.get_logger("skillswap.history_service")


class HistoryService:
    """Archive, forget and list past connections."""

    async def archive_connection(
        self,
        first_user: int,
        second_user: int,
        db_session: AsyncSession,
    ) -> bool:
        """Store ``first_user -> second_user`` as a past connection.

        Returns True when a row was written; an identical ordered pair that
        is already archived is left as is.
        """
        already_archived = (
            select(History.id)
            .where(History.first_user == first_user, History.second_user == second_user)
            .exists()
        )
        stmt = insert(History.__table__).from_select(
            ["first_user", "second_user"],
            select(
                literal(first_user, Integer),
                literal(second_user, Integer),
            ).where(~already_archived),
        )
        result = await execute(
            db_session,
            stmt,
            "archive_connection",
            first_user=first_user,
            second_user=second_user,
        )
        created = result.rowcount == 1

        logger.info(
            "connection_archived",
            first_user=first_user,
            second_user=second_user,
            created=created,
        )
        return created

    async def forget_connection(
        self,
        user_a: int,
        user_b: int,
        db_session: AsyncSession,
    ) -> int:
        """Delete the pair's history rows in both stored directions."""
        stmt = (
            delete(History)
            .where(
                or_(
                    and_(History.first_user == user_a, History.second_user == user_b),
                    and_(History.first_user == user_b, History.second_user == user_a),
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await execute(
            db_session, stmt, "forget_connection", user_a=user_a, user_b=user_b
        )
        removed = result.rowcount

        logger.info("connection_forgotten", user_a=user_a, user_b=user_b, removed=removed)
        return removed

    async def list_history(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[int]:
        """``second_user`` of every row archived with ``user_id`` first."""
        stmt = (
            select(History.second_user)
            .where(History.first_user == user_id)
            .order_by(History.id)
        )
        result = await execute(db_session, stmt, "list_history", user_id=user_id)
        return list(result.scalars().all())

    async def list_connection_history(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[int]:
        """Every user archived together with ``user_id``, in either role."""
        as_first = select(History.second_user.label("other_id")).where(
            History.first_user == user_id
        )
        as_second = select(History.first_user.label("other_id")).where(
            History.second_user == user_id
        )
        others = union(as_first, as_second).subquery("others")
        stmt = select(others.c.other_id).order_by(others.c.other_id)

        result = await execute(
            db_session, stmt, "list_connection_history", user_id=user_id
        )
        return list(result.scalars().all())
