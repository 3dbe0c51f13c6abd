"""
SkillSwap — User sub-skill offers

Plain single-table operations over ``user_sub_skills``: the sub-skills each
user advertises, with a free-text description and a price.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.models.skill import SkillOffer
from skillswap.services.store import execute

logger = structlog.get_logger("skillswap.skill_offer_service")

_OFFER_COLUMNS = (
    SkillOffer.user_id,
    SkillOffer.sub_skill_id,
    SkillOffer.description,
    SkillOffer.value,
    SkillOffer.created_at,
)


class SkillOfferService:

    async def create_offer(
        self,
        user_id: int,
        sub_skill_id: int,
        description: str,
        value: float,
        db_session: AsyncSession,
    ) -> None:
        """Insert one offer; an existing ``(user_id, sub_skill_id)`` fails."""
        stmt = insert(SkillOffer.__table__).values(
            user_id=user_id,
            sub_skill_id=sub_skill_id,
            description=description,
            value=value,
        )
        await execute(
            db_session,
            stmt,
            "create_offer",
            user_id=user_id,
            sub_skill_id=sub_skill_id,
        )
        logger.info("offer_created", user_id=user_id, sub_skill_id=sub_skill_id)

    async def list_offers(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[dict[str, Any]]:
        stmt = (
            select(*_OFFER_COLUMNS)
            .where(SkillOffer.user_id == user_id)
            .order_by(SkillOffer.sub_skill_id)
        )
        result = await execute(db_session, stmt, "list_offers", user_id=user_id)
        return [dict(row) for row in result.mappings().all()]

    async def list_all_offers(
        self,
        db_session: AsyncSession,
    ) -> list[dict[str, Any]]:
        stmt = select(*_OFFER_COLUMNS).order_by(
            SkillOffer.user_id, SkillOffer.sub_skill_id
        )
        result = await execute(db_session, stmt, "list_all_offers")
        return [dict(row) for row in result.mappings().all()]

    async def delete_offers(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> int:
        """Remove every offer of ``user_id``; returns how many went."""
        stmt = (
            delete(SkillOffer)
            .where(SkillOffer.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await execute(db_session, stmt, "delete_offers", user_id=user_id)

        logger.info("offers_deleted", user_id=user_id, removed=result.rowcount)
        return result.rowcount

    async def update_offer(
        self,
        user_id: int,
        sub_skill_id: int,
        description: str,
        value: float,
        db_session: AsyncSession,
    ) -> bool:
        stmt = (
            update(SkillOffer)
            .where(
                SkillOffer.user_id == user_id,
                SkillOffer.sub_skill_id == sub_skill_id,
            )
            .values(description=description, value=value)
            .execution_options(synchronize_session=False)
        )
        result = await execute(
            db_session,
            stmt,
            "update_offer",
            user_id=user_id,
            sub_skill_id=sub_skill_id,
        )
        return result.rowcount > 0
