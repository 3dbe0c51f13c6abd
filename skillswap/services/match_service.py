"""
SkillSwap — Like / Match Engine

Turns one-directional likes into confirmed matches and answers the
viewpoint-dependent queries over them:

  record_like       — insert ``from -> to`` unless that ordered pair exists
  promote_to_match  — flip ``is_mutual`` on the edge exactly as recorded
  remove_match      — delete the pair in either direction
  list_matches      — promoted edges seen from the receiving side only

Promotion is always caller-driven: two opposite likes are never merged or
promoted automatically, and ``list_matches(a)`` and ``list_matches(b)`` are
not guaranteed to agree.  ``list_mutual_partners`` is the symmetric view.

Every public method issues exactly one statement through the session it is
given; the service itself holds no state.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import (
    Boolean,
    ColumnElement,
    Integer,
    Subquery,
    and_,
    delete,
    func,
    insert,
    literal,
    or_,
    select,
    union,
    update,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from skillswap.models.history import History
from skillswap.models.like import Like
from skillswap.models.skill import SkillOffer
from skillswap.models.user import User
from skillswap.services.store import execute

logger = structlog.get_logger("skillswap.match_service")


def lowest_offer_subquery(name: str) -> Subquery:
    """Per-user smallest offered ``sub_skill_id`` (the "first" offer)."""
    return (
        select(
            SkillOffer.user_id.label("user_id"),
            func.min(SkillOffer.sub_skill_id).label("sub_skill_id"),
        )
        .group_by(SkillOffer.user_id)
        .subquery(name)
    )


def history_between(user_id: int, other: ColumnElement) -> ColumnElement:
    """EXISTS clause: a history row links ``user_id`` and ``other`` in
    either stored direction."""
    return (
        select(History.id)
        .where(
            or_(
                and_(History.first_user == user_id, History.second_user == other),
                and_(History.first_user == other, History.second_user == user_id),
            )
        )
        .exists()
    )


class MatchService:
    """Like recording, match promotion and the directional match queries."""

    # ── Like recording ────────────────────────────────────────────────────

    async def record_like(
        self,
        from_user: int,
        to_user: int,
        db_session: AsyncSession,
    ) -> bool:
        """Record that ``from_user`` likes ``to_user``.

        The insert is conditional on the ordered pair being absent, so a
        repeated like leaves the single existing row untouched.  The reverse
        direction is not inspected.

        Returns
        -------
        bool
            True when a new edge was written.
        """
        log = logger.bind(from_user=from_user, to_user=to_user)

        already_liked = (
            select(Like.id)
            .where(Like.from_user == from_user, Like.to_user == to_user)
            .exists()
        )
        stmt = insert(Like.__table__).from_select(
            ["from_user", "to_user", "is_mutual"],
            select(
                literal(from_user, Integer),
                literal(to_user, Integer),
                literal(False, Boolean),
            ).where(~already_liked),
        )
        result = await execute(
            db_session, stmt, "record_like", from_user=from_user, to_user=to_user
        )
        created = result.rowcount == 1

        log.info("like_recorded", created=created)
        return created

    async def list_likes_received(
        self,
        user_id: int,
        db_session: AsyncSession,
        exclude_history: bool = False,
    ) -> list[dict[str, Any]]:
        """Pending likes addressed to ``user_id``, one entry per liker."""
        return await self._list_pending_likes(
            user_id,
            own_side=Like.to_user,
            other_side=Like.from_user,
            db_session=db_session,
            exclude_history=exclude_history,
            operation="list_likes_received",
        )

    async def list_likes_given(
        self,
        user_id: int,
        db_session: AsyncSession,
        exclude_history: bool = False,
    ) -> list[dict[str, Any]]:
        """Pending likes sent by ``user_id``, one entry per liked user."""
        return await self._list_pending_likes(
            user_id,
            own_side=Like.from_user,
            other_side=Like.to_user,
            db_session=db_session,
            exclude_history=exclude_history,
            operation="list_likes_given",
        )

    # ── Match promotion ───────────────────────────────────────────────────

    async def promote_to_match(
        self,
        from_user: int,
        to_user: int,
        db_session: AsyncSession,
    ) -> bool:
        """Mark the edge ``from_user -> to_user`` as a match.

        Only the edge in the recorded direction is touched; the reversed
        pair updates nothing.  The WHERE clause also requires the flag to be
        unset, so concurrent or repeated promotions converge on one state.

        Returns
        -------
        bool
            True when the flag changed on this call.
        """
        stmt = (
            update(Like)
            .where(
                Like.from_user == from_user,
                Like.to_user == to_user,
                Like.is_mutual.is_(False),
            )
            .values(is_mutual=True)
            .execution_options(synchronize_session=False)
        )
        result = await execute(
            db_session, stmt, "promote_to_match", from_user=from_user, to_user=to_user
        )
        promoted = result.rowcount > 0

        logger.info(
            "match_promoted" if promoted else "match_promotion_noop",
            from_user=from_user,
            to_user=to_user,
        )
        return promoted

    async def list_matches(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[int]:
        """Users whose promoted like points at ``user_id``."""
        stmt = (
            select(Like.from_user)
            .where(Like.to_user == user_id, Like.is_mutual.is_(True))
            .order_by(Like.id)
        )
        result = await execute(db_session, stmt, "list_matches", user_id=user_id)
        return list(result.scalars().all())

    async def list_mutual_partners(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[int]:
        """Users joined to ``user_id`` by a promoted edge in either direction."""
        received = select(Like.from_user.label("partner_id")).where(
            Like.to_user == user_id, Like.is_mutual.is_(True)
        )
        given = select(Like.to_user.label("partner_id")).where(
            Like.from_user == user_id, Like.is_mutual.is_(True)
        )
        partners = union(received, given).subquery("partners")
        stmt = select(partners.c.partner_id).order_by(partners.c.partner_id)

        result = await execute(
            db_session, stmt, "list_mutual_partners", user_id=user_id
        )
        return list(result.scalars().all())

    async def remove_match(
        self,
        user_a: int,
        user_b: int,
        db_session: AsyncSession,
    ) -> int:
        """Delete every like between the two users, whichever direction.

        Returns the number of edges removed.
        """
        stmt = (
            delete(Like)
            .where(
                or_(
                    and_(Like.from_user == user_a, Like.to_user == user_b),
                    and_(Like.from_user == user_b, Like.to_user == user_a),
                )
            )
            .execution_options(synchronize_session=False)
        )
        result = await execute(
            db_session, stmt, "remove_match", user_a=user_a, user_b=user_b
        )
        removed = result.rowcount

        logger.info("match_removed", user_a=user_a, user_b=user_b, removed=removed)
        return removed

    # ── Composite aggregate ───────────────────────────────────────────────

    async def list_confirmed_connections(
        self,
        user_id: int,
        db_session: AsyncSession,
    ) -> list[dict[str, Any]]:
        """Confirmed matches of ``user_id`` with the skill pairing of each.

        For every promoted edge pointing at ``user_id`` the counterpart's
        profile name and first offered skill are returned next to the
        requester's own first offered skill.
        """
        counterpart = aliased(User, name="counterpart")
        their_first = lowest_offer_subquery("their_first")
        own_first = lowest_offer_subquery("own_first")
        their_offer = aliased(SkillOffer, name="their_offer")
        own_offer = aliased(SkillOffer, name="own_offer")

        stmt = (
            select(
                Like.from_user.label("user_id"),
                counterpart.name.label("name"),
                their_offer.sub_skill_id.label("sub_skill_id"),
                their_offer.description.label("skill_description"),
                own_offer.sub_skill_id.label("own_sub_skill_id"),
                own_offer.description.label("own_skill_description"),
            )
            .select_from(Like)
            .join(counterpart, counterpart.id == Like.from_user)
            .outerjoin(their_first, their_first.c.user_id == Like.from_user)
            .outerjoin(
                their_offer,
                and_(
                    their_offer.user_id == their_first.c.user_id,
                    their_offer.sub_skill_id == their_first.c.sub_skill_id,
                ),
            )
            .outerjoin(own_first, own_first.c.user_id == Like.to_user)
            .outerjoin(
                own_offer,
                and_(
                    own_offer.user_id == own_first.c.user_id,
                    own_offer.sub_skill_id == own_first.c.sub_skill_id,
                ),
            )
            .where(Like.to_user == user_id, Like.is_mutual.is_(True))
            .order_by(Like.id)
        )
        result = await execute(
            db_session, stmt, "list_confirmed_connections", user_id=user_id
        )
        rows = [dict(row) for row in result.mappings().all()]

        logger.info("confirmed_connections_listed", user_id=user_id, count=len(rows))
        return rows

    # ── Internal helpers ──────────────────────────────────────────────────

    async def _list_pending_likes(
        self,
        user_id: int,
        own_side: ColumnElement,
        other_side: ColumnElement,
        db_session: AsyncSession,
        exclude_history: bool,
        operation: str,
    ) -> list[dict[str, Any]]:
        first = lowest_offer_subquery("first_offer")
        offer = aliased(SkillOffer, name="offer")

        stmt = (
            select(
                other_side.label("user_id"),
                User.name.label("name"),
                Like.is_mutual.label("is_mutual"),
                offer.sub_skill_id.label("sub_skill_id"),
                offer.description.label("skill_description"),
                offer.value.label("skill_value"),
            )
            .select_from(Like)
            .join(User, User.id == other_side)
            .outerjoin(first, first.c.user_id == other_side)
            .outerjoin(
                offer,
                and_(
                    offer.user_id == first.c.user_id,
                    offer.sub_skill_id == first.c.sub_skill_id,
                ),
            )
            .where(own_side == user_id, Like.is_mutual.is_(False))
            .order_by(Like.id)
        )
        if exclude_history:
            stmt = stmt.where(~history_between(user_id, other_side))

        result = await execute(db_session, stmt, operation, user_id=user_id)
        return [dict(row) for row in result.mappings().all()]
