"""
SkillSwap — Match API

Endpoints for recording likes, promoting them to matches, unmatching, and
the directional like / match listings.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.database import get_db
from skillswap.schemas.match import ConfirmedConnection, LikeCandidate, UserPair
from skillswap.services.match_service import MatchService

router = APIRouter()

# ── Service singleton ─────────────────────────────────────────────────────────

_match_service: MatchService | None = None


def _get_match_service() -> MatchService:
    global _match_service
    if _match_service is None:
        _match_service = MatchService()
    return _match_service


# ──────────────────────────────────────────────────────────────────────────────
# POST /add_like — Record a like
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/add_like",
    response_model=str,
    summary="Record a like from one user to another",
)
async def add_like(
    payload: UserPair,
    db: AsyncSession = Depends(get_db),
) -> str:
    """Store ``from_user -> to_user`` with the match flag unset.  Liking the
    same user again is accepted and changes nothing."""
    created = await _get_match_service().record_like(
        payload.from_user, payload.to_user, db_session=db
    )
    if created:
        return "Like registrado com sucesso"
    return "Like já registrado"


# ──────────────────────────────────────────────────────────────────────────────
# GET /buscar_likes/{user_id} — Pending likes received
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/buscar_likes/{user_id}",
    response_model=list[LikeCandidate],
    summary="List pending likes received by a user",
)
async def list_likes_received(
    user_id: int,
    exclude_history: bool = Query(False),
    db: AsyncSession = Depends(get_db),
) -> list[LikeCandidate]:
    rows = await _get_match_service().list_likes_received(
        user_id, db_session=db, exclude_history=exclude_history
    )
    return [LikeCandidate(**row) for row in rows]


# ──────────────────────────────────────────────────────────────────────────────
# GET /buscar_meus_likes/{user_id} — Pending likes given
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/buscar_meus_likes/{user_id}",
    response_model=list[LikeCandidate],
    summary="List pending likes sent by a user",
)
async def list_likes_given(
    user_id: int,
    exclude_history: bool = Query(False),
    db: AsyncSession = Depends(get_db),
) -> list[LikeCandidate]:
    rows = await _get_match_service().list_likes_given(
        user_id, db_session=db, exclude_history=exclude_history
    )
    return [LikeCandidate(**row) for row in rows]


# ──────────────────────────────────────────────────────────────────────────────
# PUT / — Promote a like to a match
# ──────────────────────────────────────────────────────────────────────────────

@router.put(
    "",
    response_model=str,
    summary="Promote a recorded like to a match",
)
async def promote_to_match(
    payload: UserPair,
    db: AsyncSession = Depends(get_db),
) -> str:
    """The pair must be given in the direction the like was recorded.  A
    reversed pair, or an edge that is already a match, is answered with the
    same 200 and leaves the store unchanged."""
    promoted = await _get_match_service().promote_to_match(
        payload.from_user, payload.to_user, db_session=db
    )
    if promoted:
        return "Match confirmado com sucesso"
    return "Nenhum like pendente para confirmar"


# ──────────────────────────────────────────────────────────────────────────────
# DELETE /delete — Unmatch a pair
# ──────────────────────────────────────────────────────────────────────────────

@router.delete(
    "/delete",
    response_model=str,
    summary="Remove likes and matches between two users",
)
async def remove_match(
    payload: UserPair,
    db: AsyncSession = Depends(get_db),
) -> str:
    await _get_match_service().remove_match(
        payload.from_user, payload.to_user, db_session=db
    )
    return "Match removido com sucesso"


# ──────────────────────────────────────────────────────────────────────────────
# GET /all/{user_id} — Confirmed connections with skill pairing
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/all/{user_id}",
    response_model=list[ConfirmedConnection],
    summary="List confirmed connections with their skill pairing",
)
async def list_confirmed_connections(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[ConfirmedConnection]:
    rows = await _get_match_service().list_confirmed_connections(
        user_id, db_session=db
    )
    return [ConfirmedConnection(**row) for row in rows]


# ──────────────────────────────────────────────────────────────────────────────
# GET /mutual/{user_id} — Matches in either direction
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/mutual/{user_id}",
    response_model=list[int],
    summary="List match partners regardless of like direction",
)
async def list_mutual_partners(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[int]:
    return await _get_match_service().list_mutual_partners(user_id, db_session=db)


# ──────────────────────────────────────────────────────────────────────────────
# GET /{user_id} — Matches seen from the receiving side
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{user_id}",
    response_model=list[int],
    summary="List users whose confirmed like points at this user",
)
async def list_matches(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[int]:
    """Only edges where ``user_id`` is the liked side are considered; use
    ``/mutual/{user_id}`` for both directions."""
    return await _get_match_service().list_matches(user_id, db_session=db)
