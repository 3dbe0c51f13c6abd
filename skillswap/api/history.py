"""
SkillSwap — History API

Archive, list and forget past connections.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.database import get_db
from skillswap.schemas.history import HistoryPair
from skillswap.services.history_service import HistoryService

router = APIRouter()

_history_service: HistoryService | None = None


def _get_history_service() -> HistoryService:
    global _history_service
    if _history_service is None:
        _history_service = HistoryService()
    return _history_service


@router.post(
    "/add",
    response_model=str,
    summary="Archive a connection between two users",
)
async def archive_connection(
    payload: HistoryPair,
    db: AsyncSession = Depends(get_db),
) -> str:
    await _get_history_service().archive_connection(
        payload.first_user, payload.second_user, db_session=db
    )
    return "Histórico registrado com sucesso"


@router.delete(
    "/delete",
    response_model=str,
    summary="Forget an archived connection in either direction",
)
async def forget_connection(
    payload: HistoryPair,
    db: AsyncSession = Depends(get_db),
) -> str:
    await _get_history_service().forget_connection(
        payload.first_user, payload.second_user, db_session=db
    )
    return "Histórico removido com sucesso"


@router.get(
    "/all/{user_id}",
    response_model=list[int],
    summary="List archived counterparts in either role",
)
async def list_connection_history(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[int]:
    return await _get_history_service().list_connection_history(user_id, db_session=db)


@router.get(
    "/{user_id}",
    response_model=list[int],
    summary="List users archived with this user as the first party",
)
async def list_history(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[int]:
    return await _get_history_service().list_history(user_id, db_session=db)
