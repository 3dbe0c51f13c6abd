"""
SkillSwap — User sub-skill offers API

Insert, list, update and delete the sub-skills a user offers.  Paths and
JSON keys (``id_users``, ``id_sub_habilidade``, ``descricao``, ``valor``)
are the ones existing clients already call.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.database import get_db
from skillswap.schemas.skill import (
    SkillOfferCreate,
    SkillOfferResponse,
    SkillOfferUpdate,
)
from skillswap.services.skill_offer_service import SkillOfferService

logger = structlog.get_logger("skillswap.api.skills")

router = APIRouter()

_offer_service: SkillOfferService | None = None


def _get_offer_service() -> SkillOfferService:
    global _offer_service
    if _offer_service is None:
        _offer_service = SkillOfferService()
    return _offer_service


@router.post("/inserir", response_model=str, summary="Add a sub-skill offer")
async def create_offer(
    payload: SkillOfferCreate,
    db: AsyncSession = Depends(get_db),
) -> str:
    await _get_offer_service().create_offer(
        payload.user_id,
        payload.sub_skill_id,
        payload.description,
        payload.value,
        db_session=db,
    )
    return "Dados inseridos com sucesso"


@router.get("/obter_tudo", response_model=list[SkillOfferResponse], summary="List every offer")
async def list_all_offers(
    db: AsyncSession = Depends(get_db),
) -> list[SkillOfferResponse]:
    rows = await _get_offer_service().list_all_offers(db_session=db)
    return [SkillOfferResponse(**row) for row in rows]


@router.get(
    "/obter/{user_id}",
    response_model=list[SkillOfferResponse],
    summary="List the offers of one user",
)
async def list_offers(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[SkillOfferResponse]:
    rows = await _get_offer_service().list_offers(user_id, db_session=db)
    return [SkillOfferResponse(**row) for row in rows]


@router.put("/atualizar", response_model=str, summary="Update description and value of an offer")
async def update_offer(
    payload: SkillOfferUpdate,
    db: AsyncSession = Depends(get_db),
) -> str:
    updated = await _get_offer_service().update_offer(
        payload.user_id,
        payload.sub_skill_id,
        payload.description,
        payload.value,
        db_session=db,
    )
    if not updated:
        logger.info(
            "update_offer_no_rows",
            user_id=payload.user_id,
            sub_skill_id=payload.sub_skill_id,
        )
    return "Dados atualizados com sucesso"


@router.delete("/deletar/{user_id}", response_model=str, summary="Delete all offers of a user")
async def delete_offers(
    user_id: int,
    db: AsyncSession = Depends(get_db),
) -> str:
    await _get_offer_service().delete_offers(user_id, db_session=db)
    return "Dados deletados com sucesso"
