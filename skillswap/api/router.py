"""
SkillSwap — Main API Router

Aggregates all sub-routers so that ``skillswap.main`` can mount the entire
API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from skillswap.api import history, match, skills

router = APIRouter()

router.include_router(match.router, prefix="/match", tags=["Match"])
router.include_router(history.router, prefix="/historico", tags=["History"])
router.include_router(skills.router, tags=["Skill offers"])
