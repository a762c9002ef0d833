"""
Dropdown router.

GET /dropdown-churn-actions
GET /dropdown-active-actions
GET /dropdown-why-reasons
"""
from fastapi import APIRouter, Depends

from app.core.cache import ResponseCache
from app.dependencies import get_cache, get_repository
from app.gateway.repository import OutreachRepository
from app.schemas.outreach import ChurnActionOut, WhyReasonOut
from app.services import dropdowns

router = APIRouter(tags=["dropdowns"])


@router.get("/dropdown-churn-actions", response_model=list[ChurnActionOut])
def churn_actions(
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
):
    return [
        ChurnActionOut(type_of_churn=o.type_of_churn, churn_action=o.churn_action)
        for o in dropdowns.churn_actions(repo, cache)
    ]


@router.get("/dropdown-active-actions", response_model=list[str])
def active_actions(
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
):
    return dropdowns.active_actions(repo, cache)


@router.get("/dropdown-why-reasons", response_model=list[WhyReasonOut])
def why_reasons(
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
):
    return [
        WhyReasonOut(type_of_churn=o.type_of_churn, why_not_reawaken=o.why_not_reawaken)
        for o in dropdowns.why_reasons(repo, cache)
    ]
