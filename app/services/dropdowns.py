"""
Option lists for the action form, cached for the TTL.
"""
from __future__ import annotations

from app.core.cache import ResponseCache, cached
from app.gateway import tables
from app.gateway.records import ChurnActionOption, WhyReasonOption
from app.gateway.repository import OutreachRepository

CHURN_ACTIONS_KEY = "dropdown_churn_actions"
ACTIVE_ACTIONS_KEY = "dropdown_active_actions"
WHY_REASONS_KEY = "dropdown_why_reasons"


def churn_actions(repo: OutreachRepository, cache: ResponseCache) -> list[ChurnActionOption]:
    return cached(cache, CHURN_ACTIONS_KEY, lambda: repo.load_one(tables.DROPDOWN_CHURN_ACTION))


def active_actions(repo: OutreachRepository, cache: ResponseCache) -> list[str]:
    return cached(cache, ACTIVE_ACTIONS_KEY, lambda: repo.load_one(tables.DROPDOWN_ACTIVE_ACTION))


def why_reasons(repo: OutreachRepository, cache: ResponseCache) -> list[WhyReasonOption]:
    return cached(cache, WHY_REASONS_KEY, lambda: repo.load_one(tables.DROPDOWN_WHY))
