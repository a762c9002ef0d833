"""
Composition root: process-wide repository and cache, injected via Depends.

Tests override `get_repository` / `get_cache` through
`app.dependency_overrides`.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from app.core.cache import InMemoryResponseCache, ResponseCache
from app.core.config import settings
from app.core.dates import DateParsePolicy
from app.gateway import build_gateway
from app.gateway.repository import OutreachRepository


@dataclass(frozen=True)
class Policies:
    strict: bool
    policy: DateParsePolicy


@lru_cache
def get_repository() -> OutreachRepository:
    return OutreachRepository(
        build_gateway(settings),
        timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        max_workers=settings.GATEWAY_MAX_WORKERS,
    )


@lru_cache
def get_cache() -> ResponseCache:
    return InMemoryResponseCache(default_ttl=settings.CACHE_TTL_SECONDS)


def get_policies() -> Policies:
    return Policies(
        strict=settings.STRICT_AUTHORIZATION,
        policy=DateParsePolicy(settings.DATE_PARSE_POLICY),
    )
