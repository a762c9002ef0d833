"""
Store & history aggregation, scoped by the access resolver.

Public API
----------
build_home_view(identity, repo, ...)       -> HomeView
build_progress_view(identity, repo, ...)   -> dict[store_id, list[ProgressEntry]]
get_home_view / get_progress_view          -> same, through the response cache
get_active_history(store_id, repo, cache)  -> list[str]   (months, newest first)

Pure helpers (no I/O, used directly by tests)
--------------------------------------------
sort_stores(stores, policy)
assemble_progress(accessible, churn_history, active_history, actions, policy)
"""
from __future__ import annotations

import enum
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from app.core.cache import ResponseCache, active_history_key, cached, home_key, progress_key
from app.core.dates import DateParsePolicy, days_since, parse_date, parse_month_year
from app.core.errors import AccountNotFoundError
from app.gateway import tables
from app.gateway.records import (
    NOT_AVAILABLE,
    ActionKind,
    ActionRecord,
    ActiveHistoryEntry,
    AuthAccount,
    AuthorizationRecord,
    ChurnHistoryEntry,
    Role,
    StoreRecord,
)
from app.gateway.repository import OutreachRepository
from app.services.access import Identity, find_authorization, resolve_accessible_stores

ACTIVE_TYPE_OF_CHURN = "Active"


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class PicInfo:
    full_name: str
    email: str
    status: str
    team: str = NOT_AVAILABLE
    subteam: str = NOT_AVAILABLE
    role: str = Role.member.value
    region: str = NOT_AVAILABLE
    concat: str = NOT_AVAILABLE


@dataclass
class StoreView:
    store: StoreRecord
    days_since_last_order: Optional[int]


@dataclass
class HomeView:
    pic_info: PicInfo
    stores: list[StoreView]


class EntryKind(str, enum.Enum):
    churn = "churn"
    active = "active"


@dataclass
class ProgressEntry:
    """One churn episode or active month of a store with its contacts."""
    kind: EntryKind
    month: str
    index: int                     # 1-based position in the store's history
    type_of_churn: str
    reason: str = ""
    actions: list[ActionRecord] = field(default_factory=list)


def _today() -> date:
    return datetime.now(tz=timezone.utc).date()


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

def _find_account(email: str, accounts: list[AuthAccount]) -> Optional[AuthAccount]:
    for account in accounts:
        if account.email == email:
            return account
    return None


def build_pic_info(account: AuthAccount, record: Optional[AuthorizationRecord]) -> PicInfo:
    info = PicInfo(
        full_name=account.full_name,
        email=account.email,
        status=account.status,
    )
    if record is not None:
        info.subteam = record.subteam
        info.role = record.role
        info.region = record.region
        info.team = record.team
        info.concat = record.concat_key
    return info


def sort_stores(
    stores: list[StoreRecord],
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> list[StoreRecord]:
    """Most recent last order first."""
    return sorted(stores, key=lambda s: parse_date(s.last_order_date, policy), reverse=True)


def build_home_view(
    identity: Identity,
    repo: OutreachRepository,
    strict: bool = True,
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
    today: Optional[date] = None,
) -> HomeView:
    accounts, auth_records, store_records = repo.load(
        tables.AUTHENTICATION, tables.DECENTRALIZATION, tables.STORE_INFO
    )
    account = _find_account(identity.email, accounts)
    if account is None:
        raise AccountNotFoundError(identity.email)

    pic_info = build_pic_info(account, find_authorization(identity.pic_code, auth_records))
    accessible = resolve_accessible_stores(identity, auth_records, store_records, strict=strict)
    visible = [s for s in store_records if s.store_id in accessible]

    today = today or _today()
    return HomeView(
        pic_info=pic_info,
        stores=[
            StoreView(store=s, days_since_last_order=days_since(s.last_order_date, today, policy))
            for s in sort_stores(visible, policy)
        ],
    )


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def _newest_contact_first(actions: list[ActionRecord], policy: DateParsePolicy) -> list[ActionRecord]:
    return sorted(actions, key=lambda a: parse_date(a.contact_date, policy), reverse=True)


def assemble_progress(
    accessible: set[str],
    churn_history: list[ChurnHistoryEntry],
    active_history: list[ActiveHistoryEntry],
    actions: list[ActionRecord],
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> dict[str, list[ProgressEntry]]:
    """
    Group actions under the churn episode / active month they belong to.

    Churn episodes are always emitted, even with no actions (the UI shows
    them as needing follow-up). Active months are emitted only when at least
    one action was recorded for them. Stores without any history row are
    left out of the result.
    """
    churn_by_store: dict[str, list[ChurnHistoryEntry]] = defaultdict(list)
    for entry in churn_history:
        churn_by_store[entry.store_id].append(entry)

    active_by_store: dict[str, list[ActiveHistoryEntry]] = defaultdict(list)
    for entry in active_history:
        active_by_store[entry.store_id].append(entry)

    actions_by_store: dict[str, list[ActionRecord]] = defaultdict(list)
    for action in actions:
        if action.store_id in accessible:
            actions_by_store[action.store_id].append(action)

    store_ids = list(dict.fromkeys([*churn_by_store, *active_by_store]))
    progress: dict[str, list[ProgressEntry]] = {}

    for store_id in store_ids:
        if store_id not in accessible:
            continue
        store_actions = actions_by_store.get(store_id, [])
        entries: list[ProgressEntry] = []

        for index, churn in enumerate(churn_by_store.get(store_id, []), start=1):
            matching = [
                a for a in store_actions
                if a.kind is ActionKind.churn and a.churn_month == churn.churn_month
            ]
            entries.append(ProgressEntry(
                kind=EntryKind.churn,
                month=churn.churn_month,
                index=index,
                type_of_churn=churn.type_of_churn,
                reason=churn.reason,
                actions=_newest_contact_first(matching, policy),
            ))

        for index, active in enumerate(active_by_store.get(store_id, []), start=1):
            matching = [
                a for a in store_actions
                if a.kind is ActionKind.active and a.active_month == active.active_month
            ]
            if not matching:
                continue
            entries.append(ProgressEntry(
                kind=EntryKind.active,
                month=active.active_month,
                index=index,
                type_of_churn=ACTIVE_TYPE_OF_CHURN,
                actions=_newest_contact_first(matching, policy),
            ))

        entries.sort(key=lambda e: parse_month_year(e.month, policy), reverse=True)
        progress[store_id] = entries

    return progress


def build_progress_view(
    identity: Identity,
    repo: OutreachRepository,
    strict: bool = True,
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> dict[str, list[ProgressEntry]]:
    (
        auth_records,
        store_records,
        churn_history,
        active_history,
        churn_actions,
        active_actions,
    ) = repo.load(
        tables.DECENTRALIZATION,
        tables.STORE_INFO,
        tables.CHURN_HISTORY,
        tables.ACTIVE_HISTORY,
        tables.CHURN_DATABASE,
        tables.ACTIVE_DATABASE,
    )
    accessible = resolve_accessible_stores(identity, auth_records, store_records, strict=strict)
    return assemble_progress(
        accessible,
        churn_history,
        active_history,
        churn_actions + active_actions,
        policy,
    )


# ---------------------------------------------------------------------------
# Cached entry points
# ---------------------------------------------------------------------------

def get_home_view(
    identity: Identity,
    repo: OutreachRepository,
    cache: ResponseCache,
    force: bool = False,
    **options,
) -> HomeView:
    return cached(
        cache,
        home_key(identity.email),
        lambda: build_home_view(identity, repo, **options),
        force=force,
    )


def get_progress_view(
    identity: Identity,
    repo: OutreachRepository,
    cache: ResponseCache,
    force: bool = False,
    **options,
) -> dict[str, list[ProgressEntry]]:
    return cached(
        cache,
        progress_key(identity.email),
        lambda: build_progress_view(identity, repo, **options),
        force=force,
    )


def get_active_history(
    store_id: str,
    repo: OutreachRepository,
    cache: ResponseCache,
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> list[str]:
    def compute() -> list[str]:
        history = repo.load_one(tables.ACTIVE_HISTORY)
        months = [h.active_month for h in history if h.store_id == store_id]
        return sorted(months, key=lambda m: parse_month_year(m, policy), reverse=True)

    return cached(cache, active_history_key(store_id), compute)
