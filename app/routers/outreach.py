"""
Outreach router.

POST /home             - rep profile + scoped stores
POST /progress         - churn episodes / active months with actions
POST /submit           - record a churn or active action
POST /active-history   - active months of one store
POST /export-data      - xlsx of the rep's stores and actions
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from app.core.cache import ResponseCache
from app.core.errors import ValidationError
from app.dependencies import Policies, get_cache, get_policies, get_repository
from app.gateway.records import ActionKind, ActionRecord
from app.gateway.repository import OutreachRepository
from app.schemas.common import SuccessResponse
from app.schemas.outreach import (
    ActionOut,
    ActiveHistoryRequest,
    ActiveMonthOut,
    EmailRequest,
    HomeResponse,
    PicInfoOut,
    ProgressEntryOut,
    StoreOut,
    SubmitRequest,
)
from app.services.access import Identity
from app.services.aggregator import (
    EntryKind,
    HomeView,
    ProgressEntry,
    get_active_history,
    get_home_view,
    get_progress_view,
)
from app.services.export import XLSX_MEDIA_TYPE, export_workbook
from app.services.recorder import ActionSubmission, record_action

router = APIRouter(tags=["outreach"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _home_to_response(view: HomeView) -> HomeResponse:
    info = view.pic_info
    return HomeResponse(
        pic_info=PicInfoOut(
            full_name=info.full_name,
            email=info.email,
            status=info.status,
            team=info.team,
            subteam=info.subteam,
            role=info.role,
            region=info.region,
            concat=info.concat,
        ),
        stores=[
            StoreOut(
                store_id=v.store.store_id,
                store_name=v.store.store_name,
                buyer_id=v.store.buyer_id,
                full_address=v.store.full_address,
                last_order_date=v.store.last_order_date,
                final_current_pic=v.store.current_pic,
                status_churn_this_month=v.store.churn_status_this_month,
                days_since_last_order=v.days_since_last_order,
            )
            for v in view.stores
        ],
    )


def _action_out(a: ActionRecord) -> ActionOut:
    return ActionOut(
        contact_date=a.contact_date,
        pic=a.pic,
        subteam=a.subteam,
        type_of_contact=a.type_of_contact,
        action=a.action,
        note=a.note,
        why_not_reawaken=a.why_not_reawaken,
        churn_month=a.churn_month if a.kind is ActionKind.churn else None,
        active_month=a.active_month if a.kind is ActionKind.active else None,
        link_hubspot=a.link_hubspot,
    )


def _entry_out(entry: ProgressEntry) -> ProgressEntryOut:
    actions = [_action_out(a) for a in entry.actions]
    if entry.kind is EntryKind.churn:
        return ProgressEntryOut(
            churn_month=entry.month,
            first_churn_month=entry.month,
            type_of_churn=entry.type_of_churn,
            reason=entry.reason,
            actions=actions,
            churn_index=entry.index,
        )
    return ProgressEntryOut(
        active_month=entry.month,
        type_of_churn=entry.type_of_churn,
        reason=entry.reason,
        actions=actions,
        active_index=entry.index,
    )


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

@router.post(
    "/home",
    response_model=HomeResponse,
    summary="Rep profile and the stores in their scope",
    responses={
        400: {"description": "Email missing."},
        404: {"description": "Email not found in Authentication."},
    },
)
def home(
    payload: EmailRequest,
    force: bool = Query(default=False, description="Bypass the response cache."),
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
    policies: Policies = Depends(get_policies),
):
    """Stores are sorted by last order date, most recent first."""
    identity = Identity.from_email(payload.email)
    view = get_home_view(
        identity, repo, cache, force=force, strict=policies.strict, policy=policies.policy
    )
    return _home_to_response(view)


@router.post(
    "/progress",
    response_model=dict[str, list[ProgressEntryOut]],
    response_model_exclude_none=True,
    summary="Outreach progress per store in the rep's scope",
)
def progress(
    payload: EmailRequest,
    force: bool = Query(default=False, description="Bypass the response cache."),
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
    policies: Policies = Depends(get_policies),
):
    """
    Keyed by store ID. Each churn episode is listed (with or without actions);
    active months appear only once an action was recorded for them.
    """
    identity = Identity.from_email(payload.email)
    view = get_progress_view(
        identity, repo, cache, force=force, strict=policies.strict, policy=policies.policy
    )
    return {store_id: [_entry_out(e) for e in entries] for store_id, entries in view.items()}


@router.post(
    "/active-history",
    response_model=list[ActiveMonthOut],
    summary="Active months of a store, newest first",
)
def active_history(
    payload: ActiveHistoryRequest,
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
    policies: Policies = Depends(get_policies),
):
    if not payload.store_id:
        raise ValidationError.missing(["storeId"])
    months = get_active_history(payload.store_id, repo, cache, policy=policies.policy)
    return [ActiveMonthOut(active_month=m) for m in months]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@router.post(
    "/submit",
    response_model=SuccessResponse,
    summary="Record an outreach action",
    responses={
        400: {"description": "Missing required fields or unknown type."},
        403: {"description": "Rep has no permission on the store."},
        500: {"description": "The data source did not confirm the write."},
        503: {"description": "Connection to the data source was reset."},
    },
)
def submit(
    payload: SubmitRequest,
    type: Optional[str] = Query(
        default=None,
        description="Target table.",
        examples=["Churn Database", "Active Database"],
    ),
    repo: OutreachRepository = Depends(get_repository),
    cache: ResponseCache = Depends(get_cache),
    policies: Policies = Depends(get_policies),
):
    kind = ActionKind.from_table_name(type)
    if type and kind is None:
        raise ValidationError(
            message=f"Unknown action type {type!r}.",
            details={"type": type},
        )

    submission = ActionSubmission(
        store_id=payload.store_id,
        contact_date=payload.contact_date,
        type_of_contact=payload.type_of_contact,
        action=payload.action,
        kind=kind,
        store_name=payload.store_name,
        pic=payload.pic,
        subteam=payload.subteam,
        note=payload.note,
        why_not_reawaken=payload.why_not_reawaken,
        churn_month=payload.churn_month_last_order_date,
        active_month=payload.active_month,
        link_hubspot=payload.link_hubspot,
    )
    if not payload.email:
        raise ValidationError.missing(["email", *submission.missing_fields()])

    record_action(Identity.from_email(payload.email), submission, repo, cache, strict=policies.strict)
    return SuccessResponse()


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

@router.post(
    "/export-data",
    response_class=Response,
    summary="Download the rep's stores and actions as Excel",
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
def export_data(
    payload: EmailRequest,
    repo: OutreachRepository = Depends(get_repository),
    policies: Policies = Depends(get_policies),
):
    identity = Identity.from_email(payload.email)
    content = export_workbook(identity, repo, strict=policies.strict, policy=policies.policy)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="outreach_{identity.pic_code}.xlsx"'},
    )
