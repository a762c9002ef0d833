"""
Store outreach request / response schemas.

Home:      POST /home          -> EmailRequest       -> HomeResponse
Progress:  POST /progress      -> EmailRequest       -> dict[storeId, list[ProgressEntryOut]]
Submit:    POST /submit        -> SubmitRequest      -> SuccessResponse
History:   POST /active-history -> ActiveHistoryRequest -> list[ActiveMonthOut]
"""
from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel


class EmailRequest(CamelModel):
    email: Optional[str] = Field(default=None, examples=["alice@myco.vn"])


class ActiveHistoryRequest(CamelModel):
    store_id: Optional[str] = Field(default=None, examples=["S0001"])


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

class PicInfoOut(CamelModel):
    full_name: str
    email: str
    status: str
    team: str
    subteam: str
    role: str
    region: str
    concat: str


class StoreOut(CamelModel):
    store_id: str
    store_name: str
    buyer_id: str
    full_address: str
    last_order_date: str
    final_current_pic: str = Field(alias="finalCurrentPIC")
    status_churn_this_month: str
    days_since_last_order: Optional[int] = Field(
        default=None,
        description="Null when the last order date cannot be parsed.",
    )


class HomeResponse(CamelModel):
    pic_info: PicInfoOut
    stores: list[StoreOut]


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

class ActionOut(CamelModel):
    contact_date: str
    pic: str = Field(alias="PIC")
    subteam: str
    type_of_contact: str
    action: str
    note: str
    why_not_reawaken: str = ""
    churn_month: Optional[str] = None
    active_month: Optional[str] = None
    link_hubspot: str = ""


class ProgressEntryOut(CamelModel):
    """A churn episode (churn* fields) or an active month (active* fields)."""
    churn_month: Optional[str] = None
    first_churn_month: Optional[str] = None
    active_month: Optional[str] = None
    type_of_churn: str
    reason: str
    actions: list[ActionOut]
    churn_index: Optional[int] = None
    active_index: Optional[int] = None


class ActiveMonthOut(CamelModel):
    active_month: str


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------

class SubmitRequest(CamelModel):
    """Required fields are checked by the recorder so they are reported together."""
    email: Optional[str] = None
    store_id: Optional[str] = None
    store_name: Optional[str] = None
    action: Optional[str] = None
    contact_date: Optional[str] = Field(default=None, examples=["15/06/2024"])
    pic: Optional[str] = Field(default=None, alias="PIC")
    subteam: Optional[str] = None
    type_of_contact: Optional[str] = None
    note: Optional[str] = None
    why_not_reawaken: Optional[str] = None
    churn_month_last_order_date: Optional[str] = Field(default=None, examples=["05/2024"])
    active_month: Optional[str] = Field(default=None, examples=["06/2024"])
    link_hubspot: Optional[str] = None


# ---------------------------------------------------------------------------
# Dropdowns
# ---------------------------------------------------------------------------

class ChurnActionOut(CamelModel):
    type_of_churn: str
    churn_action: str


class WhyReasonOut(CamelModel):
    type_of_churn: str
    why_not_reawaken: str
