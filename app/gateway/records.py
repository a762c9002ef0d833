"""
Typed records, translated once from raw rows at the gateway boundary.

Nothing past this module indexes a row by position.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from app.gateway import tables
from app.gateway.tables import TableSpec

NOT_AVAILABLE = "N/A"


class Role(str, enum.Enum):
    member = "Member"
    leader = "Leader"
    manager = "Manager"


class ActionKind(str, enum.Enum):
    churn = "Churn"
    active = "Active"

    @property
    def table(self) -> TableSpec:
        return tables.CHURN_DATABASE if self is ActionKind.churn else tables.ACTIVE_DATABASE

    @classmethod
    def from_table_name(cls, value: Optional[str]) -> Optional["ActionKind"]:
        """Map the `?type=` value used by clients ("Churn Database", ...)."""
        for kind in cls:
            if value in (kind.value, kind.table.name):
                return kind
        return None


@dataclass
class AuthAccount:
    full_name: str
    email: str
    display_name: str
    team: str
    status: str
    password: str

    @property
    def is_active(self) -> bool:
        return self.status == "Active"

    @classmethod
    def from_row(cls, row: list[str]) -> "AuthAccount":
        v = tables.AUTHENTICATION.to_values(row)
        return cls(**v)


@dataclass
class AuthorizationRecord:
    pic_code: str
    subteam: str = NOT_AVAILABLE
    role: str = Role.member.value
    region: str = NOT_AVAILABLE
    team: str = NOT_AVAILABLE
    concat_key: str = NOT_AVAILABLE

    @classmethod
    def from_row(cls, row: list[str]) -> "AuthorizationRecord":
        v = tables.DECENTRALIZATION.to_values(row)
        return cls(
            pic_code=v["pic_code"],
            subteam=v["subteam"] or NOT_AVAILABLE,
            role=v["role"] or Role.member.value,
            region=v["region"] or NOT_AVAILABLE,
            team=v["team"] or NOT_AVAILABLE,
            concat_key=v["concat_key"] or NOT_AVAILABLE,
        )


@dataclass
class StoreRecord:
    store_id: str
    store_name: str = ""
    buyer_id: str = ""
    current_pic: str = ""
    full_address: str = ""
    last_order_date: str = ""
    churn_status_this_month: str = ""

    @classmethod
    def from_row(cls, row: list[str]) -> "StoreRecord":
        return cls(**tables.STORE_INFO.to_values(row))


@dataclass
class ChurnHistoryEntry:
    store_id: str
    churn_month: str
    type_of_churn: str = ""
    reason: str = ""

    @classmethod
    def from_row(cls, row: list[str]) -> "ChurnHistoryEntry":
        return cls(**tables.CHURN_HISTORY.to_values(row))


@dataclass
class ActiveHistoryEntry:
    store_id: str
    active_month: str

    @classmethod
    def from_row(cls, row: list[str]) -> "ActiveHistoryEntry":
        return cls(**tables.ACTIVE_HISTORY.to_values(row))


@dataclass
class ActionRecord:
    """One outreach contact; churn and active actions share this shape."""
    kind: ActionKind
    store_id: str
    contact_date: str
    type_of_contact: str
    action: str
    store_name: str = ""
    pic: str = ""
    subteam: str = ""
    note: str = ""
    why_not_reawaken: str = ""
    churn_month: str = ""
    active_month: str = ""
    link_hubspot: str = ""

    @property
    def month(self) -> str:
        return self.churn_month if self.kind is ActionKind.churn else self.active_month

    @classmethod
    def from_row(cls, kind: ActionKind, row: list[str]) -> "ActionRecord":
        return cls(kind=kind, **kind.table.to_values(row))

    def to_row(self) -> list[str]:
        values = {name: getattr(self, name) for name in self.kind.table.field_names}
        return self.kind.table.to_row(values)


@dataclass
class ChurnActionOption:
    type_of_churn: str
    churn_action: str

    @classmethod
    def from_row(cls, row: list[str]) -> "ChurnActionOption":
        return cls(**tables.DROPDOWN_CHURN_ACTION.to_values(row))


@dataclass
class WhyReasonOption:
    type_of_churn: str
    why_not_reawaken: str

    @classmethod
    def from_row(cls, row: list[str]) -> "WhyReasonOption":
        return cls(**tables.DROPDOWN_WHY.to_values(row))


def churn_action_from_row(row: list[str]) -> ActionRecord:
    return ActionRecord.from_row(ActionKind.churn, row)


def active_action_from_row(row: list[str]) -> ActionRecord:
    return ActionRecord.from_row(ActionKind.active, row)


def active_option_from_row(row: list[str]) -> str:
    return tables.DROPDOWN_ACTIVE_ACTION.cell(row, "action")


RECORD_FACTORIES = {
    tables.AUTHENTICATION.name: AuthAccount.from_row,
    tables.DECENTRALIZATION.name: AuthorizationRecord.from_row,
    tables.STORE_INFO.name: StoreRecord.from_row,
    tables.CHURN_HISTORY.name: ChurnHistoryEntry.from_row,
    tables.ACTIVE_HISTORY.name: ActiveHistoryEntry.from_row,
    tables.CHURN_DATABASE.name: churn_action_from_row,
    tables.ACTIVE_DATABASE.name: active_action_from_row,
    tables.DROPDOWN_CHURN_ACTION.name: ChurnActionOption.from_row,
    tables.DROPDOWN_ACTIVE_ACTION.name: active_option_from_row,
    tables.DROPDOWN_WHY.name: WhyReasonOption.from_row,
}
