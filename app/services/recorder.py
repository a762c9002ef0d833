"""
Action recorder: the only write path. Appends one outreach action row.

Order of checks
---------------
1. required fields present            -> ValidationError
2. rep may act on the store           -> PermissionDeniedError
3. append reports exactly one row     -> WriteError

On success the rep's cached home and progress views are dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.cache import ResponseCache, home_key, progress_key
from app.core.errors import PermissionDeniedError, ValidationError, WriteError
from app.gateway import tables
from app.gateway.records import ActionKind, ActionRecord
from app.gateway.repository import OutreachRepository
from app.services.access import Identity, can_access_store

logger = logging.getLogger(__name__)


@dataclass
class ActionSubmission:
    """Lightweight DTO so the service layer stays schema-agnostic."""
    store_id: Optional[str] = None
    contact_date: Optional[str] = None
    type_of_contact: Optional[str] = None
    action: Optional[str] = None
    kind: Optional[ActionKind] = None
    store_name: Optional[str] = None
    pic: Optional[str] = None
    subteam: Optional[str] = None
    note: Optional[str] = None
    why_not_reawaken: Optional[str] = None
    churn_month: Optional[str] = None
    active_month: Optional[str] = None
    link_hubspot: Optional[str] = None

    def missing_fields(self) -> list[str]:
        required = {
            "storeId": self.store_id,
            "contactDate": self.contact_date,
            "typeOfContact": self.type_of_contact,
            "action": self.action,
            "type": self.kind,
        }
        return [name for name, value in required.items() if not value]

    def to_record(self) -> ActionRecord:
        record = ActionRecord(
            kind=self.kind,
            store_id=self.store_id,
            contact_date=self.contact_date,
            type_of_contact=self.type_of_contact,
            action=self.action,
            store_name=self.store_name or "",
            pic=self.pic or "",
            subteam=self.subteam or "",
            note=self.note or "",
            link_hubspot=self.link_hubspot or "",
        )
        if self.kind is ActionKind.churn:
            record.why_not_reawaken = self.why_not_reawaken or ""
            record.churn_month = self.churn_month or ""
        else:
            record.active_month = self.active_month or ""
        return record


def invalidate_views(cache: ResponseCache, identity: Identity) -> None:
    cache.delete(home_key(identity.email))
    cache.delete(progress_key(identity.email))


def record_action(
    identity: Identity,
    submission: ActionSubmission,
    repo: OutreachRepository,
    cache: ResponseCache,
    strict: bool = True,
) -> ActionRecord:
    missing = submission.missing_fields()
    if missing:
        raise ValidationError.missing(missing)

    auth_records, store_records = repo.load(tables.DECENTRALIZATION, tables.STORE_INFO)
    if not can_access_store(identity, submission.store_id, auth_records, store_records, strict=strict):
        raise PermissionDeniedError(identity.pic_code, submission.store_id)

    record = submission.to_record()
    table = record.kind.table
    appended = repo.append(table, record.to_row())
    if appended != 1:
        logger.error("Failed to write data to %s: %d rows updated", table.name, appended)
        raise WriteError(table.name, appended)

    logger.info("%s recorded %s action for store %s", identity.pic_code, record.kind.value, record.store_id)
    invalidate_views(cache, identity)
    return record
