"""
Access scope resolution: which stores a rep may view or act upon.

Decision tree on the rep's decentralization row:

  Member                  -> stores they own (currentPIC == picCode)
  Leader                  -> stores owned by anyone in the same subteam
  Manager, region ALL     -> every store
  Manager, region HCM     -> stores owned by anyone with the same concat key
  Manager, region HN
      team ALL            -> stores owned by any PIC whose region is HN
      other team          -> same as HCM (concat key)
  anything else           -> nothing

A rep with no decentralization row gets nothing under strict authorization;
with strict=False they are treated as a Member matched on raw picCode.

`can_access_store` is a membership test on the same resolved set so the
write gate and the views can never disagree.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from app.core.errors import ValidationError
from app.gateway.records import AuthorizationRecord, Role, StoreRecord

REGION_ALL = "ALL"
REGION_HCM = "HCM"
REGION_HN = "HN"
TEAM_ALL = "ALL"


@dataclass
class Identity:
    """A rep, keyed by the local part of their email (the PIC code)."""
    email: str
    pic_code: str = field(init=False)

    def __post_init__(self) -> None:
        self.email = (self.email or "").strip()
        self.pic_code = self.email.split("@")[0]

    @classmethod
    def from_email(cls, email: Optional[str]) -> "Identity":
        identity = cls(email or "")
        if not identity.pic_code:
            raise ValidationError.missing(["email"])
        return identity


def find_authorization(
    pic_code: str, auth_records: Iterable[AuthorizationRecord]
) -> Optional[AuthorizationRecord]:
    for record in auth_records:
        if record.pic_code == pic_code:
            return record
    return None


def _pics_where(auth_records: list[AuthorizationRecord], predicate) -> set[str]:
    return {r.pic_code for r in auth_records if r.pic_code and predicate(r)}


def accessible_pics(
    record: AuthorizationRecord, auth_records: list[AuthorizationRecord]
) -> Optional[set[str]]:
    """PIC codes whose stores `record` may see; None means unrestricted."""
    if record.role == Role.member:
        return {record.pic_code}

    if record.role == Role.leader:
        return _pics_where(auth_records, lambda r: r.subteam == record.subteam)

    if record.role == Role.manager:
        if record.region == REGION_ALL:
            return None
        if record.region == REGION_HCM:
            return _pics_where(auth_records, lambda r: r.concat_key == record.concat_key)
        if record.region == REGION_HN:
            if record.team == TEAM_ALL:
                return _pics_where(auth_records, lambda r: r.region == REGION_HN)
            return _pics_where(auth_records, lambda r: r.concat_key == record.concat_key)

    return set()


def resolve_accessible_stores(
    identity: Identity,
    auth_records: list[AuthorizationRecord],
    store_records: list[StoreRecord],
    strict: bool = True,
) -> set[str]:
    record = find_authorization(identity.pic_code, auth_records)
    if record is None:
        if strict:
            return set()
        record = AuthorizationRecord(pic_code=identity.pic_code)

    pics = accessible_pics(record, auth_records)
    if pics is None:
        return {s.store_id for s in store_records if s.store_id}
    return {s.store_id for s in store_records if s.store_id and s.current_pic and s.current_pic in pics}


def can_access_store(
    identity: Identity,
    store_id: str,
    auth_records: list[AuthorizationRecord],
    store_records: list[StoreRecord],
    strict: bool = True,
) -> bool:
    return store_id in resolve_accessible_stores(identity, auth_records, store_records, strict=strict)
