"""
Excel export of a rep's scoped stores and recorded actions.

Always built from fresh reads (never the response cache) and through the
same resolver as the views.
"""
from __future__ import annotations

import io

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from app.core.dates import DateParsePolicy
from app.gateway.repository import OutreachRepository
from app.services.access import Identity
from app.services.aggregator import build_home_view, build_progress_view

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

STORE_COLUMNS = [
    "Store ID", "Store Name", "Buyer ID", "Full Address", "Last Order Date",
    "Days Since Last Order", "Current PIC", "Churn Status This Month",
]

ACTION_COLUMNS = [
    "Store ID", "Episode", "Month", "Contact Date", "PIC", "Subteam",
    "Type Of Contact", "Action", "Note", "Why Not Reawaken", "Link Hubspot",
]

_HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
_HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)


def _write_sheet(ws, columns: list[str], rows: list[list]) -> None:
    for col_idx, name in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col_idx, value=name)
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")
        ws.column_dimensions[get_column_letter(col_idx)].width = max(len(name) + 4, 12)
    for row in rows:
        ws.append(row)
    ws.freeze_panes = "A2"


def export_workbook(
    identity: Identity,
    repo: OutreachRepository,
    strict: bool = True,
    policy: DateParsePolicy = DateParsePolicy.lenient_epoch_fallback,
) -> bytes:
    home = build_home_view(identity, repo, strict=strict, policy=policy)
    progress = build_progress_view(identity, repo, strict=strict, policy=policy)

    store_rows = [
        [
            v.store.store_id, v.store.store_name, v.store.buyer_id, v.store.full_address,
            v.store.last_order_date, v.days_since_last_order, v.store.current_pic,
            v.store.churn_status_this_month,
        ]
        for v in home.stores
    ]
    action_rows = [
        [
            store_id, entry.type_of_churn, entry.month, a.contact_date, a.pic, a.subteam,
            a.type_of_contact, a.action, a.note, a.why_not_reawaken, a.link_hubspot,
        ]
        for store_id, entries in progress.items()
        for entry in entries
        for a in entry.actions
    ]

    wb = Workbook()
    stores_ws = wb.active
    stores_ws.title = "Stores"
    _write_sheet(stores_ws, STORE_COLUMNS, store_rows)
    _write_sheet(wb.create_sheet("Actions"), ACTION_COLUMNS, action_rows)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
