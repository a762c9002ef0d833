"""
Fixed column layout of every logical table.

Positions are shared by all backends: the spreadsheet addresses them by
column letter, the warehouse and SQL mirror by field name. A row is always
handed around as a list of cell strings in sheet order.
"""
from __future__ import annotations

import string
from dataclasses import dataclass


@dataclass(frozen=True)
class TableSpec:
    name: str                     # sheet tab, also used in messages
    warehouse_table: str
    width: int                    # number of columns A..
    fields: tuple[tuple[str, int], ...]

    @property
    def a1_range(self) -> str:
        return f"{self.name}!A:{string.ascii_uppercase[self.width - 1]}"

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def position(self, field: str) -> int:
        for name, index in self.fields:
            if name == field:
                return index
        raise KeyError(f"{self.name} has no field {field!r}")

    def cell(self, row: list[str], field: str) -> str:
        index = self.position(field)
        if index >= len(row) or row[index] is None:
            return ""
        return str(row[index])

    def to_row(self, values: dict[str, str]) -> list[str]:
        """Lay out named values at their sheet positions."""
        row = [""] * self.width
        for name, index in self.fields:
            row[index] = values.get(name) or ""
        return row

    def to_values(self, row: list[str]) -> dict[str, str]:
        return {name: self.cell(row, name) for name, _ in self.fields}


AUTHENTICATION = TableSpec(
    name="Authentication",
    warehouse_table="authentication",
    width=14,
    fields=(
        ("full_name", 1),
        ("email", 2),
        ("display_name", 3),
        ("team", 4),
        ("status", 10),
        ("password", 13),
    ),
)

DECENTRALIZATION = TableSpec(
    name="Ex Decentralization",
    warehouse_table="decentralization",
    width=6,
    fields=(
        ("pic_code", 0),
        ("subteam", 1),
        ("role", 2),
        ("region", 3),
        ("team", 4),
        ("concat_key", 5),
    ),
)

STORE_INFO = TableSpec(
    name="Ex Store_info",
    warehouse_table="store_info",
    width=13,
    fields=(
        ("store_id", 0),
        ("store_name", 1),
        ("buyer_id", 2),
        ("current_pic", 5),
        ("full_address", 9),
        ("last_order_date", 11),
        ("churn_status_this_month", 12),
    ),
)

CHURN_HISTORY = TableSpec(
    name="Ex Churn History",
    warehouse_table="churn_history",
    width=5,
    fields=(
        ("store_id", 0),
        ("churn_month", 1),
        ("type_of_churn", 3),
        ("reason", 4),
    ),
)

ACTIVE_HISTORY = TableSpec(
    name="Ex Active History",
    warehouse_table="active_history",
    width=2,
    fields=(
        ("store_id", 0),
        ("active_month", 1),
    ),
)

_ACTION_FIELDS = (
    ("store_id", 0),
    ("store_name", 1),
    ("contact_date", 2),
    ("pic", 3),
    ("subteam", 4),
    ("type_of_contact", 5),
    ("action", 6),
    ("note", 7),
)

CHURN_DATABASE = TableSpec(
    name="Churn Database",
    warehouse_table="churn_database",
    width=11,
    fields=_ACTION_FIELDS + (
        ("why_not_reawaken", 8),
        ("churn_month", 9),
        ("link_hubspot", 10),
    ),
)

ACTIVE_DATABASE = TableSpec(
    name="Active Database",
    warehouse_table="active_database",
    width=10,
    fields=_ACTION_FIELDS + (
        ("active_month", 8),
        ("link_hubspot", 9),
    ),
)

DROPDOWN_CHURN_ACTION = TableSpec(
    name="Dropdown Churn Action",
    warehouse_table="dropdown_churn_action",
    width=2,
    fields=(("type_of_churn", 0), ("churn_action", 1)),
)

DROPDOWN_ACTIVE_ACTION = TableSpec(
    name="Dropdown Active Action",
    warehouse_table="dropdown_active_action",
    width=1,
    fields=(("action", 0),),
)

DROPDOWN_WHY = TableSpec(
    name="Dropdown Why",
    warehouse_table="dropdown_why",
    width=2,
    fields=(("type_of_churn", 0), ("why_not_reawaken", 1)),
)

ALL_TABLES = (
    AUTHENTICATION,
    DECENTRALIZATION,
    STORE_INFO,
    CHURN_HISTORY,
    ACTIVE_HISTORY,
    CHURN_DATABASE,
    ACTIVE_DATABASE,
    DROPDOWN_CHURN_ACTION,
    DROPDOWN_ACTIVE_ACTION,
    DROPDOWN_WHY,
)
