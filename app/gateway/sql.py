"""
SQL backend over the mirror tables in `app.models`.

Used for local development and the test-suite; any SQLAlchemy URL works.
"""
from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.gateway.base import stringify, translate_errors
from app.gateway.tables import TableSpec
from app.models.account import Authentication, Decentralization
from app.models.action import ActiveAction, ChurnAction
from app.models.dropdown import DropdownActiveAction, DropdownChurnAction, DropdownWhy
from app.models.store import ActiveHistory, ChurnHistory, StoreInfo

MODELS = {
    model.__tablename__: model
    for model in (
        Authentication,
        Decentralization,
        StoreInfo,
        ChurnHistory,
        ActiveHistory,
        ChurnAction,
        ActiveAction,
        DropdownChurnAction,
        DropdownActiveAction,
        DropdownWhy,
    )
}


class SqlGateway:
    backend = "sql"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _model(self, table: TableSpec):
        return MODELS[table.warehouse_table]

    def read_range(self, table: TableSpec) -> list[list[str]]:
        model = self._model(table)
        columns = [getattr(model, name) for name in table.field_names]
        stmt = select(*columns).order_by(model.id)
        with translate_errors(table, SQLAlchemyError):
            with self.session_factory() as db:
                result = db.execute(stmt).all()
        return [
            table.to_row({name: stringify(value) for name, value in zip(table.field_names, record)})
            for record in result
        ]

    def append_row(self, table: TableSpec, row: list[str]) -> int:
        model = self._model(table)
        stmt = insert(model).values(**table.to_values(row))
        with translate_errors(table, SQLAlchemyError):
            with self.session_factory() as db:
                result = db.execute(stmt)
                db.commit()
                return result.rowcount
