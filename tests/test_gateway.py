"""
Tests for the gateway layer: table layouts, error translation, the
Sheets / BigQuery / SQL backends and the repository's parallel reads.

The Google clients are replaced with MagicMock objects; no network.
"""
import errno
import socket
import threading
from unittest.mock import MagicMock

import httplib2
import pytest
from google.api_core.exceptions import BadRequest
from googleapiclient.errors import HttpError

from app.core.config import Settings
from app.core.errors import (
    GatewayError,
    GatewayTimeoutError,
    GatewayUnavailableError,
    PermissionDeniedError,
)
from app.gateway import build_gateway, tables
from app.gateway.base import stringify, translate_errors
from app.gateway.bigquery import BigQueryGateway
from app.gateway.records import ActionKind, AuthAccount, StoreRecord
from app.gateway.repository import OutreachRepository
from app.gateway.sheets import SheetsGateway
from app.gateway.sql import SqlGateway


# ---------------------------------------------------------------------------
# Table layouts and records
# ---------------------------------------------------------------------------

class TestTableSpec:
    def test_a1_range(self):
        assert tables.CHURN_DATABASE.a1_range == "Churn Database!A:K"
        assert tables.ACTIVE_DATABASE.a1_range == "Active Database!A:J"
        assert tables.AUTHENTICATION.a1_range == "Authentication!A:N"

    def test_authentication_positions(self):
        row = [""] * 14
        row[2], row[10], row[13] = "alice@myco.vn", "Active", "1234"
        account = AuthAccount.from_row(row)
        assert account.email == "alice@myco.vn"
        assert account.is_active
        assert account.password == "1234"

    def test_short_row_reads_blank_cells(self):
        store = StoreRecord.from_row(["S1"])
        assert store.store_id == "S1"
        assert store.current_pic == ""

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            tables.STORE_INFO.position("nope")

    def test_every_table_has_a_record_factory(self):
        from app.gateway.records import RECORD_FACTORIES

        assert set(RECORD_FACTORIES) == {t.name for t in tables.ALL_TABLES}


class TestActionKind:
    @pytest.mark.parametrize("value, expected", [
        ("Churn", ActionKind.churn),
        ("Churn Database", ActionKind.churn),
        ("Active", ActionKind.active),
        ("Active Database", ActionKind.active),
        ("Other", None),
        (None, None),
    ])
    def test_from_table_name(self, value, expected):
        assert ActionKind.from_table_name(value) is expected

    def test_table(self):
        assert ActionKind.churn.table is tables.CHURN_DATABASE
        assert ActionKind.active.table is tables.ACTIVE_DATABASE


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------

class TestTranslateErrors:
    def _raise(self, exc, *library_errors):
        with translate_errors(tables.STORE_INFO, *library_errors):
            raise exc

    def test_connection_reset_is_unavailable(self):
        with pytest.raises(GatewayUnavailableError) as exc:
            self._raise(ConnectionResetError("reset by peer"))
        assert exc.value.http_status == 503
        assert exc.value.details == {"table": "Ex Store_info"}

    def test_econnreset_errno_is_unavailable(self):
        with pytest.raises(GatewayUnavailableError):
            self._raise(OSError(errno.ECONNRESET, "reset"))

    def test_socket_timeout(self):
        with pytest.raises(GatewayTimeoutError):
            self._raise(socket.timeout("timed out"))

    def test_other_os_error(self):
        with pytest.raises(GatewayError) as exc:
            self._raise(OSError(errno.EHOSTUNREACH, "no route"))
        assert not isinstance(exc.value, GatewayUnavailableError)

    def test_library_error(self):
        with pytest.raises(GatewayError) as exc:
            self._raise(BadRequest("bad query"), BadRequest)
        assert exc.value.code == "GATEWAY_ERROR"

    def test_application_errors_pass_through(self):
        with pytest.raises(PermissionDeniedError):
            self._raise(PermissionDeniedError("alice", "S2"))

    def test_unlisted_errors_propagate(self):
        with pytest.raises(ValueError):
            self._raise(ValueError("bug"))


class TestStringify:
    def test_values(self):
        from datetime import date

        assert stringify(None) == ""
        assert stringify(date(2024, 6, 1)) == "2024-06-01"
        assert stringify(12) == "12"


# ---------------------------------------------------------------------------
# Sheets
# ---------------------------------------------------------------------------

def sheets_with(response=None, error=None):
    service = MagicMock()
    values = service.spreadsheets.return_value.values.return_value
    for method in (values.get, values.append):
        if error is not None:
            method.return_value.execute.side_effect = error
        else:
            method.return_value.execute.return_value = response
    gateway = SheetsGateway("sheet-id", credentials=None, service_factory=lambda: service)
    return gateway, values


class TestSheetsGateway:
    def test_read_drops_header(self):
        gateway, values = sheets_with({"values": [["Store ID"], ["S1"], ["S2"]]})
        assert gateway.read_range(tables.STORE_INFO) == [["S1"], ["S2"]]
        values.get.assert_called_once_with(spreadsheetId="sheet-id", range=tables.STORE_INFO.a1_range)

    def test_read_empty_tab(self):
        gateway, _ = sheets_with({})
        assert gateway.read_range(tables.STORE_INFO) == []

    def test_append_returns_updated_rows(self):
        gateway, values = sheets_with({"updates": {"updatedRows": 1}})
        row = ["S1"] + [""] * 10
        assert gateway.append_row(tables.CHURN_DATABASE, row) == 1
        values.append.assert_called_once_with(
            spreadsheetId="sheet-id",
            range="Churn Database!A:K",
            valueInputOption="RAW",
            body={"values": [row]},
        )

    def test_append_without_updates_counts_zero(self):
        gateway, _ = sheets_with({})
        assert gateway.append_row(tables.CHURN_DATABASE, ["S1"]) == 0

    def test_http_error_translated(self):
        error = HttpError(httplib2.Response({"status": "500"}), b'{"error": {"message": "backend"}}')
        gateway, _ = sheets_with(error=error)
        with pytest.raises(GatewayError) as exc:
            gateway.read_range(tables.STORE_INFO)
        assert exc.value.details["table"] == "Ex Store_info"

    def test_connection_reset_translated(self):
        gateway, _ = sheets_with(error=ConnectionResetError("reset"))
        with pytest.raises(GatewayUnavailableError):
            gateway.append_row(tables.ACTIVE_DATABASE, ["S1"])


# ---------------------------------------------------------------------------
# BigQuery
# ---------------------------------------------------------------------------

class TestBigQueryGateway:
    def test_read_builds_rows_in_sheet_order(self):
        client = MagicMock()
        job = client.query.return_value
        job.result.return_value = [
            {"store_id": "S1", "active_month": "06/2024"},
            {"store_id": "S2", "active_month": None},
        ]
        gateway = BigQueryGateway(client, "proj", "ds", timeout=5)

        assert gateway.read_range(tables.ACTIVE_HISTORY) == [["S1", "06/2024"], ["S2", ""]]
        sql = client.query.call_args.args[0]
        assert sql == "SELECT store_id, active_month FROM `proj.ds.active_history`"
        job.result.assert_called_once_with(timeout=5)

    def test_append_uses_parameters(self):
        client = MagicMock()
        client.query.return_value.num_dml_affected_rows = 1
        gateway = BigQueryGateway(client, "proj", "ds")

        row = tables.ACTIVE_HISTORY.to_row({"store_id": "S1", "active_month": "06/2024"})
        assert gateway.append_row(tables.ACTIVE_HISTORY, row) == 1

        sql = client.query.call_args.args[0]
        assert sql.startswith("INSERT INTO `proj.ds.active_history` (store_id, active_month)")
        params = client.query.call_args.kwargs["job_config"].query_parameters
        assert [(p.name, p.value) for p in params] == [("store_id", "S1"), ("active_month", "06/2024")]

    def test_google_error_translated(self):
        client = MagicMock()
        client.query.side_effect = BadRequest("syntax error")
        gateway = BigQueryGateway(client, "proj", "ds")
        with pytest.raises(GatewayError):
            gateway.read_range(tables.STORE_INFO)


# ---------------------------------------------------------------------------
# SQL mirror
# ---------------------------------------------------------------------------

class TestSqlGateway:
    def test_read_in_insertion_order(self, session_factory):
        rows = SqlGateway(session_factory).read_range(tables.STORE_INFO)
        assert [r[tables.STORE_INFO.position("store_id")] for r in rows] == ["S1", "S2", "S3", "S4", "S5"]
        assert all(len(r) == tables.STORE_INFO.width for r in rows)

    def test_append(self, session_factory):
        gateway = SqlGateway(session_factory)
        row = tables.ACTIVE_HISTORY.to_row({"store_id": "S9", "active_month": "08/2024"})
        assert gateway.append_row(tables.ACTIVE_HISTORY, row) == 1
        assert gateway.read_range(tables.ACTIVE_HISTORY)[-1] == ["S9", "08/2024"]


class TestBuildGateway:
    def test_sql_backend(self):
        assert build_gateway(Settings(DATA_BACKEND="sql")).backend == "sql"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_gateway(Settings(DATA_BACKEND="excel"))


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

def blocking(gateway, slow_table):
    """Make reads of `slow_table` block until `gateway.release` is set."""
    gateway.release = threading.Event()
    read = gateway.read_range

    def read_range(table):
        if table.name == slow_table:
            gateway.release.wait(timeout=5)
        return read(table)

    gateway.read_range = read_range
    return gateway


class TestOutreachRepository:
    def test_results_in_argument_order(self, memory_repo):
        stores, auth = memory_repo.load(tables.STORE_INFO, tables.DECENTRALIZATION)
        assert stores[0].store_id == "S1"
        assert auth[0].pic_code == "alice"

    def test_blank_rows_skipped(self, make_gateway):
        gateway = make_gateway(rows={tables.ACTIVE_HISTORY.name: [["S1", "06/2024"], ["", ""], []]})
        repo = OutreachRepository(gateway)
        try:
            assert len(repo.load_one(tables.ACTIVE_HISTORY)) == 1
        finally:
            repo.close()

    def test_timeout(self, make_gateway):
        gateway = blocking(make_gateway(), tables.STORE_INFO.name)
        repo = OutreachRepository(gateway, timeout=0.05)
        try:
            with pytest.raises(GatewayTimeoutError) as exc:
                repo.load(tables.DECENTRALIZATION, tables.STORE_INFO)
            assert exc.value.details == {"table": tables.STORE_INFO.name}
        finally:
            gateway.release.set()
            repo.close()

    def test_any_failure_fails_the_load(self, make_gateway):
        gateway = blocking(make_gateway(), tables.STORE_INFO.name)
        gateway.failures[tables.DECENTRALIZATION.name] = GatewayUnavailableError("reset")
        repo = OutreachRepository(gateway, timeout=5)
        try:
            with pytest.raises(GatewayUnavailableError):
                repo.load(tables.DECENTRALIZATION, tables.STORE_INFO)
        finally:
            gateway.release.set()
            repo.close()

    def test_append_returns_gateway_count(self, make_gateway):
        gateway = make_gateway(appended_count=1)
        repo = OutreachRepository(gateway)
        try:
            assert repo.append(tables.ACTIVE_HISTORY, ["S1", "06/2024"]) == 1
            assert gateway.appended == [(tables.ACTIVE_HISTORY.name, ["S1", "06/2024"])]
        finally:
            repo.close()

    def test_backend(self, memory_repo):
        assert memory_repo.backend == "memory"
