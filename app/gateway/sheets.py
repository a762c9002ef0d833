"""
Google Sheets backend (Sheets API v4, service-account credentials).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import google_auth_httplib2
import httplib2
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.gateway.base import translate_errors
from app.gateway.tables import TableSpec

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class SheetsGateway:
    backend = "sheets"

    def __init__(
        self,
        spreadsheet_id: str,
        credentials: Any,
        timeout: float = 30.0,
        service_factory: Optional[Callable[[], Any]] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials = credentials
        self.timeout = timeout
        self._service_factory = service_factory or self._build_service

    @classmethod
    def from_service_account_file(cls, path: str, spreadsheet_id: str, timeout: float = 30.0) -> "SheetsGateway":
        credentials = service_account.Credentials.from_service_account_file(path, scopes=SCOPES)
        logger.info("Using Google Sheets backend for spreadsheet %s", spreadsheet_id)
        return cls(spreadsheet_id, credentials, timeout=timeout)

    def _build_service(self):
        # httplib2 connections are not thread-safe: one client per call.
        http = google_auth_httplib2.AuthorizedHttp(
            self.credentials, http=httplib2.Http(timeout=self.timeout)
        )
        return build("sheets", "v4", http=http, cache_discovery=False)

    def read_range(self, table: TableSpec) -> list[list[str]]:
        with translate_errors(table, HttpError, httplib2.HttpLib2Error):
            response = (
                self._service_factory()
                .spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=table.a1_range)
                .execute()
            )
        values = response.get("values", [])
        return values[1:]

    def append_row(self, table: TableSpec, row: list[str]) -> int:
        with translate_errors(table, HttpError, httplib2.HttpLib2Error):
            response = (
                self._service_factory()
                .spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=table.a1_range,
                    valueInputOption="RAW",
                    body={"values": [row]},
                )
                .execute()
            )
        updates = response.get("updates") or {}
        return int(updates.get("updatedRows") or 0)
