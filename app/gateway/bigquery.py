"""
BigQuery warehouse backend.

Tables mirror the sheet tabs with one STRING column per named field
(dates may be DATE columns; they come back as `YYYY-MM-DD`).
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from google.api_core.exceptions import GoogleAPIError
from google.cloud import bigquery
from google.oauth2 import service_account

from app.gateway.base import stringify, translate_errors
from app.gateway.tables import TableSpec

logger = logging.getLogger(__name__)


class BigQueryGateway:
    backend = "bigquery"

    def __init__(self, client: Any, project_id: str, dataset_id: str, timeout: float = 30.0):
        self.client = client
        self.project_id = project_id
        self.dataset_id = dataset_id
        self.timeout = timeout

    @classmethod
    def from_service_account_file(
        cls, path: Optional[str], project_id: str, dataset_id: str, timeout: float = 30.0
    ) -> "BigQueryGateway":
        if path:
            credentials = service_account.Credentials.from_service_account_file(path)
            client = bigquery.Client(project=project_id, credentials=credentials)
        else:
            client = bigquery.Client(project=project_id)
        logger.info("Using BigQuery backend %s.%s", project_id, dataset_id)
        return cls(client, project_id, dataset_id, timeout=timeout)

    def _table_ref(self, table: TableSpec) -> str:
        return f"`{self.project_id}.{self.dataset_id}.{table.warehouse_table}`"

    def query(self, sql: str, params: Optional[list] = None):
        job_config = bigquery.QueryJobConfig(query_parameters=params or [])
        job = self.client.query(sql, job_config=job_config)
        return job, job.result(timeout=self.timeout)

    def read_range(self, table: TableSpec) -> list[list[str]]:
        columns = ", ".join(table.field_names)
        sql = f"SELECT {columns} FROM {self._table_ref(table)}"
        with translate_errors(table, GoogleAPIError):
            _, result = self.query(sql)
            rows = []
            for record in result:
                values = {name: stringify(record[name]) for name in table.field_names}
                rows.append(table.to_row(values))
        return rows

    def append_row(self, table: TableSpec, row: list[str]) -> int:
        values = table.to_values(row)
        columns = ", ".join(values)
        placeholders = ", ".join(f"@{name}" for name in values)
        sql = f"INSERT INTO {self._table_ref(table)} ({columns}) VALUES ({placeholders})"
        params = [
            bigquery.ScalarQueryParameter(name, "STRING", value)
            for name, value in values.items()
        ]
        with translate_errors(table, GoogleAPIError):
            job, _ = self.query(sql, params)
        return int(job.num_dml_affected_rows or 0)
