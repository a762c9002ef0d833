from __future__ import annotations

import logging

from app.core.config import Settings
from app.gateway.base import TabularGateway

logger = logging.getLogger(__name__)


def build_gateway(settings: Settings) -> TabularGateway:
    """Construct the backend named by DATA_BACKEND."""
    backend = settings.DATA_BACKEND.lower()
    if backend == "sql":
        from app.db.base import SessionLocal
        from app.gateway.sql import SqlGateway

        logger.info("Using SQL backend")
        return SqlGateway(SessionLocal)
    if backend == "sheets":
        from app.gateway.sheets import SheetsGateway

        return SheetsGateway.from_service_account_file(
            settings.GOOGLE_CREDENTIALS_FILE,
            settings.SPREADSHEET_ID,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )
    if backend == "bigquery":
        from app.gateway.bigquery import BigQueryGateway

        return BigQueryGateway.from_service_account_file(
            settings.GOOGLE_CREDENTIALS_FILE or None,
            settings.BIGQUERY_PROJECT,
            settings.BIGQUERY_DATASET,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )
    raise ValueError(f"Unknown DATA_BACKEND {settings.DATA_BACKEND!r}")
