"""
Repository over a tabular gateway.

Public API
----------
load(*tables)              -> list[list[record]]   (parallel, fail-fast)
append(table, row)         -> int                   (rows appended)

Every gateway call is bounded by `timeout`; independent reads run on the
thread pool at the same time. If any read fails or times out the whole load
fails and the remaining reads are cancelled.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable

from app.core.errors import GatewayTimeoutError
from app.gateway.base import TabularGateway
from app.gateway.records import RECORD_FACTORIES
from app.gateway.tables import TableSpec

logger = logging.getLogger(__name__)


class OutreachRepository:
    def __init__(self, gateway: TabularGateway, timeout: float = 30.0, max_workers: int = 8):
        self.gateway = gateway
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="gateway")

    @property
    def backend(self) -> str:
        return self.gateway.backend

    def _read(self, table: TableSpec) -> list[Any]:
        factory = RECORD_FACTORIES[table.name]
        return [factory(row) for row in self.gateway.read_range(table) if any(row)]

    def _wait(self, future: Future, table: TableSpec) -> Any:
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as exc:
            logger.error("Gateway call on %s exceeded %.1fs", table.name, self.timeout)
            raise GatewayTimeoutError(
                f"{table.name} did not respond within {self.timeout:g}s", table=table.name
            ) from exc

    def _run_all(self, calls: list[tuple[TableSpec, Callable[[], Any]]]) -> list[Any]:
        futures = [(table, self._executor.submit(call)) for table, call in calls]
        results = []
        try:
            for table, future in futures:
                results.append(self._wait(future, table))
        except BaseException:
            for _, future in futures:
                future.cancel()
            raise
        return results

    def load(self, *tables: TableSpec) -> list[list[Any]]:
        """Read and type the given tables concurrently, results in argument order."""
        return self._run_all([(table, lambda t=table: self._read(t)) for table in tables])

    def load_one(self, table: TableSpec) -> list[Any]:
        return self.load(table)[0]

    def append(self, table: TableSpec, row: list[str]) -> int:
        [appended] = self._run_all([(table, lambda: self.gateway.append_row(table, row))])
        return appended

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
