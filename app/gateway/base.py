"""
Tabular data gateway contract.

A gateway reads the data rows of a logical table (header excluded, cells as
strings in sheet column order) and appends one row, reporting how many rows
the backing store says it wrote.
"""
from __future__ import annotations

import errno
import logging
import socket
from contextlib import contextmanager
from typing import Iterator, Protocol

from app.core.errors import GatewayError, GatewayTimeoutError, GatewayUnavailableError, OutreachException
from app.gateway.tables import TableSpec

logger = logging.getLogger(__name__)


class TabularGateway(Protocol):
    backend: str

    def read_range(self, table: TableSpec) -> list[list[str]]: ...

    def append_row(self, table: TableSpec, row: list[str]) -> int: ...


def _is_connection_reset(exc: BaseException) -> bool:
    if isinstance(exc, ConnectionResetError):
        return True
    return isinstance(exc, OSError) and exc.errno == errno.ECONNRESET


@contextmanager
def translate_errors(table: TableSpec, *library_errors: type[BaseException]) -> Iterator[None]:
    """Map transport and client-library failures onto the Gateway* errors."""
    try:
        yield
    except OutreachException:
        raise
    except (TimeoutError, socket.timeout) as exc:
        logger.error("Timed out reading %s: %s", table.name, exc)
        raise GatewayTimeoutError(f"{table.name} timed out: {exc}", table=table.name) from exc
    except OSError as exc:
        logger.error("Connection error on %s: %s", table.name, exc)
        if _is_connection_reset(exc):
            raise GatewayUnavailableError(
                f"Connection to {table.name} was reset: {exc}", table=table.name
            ) from exc
        raise GatewayError(f"{table.name} is unreachable: {exc}", table=table.name) from exc
    except library_errors as exc:
        logger.error("Data source error on %s: %s", table.name, exc)
        raise GatewayError(f"{table.name} failed: {exc}", table=table.name) from exc


def stringify(value) -> str:
    """Render a warehouse cell the way a sheet would show it."""
    if value is None:
        return ""
    if hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d")
    return str(value)
