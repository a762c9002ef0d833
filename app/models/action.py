from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class _ActionColumns:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    store_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    contact_date: Mapped[str] = mapped_column(String(32), nullable=False)
    pic: Mapped[str | None] = mapped_column(String(128), nullable=True)
    subteam: Mapped[str | None] = mapped_column(String(128), nullable=True)
    type_of_contact: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(256), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    link_hubspot: Mapped[str | None] = mapped_column(String(512), nullable=True)


class ChurnAction(_ActionColumns, Base):
    """Append-only log of reactivation contacts for churned stores."""

    __tablename__ = "churn_database"

    why_not_reawaken: Mapped[str | None] = mapped_column(Text, nullable=True)
    churn_month: Mapped[str | None] = mapped_column(String(16), nullable=True)


class ActiveAction(_ActionColumns, Base):
    """Append-only log of engagement contacts for active stores."""

    __tablename__ = "active_database"

    active_month: Mapped[str | None] = mapped_column(String(16), nullable=True)
