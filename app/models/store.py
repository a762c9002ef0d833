from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class StoreInfo(Base):
    __tablename__ = "store_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    store_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    buyer_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    current_pic: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    full_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    # DD/MM/YYYY or YYYY-MM-DD, kept as entered
    last_order_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    churn_status_this_month: Mapped[str | None] = mapped_column(String(64), nullable=True)


class ChurnHistory(Base):
    __tablename__ = "churn_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    # MM/YYYY
    churn_month: Mapped[str | None] = mapped_column(String(16), nullable=True)
    type_of_churn: Mapped[str | None] = mapped_column(String(128), nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)


class ActiveHistory(Base):
    __tablename__ = "active_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    store_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    active_month: Mapped[str | None] = mapped_column(String(16), nullable=True)
