from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class DropdownChurnAction(Base):
    __tablename__ = "dropdown_churn_action"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    type_of_churn: Mapped[str | None] = mapped_column(String(128), nullable=True)
    churn_action: Mapped[str | None] = mapped_column(String(256), nullable=True)


class DropdownActiveAction(Base):
    __tablename__ = "dropdown_active_action"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    action: Mapped[str | None] = mapped_column(String(256), nullable=True)


class DropdownWhy(Base):
    __tablename__ = "dropdown_why"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    type_of_churn: Mapped[str | None] = mapped_column(String(128), nullable=True)
    why_not_reawaken: Mapped[str | None] = mapped_column(String(256), nullable=True)
