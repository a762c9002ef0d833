from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Authentication(Base):
    """Rep accounts: login email, status and manual-login password."""

    __tablename__ = "authentication"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    full_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False, index=True)
    display_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    team: Mapped[str | None] = mapped_column(String(64), nullable=True)
    # "Active" enables login
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    password: Mapped[str | None] = mapped_column(String(128), nullable=True)


class Decentralization(Base):
    """Role, region and grouping keys per PIC."""

    __tablename__ = "decentralization"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    pic_code: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    subteam: Mapped[str | None] = mapped_column(String(128), nullable=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)
    region: Mapped[str | None] = mapped_column(String(32), nullable=True)
    team: Mapped[str | None] = mapped_column(String(32), nullable=True)
    concat_key: Mapped[str | None] = mapped_column(String(256), nullable=True)
