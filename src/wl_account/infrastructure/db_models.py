"""SQLAlchemy ORM model for the accounts table.

Table is created by Alembic migration: alembic/versions/001_create_accounts.py
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.wl_common.database import Base


class AccountORM(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    # NOTE: No balance column — balance is folded from ledger_entries
