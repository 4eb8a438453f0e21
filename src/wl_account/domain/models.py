"""Domain models for wl_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    """Directory entry. No balance field; balance is always folded from entries."""

    id: str
    display_name: str
    created_at: datetime | None = None
