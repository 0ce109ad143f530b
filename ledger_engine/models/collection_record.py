"""
Collection record model.

The books are persisted as seven named collections of JSON
documents. Saving a collection replaces every record in it,
so the table never holds a partially updated collection.
"""

from datetime import datetime

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ledger_engine.models.base import Base


class CollectionRecord(Base):
    """One document in a named collection, kept in list order."""

    __tablename__ = "collection_records"

    id: Mapped[int] = mapped_column(primary_key=True)
    collection: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<CollectionRecord {self.collection}[{self.position}]>"
