"""
Persistence service — named JSON collections in the database.

Each collection is a list of documents. save() overwrites the
whole collection; load() returns it in the order it was saved.
"""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ledger_engine.models.collection_record import CollectionRecord
from ledger_engine.models.enums import Collection


def _collection(name) -> Collection:
    try:
        return Collection(name)
    except ValueError:
        raise ValueError(f"Unknown collection '{name}'") from None


class CollectionStore:

    def __init__(self, db: Session):
        self.db = db

    def save(self, collection, records: list[dict]) -> None:
        """Replace every record of the collection with `records`."""
        name = _collection(collection).value
        self.db.execute(
            delete(CollectionRecord).where(CollectionRecord.collection == name)
        )
        self.db.add_all([
            CollectionRecord(collection=name, position=position, payload=payload)
            for position, payload in enumerate(records)
        ])
        self.db.flush()

    def load(self, collection) -> list[dict]:
        name = _collection(collection).value
        rows = self.db.execute(
            select(CollectionRecord)
            .where(CollectionRecord.collection == name)
            .order_by(CollectionRecord.position)
        ).scalars().all()
        return [row.payload for row in rows]

    def is_empty(self) -> bool:
        return self.db.execute(select(CollectionRecord.id).limit(1)).first() is None
