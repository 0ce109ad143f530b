"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from ledger_engine.models.base import Base
from ledger_engine.models.enums import (
    VoucherType,
    RegistrationType,
    SystemLedger,
    BalanceSide,
    GstReturn,
    HsnStatus,
    UploadStatus,
    Collection,
)
from ledger_engine.models.collection_record import CollectionRecord

__all__ = [
    "Base",
    "VoucherType",
    "RegistrationType",
    "SystemLedger",
    "BalanceSide",
    "GstReturn",
    "HsnStatus",
    "UploadStatus",
    "Collection",
    "CollectionRecord",
]
