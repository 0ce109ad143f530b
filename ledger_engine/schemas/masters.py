"""
Pydantic schemas for master data (the entity registry).

Masters are reference data: ledgers, ledger groups, units,
stock groups, stock items and the company profile. Names are
unique under case-insensitive comparison within their kind.
"""

from decimal import Decimal

from pydantic import Field

from ledger_engine.models.enums import RegistrationType
from ledger_engine.schemas.common import CamelModel

# Root of the ledger group tree. It is never stored as a group.
PRIMARY_GROUP = "Primary"


class CompanyDetails(CamelModel):
    name: str = "AI-Accounting"
    address: str = ""
    gstin: str = ""
    state: str = ""


class LedgerGroupMaster(CamelModel):
    """A node in the ledger group tree."""
    name: str = Field(min_length=1, max_length=100)
    under: str = PRIMARY_GROUP


class Ledger(CamelModel):
    """A named account: party, bank, cash, expense, tax head, ..."""
    name: str = Field(min_length=1, max_length=100)
    group: str = Field(min_length=1)
    gstin: str | None = None
    registration_type: RegistrationType | None = None
    state: str | None = None


class Unit(CamelModel):
    name: str = Field(min_length=1, max_length=50)


class StockGroup(CamelModel):
    name: str = Field(min_length=1, max_length=100)


class StockItem(CamelModel):
    """An inventory item; quantity is the opening stock."""
    name: str = Field(min_length=1, max_length=200)
    group: str
    unit: str
    hsn: str | None = None
    gst_rate: Decimal | None = Field(default=None, ge=0, le=100)
    quantity: Decimal | None = Field(default=None, ge=0)

