"""
Pydantic schemas for vouchers.

A voucher is a tagged union over its ``type`` field. Pydantic
picks the right variant from the discriminator, so callers never
inspect the type string to decide which fields exist.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import AfterValidator, Field, TypeAdapter

from ledger_engine.schemas.common import CamelModel

ZERO = Decimal("0")

# ISO dates compare lexicographically in chronological order,
# which the date-window filters rely on.
ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


def _calendar_date(value: str) -> str:
    """Reject well-formed strings such as 2024-02-30 that name no real day."""
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{value} is not a calendar date") from None
    return value


VoucherDate = Annotated[str, Field(pattern=ISO_DATE), AfterValidator(_calendar_date)]


class VoucherItem(CamelModel):
    """One stock line on a sales or purchase invoice."""
    name: str
    qty: Decimal = Decimal("1")
    rate: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    total_amount: Decimal = ZERO


class SalesPurchaseVoucher(CamelModel):
    id: str = ""
    type: Literal["Purchase", "Sales"]
    date: VoucherDate
    is_inter_state: bool = False
    invoice_no: str = ""
    due_date: str | None = None
    party: str
    items: list[VoucherItem] = Field(default_factory=list)
    total_taxable_amount: Decimal = ZERO
    total_cgst: Decimal = ZERO
    total_sgst: Decimal = ZERO
    total_igst: Decimal = ZERO
    total: Decimal = ZERO
    narration: str | None = None


class PaymentReceiptVoucher(CamelModel):
    id: str = ""
    type: Literal["Payment", "Receipt"]
    date: VoucherDate
    account: str  # Bank or Cash ledger
    party: str
    amount: Decimal
    narration: str | None = None


class ContraVoucher(CamelModel):
    """Transfer between two cash/bank ledgers."""
    id: str = ""
    type: Literal["Contra"]
    date: VoucherDate
    from_account: str
    to_account: str
    amount: Decimal
    narration: str | None = None


class JournalEntry(CamelModel):
    ledger: str = ""
    debit: Decimal = ZERO
    credit: Decimal = ZERO


class JournalVoucher(CamelModel):
    id: str = ""
    type: Literal["Journal"]
    date: VoucherDate
    entries: list[JournalEntry] = Field(default_factory=list)
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    narration: str | None = None

    @property
    def is_balanced(self) -> bool:
        return self.total_debit == self.total_credit and self.total_debit > 0


Voucher = Annotated[
    Union[SalesPurchaseVoucher, PaymentReceiptVoucher, ContraVoucher, JournalVoucher],
    Field(discriminator="type"),
]

VoucherAdapter = TypeAdapter(Voucher)
VoucherListAdapter = TypeAdapter(list[Voucher])


def voucher_amount(voucher) -> Decimal:
    """Headline amount of a voucher as shown in the day book."""
    if isinstance(voucher, SalesPurchaseVoucher):
        return voucher.total
    if isinstance(voucher, (PaymentReceiptVoucher, ContraVoucher)):
        return voucher.amount
    return ZERO


def voucher_party(voucher) -> str:
    if isinstance(voucher, (SalesPurchaseVoucher, PaymentReceiptVoucher)):
        return voucher.party
    return "N/A"


# --- Request Schemas ---

class PartyChange(CamelModel):
    """Request to move a persisted sales/purchase voucher to another party."""
    party: str = Field(min_length=1)
