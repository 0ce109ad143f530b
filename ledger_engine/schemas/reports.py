"""
Pydantic schemas for derived reports.

Reports are never stored. Every one of these is rebuilt from
the full voucher list on each request.
"""

from decimal import Decimal

from pydantic import Field

from ledger_engine.models.enums import GstReturn
from ledger_engine.schemas.common import CamelModel
from ledger_engine.schemas.voucher import ZERO


class Impact(CamelModel):
    """Debit/credit effect of one voucher on one ledger (or group)."""
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    particulars: str = ""

    @property
    def is_zero(self) -> bool:
        return self.debit == 0 and self.credit == 0


# --- Day Book ---

class DayBookRow(CamelModel):
    id: str
    date: str
    voucher_type: str
    party: str
    amount: Decimal


class DayBook(CamelModel):
    start_date: str | None = None
    end_date: str | None = None
    rows: list[DayBookRow]


# --- Ledger Statement ---

class StatementRow(CamelModel):
    id: str
    date: str
    particulars: str
    voucher_type: str
    debit: Decimal
    credit: Decimal
    # None for the "All Ledgers" listing, which has no running balance
    balance: Decimal | None = None
    balance_display: str = ""


class LedgerStatement(CamelModel):
    selection: str
    is_group: bool = False
    is_all_ledgers: bool = False
    opening_balance: Decimal = ZERO
    closing_balance: Decimal = ZERO
    opening_display: str = ""
    closing_display: str = ""
    rows: list[StatementRow] = Field(default_factory=list)


# --- Trial Balance ---

class TrialBalanceRow(CamelModel):
    ledger: str
    debit: Decimal
    credit: Decimal


class TrialBalance(CamelModel):
    rows: list[TrialBalanceRow]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool


# --- Stock Summary ---

class StockSummaryRow(CamelModel):
    name: str
    opening: Decimal
    inward: Decimal
    outward: Decimal
    closing: Decimal


# --- GST Returns ---

class GstInvoiceRow(CamelModel):
    voucher_id: str
    invoice_no: str
    date: str
    party: str
    gstin: str | None = None
    taxable_value: Decimal
    total_tax: Decimal
    invoice_value: Decimal


class Gstr1Report(CamelModel):
    """Outward supplies split by recipient registration."""
    # to_camel would give b2B and b2C
    b2b: list[GstInvoiceRow] = Field(alias="b2b")
    b2c: list[GstInvoiceRow] = Field(alias="b2c")


class Gstr2Report(CamelModel):
    """Inward supplies from registered suppliers."""
    b2b_purchases: list[GstInvoiceRow] = Field(alias="b2bPurchases")


class TaxHeads(CamelModel):
    igst: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO


class Gstr3bReport(CamelModel):
    outward_taxable_value: Decimal
    outward_tax: TaxHeads
    eligible_itc: TaxHeads
    # Outward tax minus ITC; negative when credit exceeds liability
    net_tax: TaxHeads
    # net_tax floored at zero; excess credit is not carried forward
    tax_payable: TaxHeads


class GstReturnReport(CamelModel):
    form: GstReturn
    implemented: bool = True
    message: str = ""
    gstr1: Gstr1Report | None = None
    gstr2: Gstr2Report | None = None
    gstr3b: Gstr3bReport | None = Field(default=None, alias="gstr3b")


# --- Dashboard ---

class MonthlyPoint(CamelModel):
    month: str
    sales: Decimal
    purchases: Decimal


class DashboardSummary(CamelModel):
    company_name: str
    total_sales: Decimal
    total_purchases: Decimal
    total_receivables: Decimal
    total_payables: Decimal
    monthly: list[MonthlyPoint]
