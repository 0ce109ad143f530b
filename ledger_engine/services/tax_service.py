"""
Tax service — GST computation for sales and purchase lines.

Intra-state supply is taxed as CGST + SGST in equal halves.
Inter-state supply is taxed as IGST only. Whether a voucher is
inter-state depends on the party ledger's state compared with
the company's state.

Every derived figure on a sales/purchase voucher (item splits
and the five voucher totals) is produced here, so recomputing
an unchanged voucher always yields the same numbers.
"""

from decimal import Decimal

from ledger_engine.schemas.common import CamelModel
from ledger_engine.schemas.masters import Ledger
from ledger_engine.schemas.voucher import ZERO, SalesPurchaseVoucher, VoucherItem

HUNDRED = Decimal("100")
TWO = Decimal("2")


class LineTax(CamelModel):
    taxable_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    total_amount: Decimal


def compute_line_tax(
    quantity: Decimal,
    rate: Decimal,
    gst_rate: Decimal,
    is_inter_state: bool,
) -> LineTax:
    """
    Compute the taxable amount and GST split for one line.

    taxable = quantity * rate
    tax     = taxable * gst_rate / 100
    """
    taxable = Decimal(quantity) * Decimal(rate)
    tax = taxable * Decimal(gst_rate) / HUNDRED

    if is_inter_state:
        cgst = sgst = ZERO
        igst = tax
    else:
        cgst = sgst = tax / TWO
        igst = ZERO

    return LineTax(
        taxable_amount=taxable,
        cgst_amount=cgst,
        sgst_amount=sgst,
        igst_amount=igst,
        total_amount=taxable + tax,
    )


def is_inter_state(party: Ledger | None, company_state: str | None) -> bool:
    """
    Decide whether a supply to/from this party crosses state lines.

    Missing state data on either side means intra-state.
    """
    if party is None or not party.state or not company_state:
        return False
    return party.state.strip().lower() != company_state.strip().lower()


def price_item(item: VoucherItem, gst_rate: Decimal, inter_state: bool) -> VoucherItem:
    """Return a copy of the item with its tax fields recomputed."""
    line = compute_line_tax(item.qty, item.rate, gst_rate, inter_state)
    return item.model_copy(update=line.model_dump())


def apply_totals(voucher: SalesPurchaseVoucher) -> SalesPurchaseVoucher:
    """Return a copy of the voucher with totals summed from its items."""
    items = voucher.items
    taxable = sum((i.taxable_amount for i in items), ZERO)
    cgst = sum((i.cgst_amount for i in items), ZERO)
    sgst = sum((i.sgst_amount for i in items), ZERO)
    igst = sum((i.igst_amount for i in items), ZERO)
    return voucher.model_copy(update={
        "total_taxable_amount": taxable,
        "total_cgst": cgst,
        "total_sgst": sgst,
        "total_igst": igst,
        "total": taxable + cgst + sgst + igst,
    })


class TaxService:
    """
    Tax computation that needs the registry: item GST rates and
    party states.
    """

    def __init__(self, registry):
        self.registry = registry

    def resolve_gst_rate(self, item_name: str, default: Decimal = ZERO) -> Decimal:
        """
        GST rate of a stock item, looked up case-insensitively.

        Manual edits pass default=0; invoice extraction passes the
        configured import rate, so an uncatalogued line is still taxed.
        """
        stock_item = self.registry.find_stock_item(item_name)
        if stock_item is None or stock_item.gst_rate is None:
            return Decimal(default)
        return stock_item.gst_rate

    def party_is_inter_state(self, party_name: str) -> bool:
        party = self.registry.find_ledger(party_name)
        return is_inter_state(party, self.registry.company.state)

    def reprice(
        self,
        voucher: SalesPurchaseVoucher,
        inter_state: bool | None = None,
        default_rate: Decimal = ZERO,
    ) -> SalesPurchaseVoucher:
        """
        Recompute every item and the voucher totals.

        When inter_state is None the voucher's own flag is kept.
        """
        if inter_state is None:
            inter_state = voucher.is_inter_state
        items = [
            price_item(item, self.resolve_gst_rate(item.name, default_rate), inter_state)
            for item in voucher.items
        ]
        updated = voucher.model_copy(update={"items": items, "is_inter_state": inter_state})
        return apply_totals(updated)
