"""
Ledger service — the double-entry impact resolver.

Vouchers are stored as business documents, not as ledger
entries. This service derives, for any voucher and any ledger,
the debit and credit that voucher posts to that ledger:

    Sales     Dr party (total)      Cr Sales, CGST+SGST or IGST
    Purchase  Dr Purchases, taxes   Cr party (total)
    Receipt   Dr account            Cr party
    Payment   Dr party              Cr account
    Contra    Dr to_account         Cr from_account
    Journal   each entry's own debit/credit

impact() is a pure function of the voucher, so every report can
recompute balances from scratch and get the same answer.
"""

from decimal import Decimal

from ledger_engine.models.enums import SystemLedger, VoucherType
from ledger_engine.schemas.reports import Impact
from ledger_engine.schemas.voucher import (
    ZERO,
    ContraVoucher,
    JournalVoucher,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
)

INTERNAL_TRANSFER = "Journal (Internal Transfer)"


def _trade_impact(voucher: SalesPurchaseVoucher, ledger_name: str) -> Impact:
    if voucher.type == VoucherType.SALES:
        contra_ledger = SystemLedger.SALES
    else:
        contra_ledger = SystemLedger.PURCHASES

    intra_state = not voucher.is_inter_state
    on_party = False
    if voucher.party == ledger_name:
        amount = voucher.total
        on_party = True
    elif ledger_name == contra_ledger:
        amount = voucher.total_taxable_amount
    elif ledger_name == SystemLedger.CGST and intra_state:
        amount = voucher.total_cgst
    elif ledger_name == SystemLedger.SGST and intra_state:
        amount = voucher.total_sgst
    elif ledger_name == SystemLedger.IGST and voucher.is_inter_state:
        amount = voucher.total_igst
    else:
        return Impact()

    particulars = contra_ledger.value if on_party else voucher.party

    # A sale debits the party and credits everything else;
    # a purchase is the mirror image.
    party_is_debited = voucher.type == VoucherType.SALES
    if on_party == party_is_debited:
        return Impact(debit=amount, particulars=particulars)
    return Impact(credit=amount, particulars=particulars)


def _payment_receipt_impact(voucher: PaymentReceiptVoucher, ledger_name: str) -> Impact:
    debit = credit = ZERO
    particulars = ""
    receipt = voucher.type == VoucherType.RECEIPT
    # Both checks run so a voucher whose party and account are the
    # same ledger posts both sides to it.
    if voucher.party == ledger_name:
        if receipt:
            credit = voucher.amount
        else:
            debit = voucher.amount
        particulars = voucher.account
    if voucher.account == ledger_name:
        if receipt:
            debit = voucher.amount
        else:
            credit = voucher.amount
        particulars = voucher.party
    return Impact(debit=debit, credit=credit, particulars=particulars)


def _contra_impact(voucher: ContraVoucher, ledger_name: str) -> Impact:
    debit = credit = ZERO
    particulars = ""
    if voucher.to_account == ledger_name:
        debit = voucher.amount
        particulars = voucher.from_account
    if voucher.from_account == ledger_name:
        credit = voucher.amount
        particulars = voucher.to_account
    return Impact(debit=debit, credit=credit, particulars=particulars)


def _journal_impact(voucher: JournalVoucher, ledger_name: str) -> Impact:
    entry = next((e for e in voucher.entries if e.ledger == ledger_name), None)
    if entry is None:
        return Impact()
    # Only the first counter-entry is named, even when there are more.
    opposite = next((e for e in voucher.entries if e.ledger != ledger_name), None)
    particulars = opposite.ledger if opposite is not None else "Journal"
    return Impact(debit=entry.debit, credit=entry.credit, particulars=particulars)


def impact(voucher, ledger_name: str) -> Impact:
    """
    Debit/credit posted by one voucher to one ledger, with the
    counter-party label shown on a ledger statement.

    Ledgers the voucher does not touch get a zero impact.
    """
    if isinstance(voucher, SalesPurchaseVoucher):
        return _trade_impact(voucher, ledger_name)
    if isinstance(voucher, PaymentReceiptVoucher):
        return _payment_receipt_impact(voucher, ledger_name)
    if isinstance(voucher, ContraVoucher):
        return _contra_impact(voucher, ledger_name)
    if isinstance(voucher, JournalVoucher):
        return _journal_impact(voucher, ledger_name)
    raise TypeError(f"Unsupported voucher type: {type(voucher).__name__}")


def signed(result: Impact) -> Decimal:
    """Debit-positive net of an impact."""
    return result.debit - result.credit


class LedgerService:
    """
    Group-aware impact resolution.

    A report can be run on a single ledger or on a ledger group;
    a group stands for the ledgers filed directly under it.
    """

    def __init__(self, registry):
        self.registry = registry

    def resolve_selection(self, selection: str) -> tuple[list[str], bool]:
        """Return (ledger names, is_group) for a report selection."""
        if self.registry.is_group(selection):
            return self.registry.ledgers_in_group(selection), True
        return [selection], False

    def group_impact(
        self,
        voucher,
        ledger_names: list[str],
        is_group: bool = False,
    ) -> Impact:
        """
        Sum the voucher's impact over a set of ledgers.

        The first non-empty particulars wins, in registry order.
        Journals are relabelled with the ledgers they touch outside
        the set, since the single counter-entry picked by impact()
        may itself be inside it.
        """
        debit = credit = ZERO
        particulars = ""
        for name in ledger_names:
            result = impact(voucher, name)
            debit += result.debit
            credit += result.credit
            if result.particulars and not particulars:
                particulars = result.particulars

        if isinstance(voucher, JournalVoucher) and (debit > 0 or credit > 0):
            outside = [
                e.ledger for e in voucher.entries
                if e.ledger and e.ledger not in ledger_names
            ]
            if outside:
                particulars = ", ".join(outside)
            elif is_group:
                particulars = INTERNAL_TRANSFER
            else:
                particulars = voucher.narration or "Journal"

        return Impact(debit=debit, credit=credit, particulars=particulars)
