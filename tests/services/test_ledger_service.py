"""
Tests for the ledger impact resolver.

Tests cover:
- Debit/credit rules for each voucher type
- Zero impact on ledgers a voucher does not touch
- Journal particulars
- Group selection and group relabelling of journals
"""

from decimal import Decimal

import pytest

from ledger_engine.schemas.masters import Ledger, LedgerGroupMaster
from ledger_engine.schemas.voucher import (
    ContraVoucher,
    JournalEntry,
    JournalVoucher,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    VoucherItem,
)
from ledger_engine.services.ledger_service import (
    INTERNAL_TRANSFER,
    LedgerService,
    impact,
    signed,
)
from ledger_engine.services.tax_service import TaxService


def sale(registry, inter_state=False):
    return TaxService(registry).reprice(SalesPurchaseVoucher(
        id="s1", type="Sales", date="2024-06-10", party="Local Customer",
        is_inter_state=inter_state,
        items=[VoucherItem(name="Laptop", qty=Decimal("2"), rate=Decimal("65000"))],
    ))


def purchase(registry):
    return TaxService(registry).reprice(SalesPurchaseVoucher(
        id="p1", type="Purchase", date="2024-06-05", party="Global Tech Supplies",
        is_inter_state=True,
        items=[VoucherItem(name="Laptop", qty=Decimal("5"), rate=Decimal("55000"))],
    ))


def journal(*entries, narration=None):
    return JournalVoucher(
        id="j1", type="Journal", date="2024-06-30", narration=narration,
        entries=[JournalEntry(ledger=l, debit=Decimal(d), credit=Decimal(c)) for l, d, c in entries],
        total_debit=sum(Decimal(d) for _, d, _ in entries),
        total_credit=sum(Decimal(c) for _, _, c in entries),
    )


class TestSalesImpact:

    def test_party_debited_with_total(self, registry):
        result = impact(sale(registry), "Local Customer")

        assert result.debit == Decimal("153400")
        assert result.credit == 0
        assert result.particulars == "Sales"

    def test_sales_ledger_credited_with_taxable_amount(self, registry):
        result = impact(sale(registry), "Sales")

        assert result.credit == Decimal("130000")
        assert result.particulars == "Local Customer"

    def test_intra_state_taxes_credited(self, registry):
        voucher = sale(registry)

        assert impact(voucher, "CGST").credit == Decimal("11700")
        assert impact(voucher, "SGST").credit == Decimal("11700")
        assert impact(voucher, "IGST").is_zero

    def test_inter_state_credits_igst_only(self, registry):
        voucher = sale(registry, inter_state=True)

        assert impact(voucher, "IGST").credit == Decimal("23400")
        assert impact(voucher, "CGST").is_zero


class TestPurchaseImpact:

    def test_party_credited_purchases_debited(self, registry):
        voucher = purchase(registry)

        assert impact(voucher, "Global Tech Supplies").credit == Decimal("324500")
        assert impact(voucher, "Purchases").debit == Decimal("275000")
        assert impact(voucher, "IGST").debit == Decimal("49500")
        assert impact(voucher, "Purchases").particulars == "Global Tech Supplies"


class TestCashVouchers:

    def test_receipt_debits_account_credits_party(self):
        voucher = PaymentReceiptVoucher(
            id="r1", type="Receipt", date="2024-07-01",
            account="HDFC Bank", party="Local Customer", amount=Decimal("100000"),
        )

        assert impact(voucher, "HDFC Bank").debit == Decimal("100000")
        assert impact(voucher, "HDFC Bank").particulars == "Local Customer"
        assert impact(voucher, "Local Customer").credit == Decimal("100000")

    def test_payment_debits_party_credits_account(self):
        voucher = PaymentReceiptVoucher(
            id="p1", type="Payment", date="2024-06-15",
            account="Cash", party="Rent Expense", amount=Decimal("25000"),
        )

        assert impact(voucher, "Rent Expense").debit == Decimal("25000")
        assert impact(voucher, "Cash").credit == Decimal("25000")

    def test_contra_moves_between_accounts(self):
        voucher = ContraVoucher(
            id="c1", type="Contra", date="2024-06-16",
            from_account="Cash", to_account="HDFC Bank", amount=Decimal("400000"),
        )

        assert impact(voucher, "HDFC Bank").debit == Decimal("400000")
        assert impact(voucher, "HDFC Bank").particulars == "Cash"
        assert impact(voucher, "Cash").credit == Decimal("400000")
        assert impact(voucher, "Cash").particulars == "HDFC Bank"


class TestJournalImpact:

    def test_entry_values_used_directly(self):
        voucher = journal(("Rent Expense", 15000, 0), ("Cash", 0, 15000))
        result = impact(voucher, "Cash")

        assert result.credit == Decimal("15000")
        assert result.debit == 0
        assert result.particulars == "Rent Expense"

    def test_only_first_counter_entry_is_named(self):
        voucher = journal(("Rent Expense", 10000, 0), ("Office Supplies", 5000, 0), ("Cash", 0, 15000))

        assert impact(voucher, "Cash").particulars == "Rent Expense"


class TestUntouchedLedger:

    @pytest.mark.parametrize("ledger", ["Owner Capital", "sales", "", "Local customer"])
    def test_untouched_ledger_gets_zero(self, registry, ledger):
        assert impact(sale(registry), ledger).is_zero

    def test_unknown_voucher_type_raises(self):
        with pytest.raises(TypeError):
            impact(object(), "Cash")


class TestGroupImpact:

    def test_group_sums_member_ledgers(self, registry):
        service = LedgerService(registry)
        names, is_group = service.resolve_selection("Duties & Taxes")
        result = service.group_impact(sale(registry), names, is_group)

        assert is_group is True
        assert result.credit == Decimal("23400")
        assert signed(result) == Decimal("-23400")

    def test_single_ledger_selection(self, registry):
        names, is_group = LedgerService(registry).resolve_selection("Cash")

        assert names == ["Cash"]
        assert is_group is False

    def test_journal_inside_group_is_internal_transfer(self, registry):
        service = LedgerService(registry)
        voucher = journal(("Rent Expense", 500, 0), ("Office Supplies", 0, 500))
        names, is_group = service.resolve_selection("Indirect Expenses")
        result = service.group_impact(voucher, names, is_group)

        assert result.is_zero is False
        assert result.particulars == INTERNAL_TRANSFER

    def test_journal_lists_ledgers_outside_group(self, registry):
        service = LedgerService(registry)
        voucher = journal(("Rent Expense", 15000, 0), ("Cash", 0, 10000), ("HDFC Bank", 0, 5000))
        names, is_group = service.resolve_selection("Indirect Expenses")

        assert service.group_impact(voucher, names, is_group).particulars == "Cash, HDFC Bank"

    def test_self_journal_on_single_ledger_uses_narration(self):
        voucher = journal(("Cash", 100, 0), ("Cash", 0, 100), narration="Recount")

        assert LedgerService(None).group_impact(voucher, ["Cash"]).particulars == "Recount"

    def test_subgroup_ledgers_are_not_included(self, registry):
        registry.add_ledger_group(LedgerGroupMaster(name="Petty Cash", under="Cash-in-Hand"))
        registry.add_ledger(Ledger(name="Office Float", group="Petty Cash"))

        names, _ = LedgerService(registry).resolve_selection("Cash-in-Hand")

        assert names == ["Cash"]
