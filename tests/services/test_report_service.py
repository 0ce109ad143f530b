"""
Tests for the day book, ledger statement, trial balance and
stock summary.

Tests cover:
- Date windows and store order in the day book
- Opening/closing balances and running balance on statements
- The "All Ledgers" listing
- Trial balance closure, including randomly generated books
- Stock movement from sales and purchase lines
"""

import random
from datetime import date
from decimal import Decimal

import pytest

from ledger_engine.schemas.voucher import (
    ContraVoucher,
    JournalEntry,
    JournalVoucher,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    VoucherItem,
)
from ledger_engine.services.report_service import ALL_LEDGERS, format_balance
from ledger_engine.services.tax_service import TaxService

YEAR = date.today().year


def d(month, day, year=YEAR):
    return date(year, month, day).isoformat()


def scenario_sale(registry):
    return TaxService(registry).reprice(SalesPurchaseVoucher(
        type="Sales", date="2024-06-10", party="Local Customer", is_inter_state=False,
        items=[VoucherItem(name="Laptop", qty=Decimal("2"), rate=Decimal("65000"))],
    ))


def scenario_purchase(registry):
    return TaxService(registry).reprice(SalesPurchaseVoucher(
        type="Purchase", date="2024-06-05", party="Global Tech Supplies", is_inter_state=True,
        items=[VoucherItem(name="Laptop", qty=Decimal("5"), rate=Decimal("55000"))],
    ))


def rent_journal(date="2024-06-30"):
    return JournalVoucher(
        type="Journal", date=date,
        entries=[
            JournalEntry(ledger="Rent Expense", debit=Decimal("15000")),
            JournalEntry(ledger="Cash", credit=Decimal("15000")),
        ],
        total_debit=Decimal("15000"), total_credit=Decimal("15000"),
    )


def random_vouchers(registry, rng, count):
    """Valid vouchers of every type over the sample masters."""
    tax_service = TaxService(registry)
    parties = ["Local Customer", "Prime Retail Customer", "Global Tech Supplies", "Local Supplier"]
    accounts = ["Cash", "HDFC Bank"]
    ledgers = registry.ledger_names() + ["Unlisted Ledger"]
    items = [i.name for i in registry.stock_items] + ["Uncatalogued Part"]

    vouchers = []
    for _ in range(count):
        day = date(2024, rng.randint(1, 12), rng.randint(1, 28)).isoformat()
        kind = rng.choice(["Sales", "Purchase", "Payment", "Receipt", "Contra", "Journal"])
        amount = Decimal(rng.randint(1, 100000)) / 100
        if kind in ("Sales", "Purchase"):
            lines = [
                VoucherItem(
                    name=rng.choice(items),
                    qty=Decimal(rng.randint(1, 9)),
                    rate=Decimal(rng.randint(1, 500000)) / 100,
                )
                for _ in range(rng.randint(1, 4))
            ]
            vouchers.append(tax_service.reprice(SalesPurchaseVoucher(
                type=kind, date=day, party=rng.choice(parties),
                is_inter_state=rng.random() < 0.5, items=lines,
            )))
        elif kind in ("Payment", "Receipt"):
            vouchers.append(PaymentReceiptVoucher(
                type=kind, date=day, account=rng.choice(accounts),
                party=rng.choice(parties), amount=amount,
            ))
        elif kind == "Contra":
            src, dst = rng.sample(accounts, 2)
            vouchers.append(ContraVoucher(
                type=kind, date=day, from_account=src, to_account=dst, amount=amount,
            ))
        else:
            first, second = rng.sample(ledgers, 2)
            vouchers.append(JournalVoucher(
                type=kind, date=day,
                entries=[
                    JournalEntry(ledger=first, debit=amount),
                    JournalEntry(ledger=second, credit=amount),
                ],
                total_debit=amount, total_credit=amount,
            ))
    return vouchers


class TestFormatBalance:

    def test_debit_balance(self):
        assert format_balance(Decimal("1500")) == "1500.00 Dr"

    def test_credit_balance_shown_as_absolute(self):
        assert format_balance(Decimal("-15000.5")) == "15000.50 Cr"

    def test_zero_has_no_side(self):
        assert format_balance(Decimal("0")) == "0.00"


class TestDayBook:

    def test_window_is_inclusive(self, sample):
        book = sample.reports.day_book(d(6, 10), d(6, 16))

        assert [r.id for r in book.rows] == ["5", "4", "3"]

    def test_no_window_lists_store_order(self, sample):
        book = sample.reports.day_book()

        assert [r.id for r in book.rows] == [v.id for v in sample.store]
        assert [r.date for r in book.rows] == sorted((r.date for r in book.rows), reverse=True)

    def test_journal_row_has_no_party(self, empty_books):
        empty_books.vouchers.add_voucher(rent_journal())
        row = empty_books.reports.day_book().rows[0]

        assert row.party == "N/A"
        assert row.amount == 0


class TestLedgerStatement:

    def test_journal_credit_on_cash(self, empty_books):
        empty_books.vouchers.add_voucher(rent_journal())
        statement = empty_books.reports.ledger_statement("Cash")

        assert len(statement.rows) == 1
        row = statement.rows[0]
        assert row.credit == Decimal("15000")
        assert row.debit == 0
        assert row.particulars == "Rent Expense"
        assert row.balance_display == "15000.00 Cr"
        assert statement.closing_balance == Decimal("-15000")

    def test_opening_balance_from_earlier_vouchers(self, sample):
        statement = sample.reports.ledger_statement("Cash", d(6, 10), d(6, 30))

        assert statement.opening_balance == Decimal("500000")
        assert [r.id for r in statement.rows] == ["4", "5"]
        assert statement.closing_balance == Decimal("75000")
        assert statement.closing_display == "75000.00 Dr"

    def test_untouched_vouchers_skipped(self, sample):
        statement = sample.reports.ledger_statement("Rent Expense")

        assert [r.id for r in statement.rows] == ["4"]

    def test_rows_in_ascending_date_order(self, sample):
        statement = sample.reports.ledger_statement("HDFC Bank")
        dates = [r.date for r in statement.rows]

        assert dates == sorted(dates)

    def test_group_statement(self, sample):
        statement = sample.reports.ledger_statement("Sundry Debtors")

        assert statement.is_group is True
        assert {r.id for r in statement.rows} == {"3", "7", "8"}
        assert statement.closing_balance == Decimal("155288") - Decimal("100000") + Decimal("73368")

    def test_empty_group(self, sample):
        statement = sample.reports.ledger_statement("Suspense A/c")

        assert statement.rows == []
        assert statement.closing_display == "0.00"

    @pytest.mark.parametrize("selection", ["Cash", "HDFC Bank", "Local Customer", "CGST", "Sundry Creditors"])
    @pytest.mark.parametrize("window", [(None, None), (d(6, 1), d(6, 30)), (d(6, 11), None), ("2024-01-01", d(6, 5))])
    def test_round_trip(self, sample, selection, window):
        start, end = window
        statement = sample.reports.ledger_statement(selection, start, end)
        movement = sum((r.debit - r.credit for r in statement.rows), Decimal("0"))

        assert statement.closing_balance == statement.opening_balance + movement

    def test_all_ledgers_listing(self, sample):
        statement = sample.reports.ledger_statement(ALL_LEDGERS)

        assert statement.is_all_ledgers is True
        assert len(statement.rows) == 9
        assert [r.date for r in statement.rows] == sorted(r.date for r in statement.rows)
        assert all(r.balance is None for r in statement.rows)
        first = statement.rows[0]
        assert first.id == "9"
        assert first.debit == first.credit == Decimal("51684")

    def test_all_ledgers_uses_voucher_type_without_narration(self, empty_books):
        empty_books.vouchers.add_voucher(rent_journal())
        row = empty_books.reports.ledger_statement(ALL_LEDGERS).rows[0]

        assert row.particulars == "Voucher Type: Journal"
        assert row.debit == row.credit == Decimal("15000")


class TestTrialBalance:

    def test_sale_and_purchase_agree(self, empty_books):
        empty_books.vouchers.add_vouchers([scenario_sale(empty_books.registry), scenario_purchase(empty_books.registry)])
        trial = empty_books.reports.trial_balance()
        rows = {r.ledger: (r.debit, r.credit) for r in trial.rows}

        assert trial.is_balanced is True
        assert trial.total_debit == trial.total_credit == Decimal("477900")
        assert rows["Local Customer"] == (Decimal("153400"), 0)
        assert rows["Global Tech Supplies"] == (0, Decimal("324500"))
        assert rows["Sales"] == (0, Decimal("130000"))
        assert rows["Purchases"] == (Decimal("275000"), 0)
        assert rows["IGST"] == (Decimal("49500"), 0)
        assert rows["CGST"] == (0, Decimal("11700"))

    def test_sample_books_agree(self, sample):
        assert sample.reports.trial_balance().is_balanced is True

    def test_zero_net_ledgers_omitted(self, empty_books):
        empty_books.vouchers.add_voucher(rent_journal())
        ledgers = [r.ledger for r in empty_books.reports.trial_balance().rows]

        assert ledgers == ["Cash", "Rent Expense"]

    def test_ledger_only_on_voucher_is_listed(self, empty_books):
        empty_books.vouchers.add_voucher(PaymentReceiptVoucher(
            type="Payment", date="2024-06-01", account="Cash", party="Electricity Board", amount=Decimal("900"),
        ))
        rows = {r.ledger: r for r in empty_books.reports.trial_balance().rows}

        assert rows["Electricity Board"].debit == Decimal("900")

    def test_mismatched_stated_totals_reported(self, empty_books):
        sale = scenario_sale(empty_books.registry).model_copy(update={"total": Decimal("150000")})
        empty_books.vouchers.add_voucher(sale)

        trial = empty_books.reports.trial_balance()

        assert trial.is_balanced is False
        assert trial.total_credit - trial.total_debit == Decimal("3400")

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024, 31337])
    def test_random_books_always_close(self, empty_books, seed):
        rng = random.Random(seed)
        empty_books.vouchers.add_vouchers(random_vouchers(empty_books.registry, rng, 60))

        trial = empty_books.reports.trial_balance()

        assert len(empty_books.store) == 60
        assert trial.total_debit == trial.total_credit
        assert trial.is_balanced is True


class TestStockSummary:

    def test_sample_movements(self, sample):
        rows = {r.name: r for r in sample.reports.stock_summary()}

        laptop = rows["Laptop"]
        assert (laptop.opening, laptop.inward, laptop.outward) == (10, 5, 2)
        assert laptop.closing == Decimal("13")
        assert rows["Toolstable"].closing == Decimal("13")
        assert rows["27-inch Monitor"].closing == Decimal("12")
        assert rows["16GB DDR5 RAM"].closing == Decimal("25")

    def test_uncatalogued_lines_ignored(self, empty_books):
        empty_books.vouchers.add_voucher(SalesPurchaseVoucher(
            type="Sales", date="2024-06-01", party="Local Customer",
            items=[VoucherItem(name="Mystery Box", qty=Decimal("3"))],
        ))
        names = [r.name for r in empty_books.reports.stock_summary()]

        assert "Mystery Box" not in names
        assert len(names) == 9
