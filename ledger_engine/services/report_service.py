"""
Report service — day book, ledger statement, trial balance and
stock summary.

Every report walks the full voucher list on each call. Nothing
is cached, so a report always reflects the current store.
"""

from decimal import Decimal

from loguru import logger

from ledger_engine.models.enums import BalanceSide, SystemLedger, VoucherType
from ledger_engine.schemas.reports import (
    DayBook,
    DayBookRow,
    LedgerStatement,
    StatementRow,
    StockSummaryRow,
    TrialBalance,
    TrialBalanceRow,
)
from ledger_engine.schemas.voucher import (
    ZERO,
    ContraVoucher,
    JournalVoucher,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    voucher_amount,
    voucher_party,
)
from ledger_engine.services.ledger_service import LedgerService, signed

ALL_LEDGERS = "All Ledgers"


def format_balance(balance: Decimal) -> str:
    """Positive balances are debit (Dr), negative are credit (Cr)."""
    amount = f"{abs(balance):.2f}"
    if balance > 0:
        return f"{amount} {BalanceSide.DEBIT.value}"
    if balance < 0:
        return f"{amount} {BalanceSide.CREDIT.value}"
    return amount


def in_window(date: str, start_date: str | None, end_date: str | None) -> bool:
    if start_date and date < start_date:
        return False
    if end_date and date > end_date:
        return False
    return True


class ReportService:

    def __init__(self, registry, store):
        self.registry = registry
        self.store = store
        self.ledger_service = LedgerService(registry)

    # --- Day Book ---

    def day_book(self, start_date: str | None = None, end_date: str | None = None) -> DayBook:
        """Vouchers inside the window, in store order (newest first)."""
        rows = [
            DayBookRow(
                id=v.id,
                date=v.date,
                voucher_type=v.type,
                party=voucher_party(v),
                amount=voucher_amount(v),
            )
            for v in self.store
            if in_window(v.date, start_date, end_date)
        ]
        return DayBook(start_date=start_date, end_date=end_date, rows=rows)

    # --- Ledger Statement ---

    def _all_ledgers_listing(self, start_date, end_date) -> LedgerStatement:
        """
        Every voucher in date order with its headline amount on both
        sides. This is a listing, not a double-entry statement, so
        there is no running balance.
        """
        rows = []
        for v in sorted(self.store, key=lambda v: v.date):
            if not in_window(v.date, start_date, end_date):
                continue
            if isinstance(v, JournalVoucher):
                debit, credit = v.total_debit, v.total_credit
            else:
                debit = credit = voucher_amount(v)
            rows.append(StatementRow(
                id=v.id,
                date=v.date,
                particulars=v.narration or f"Voucher Type: {v.type}",
                voucher_type=v.type,
                debit=debit,
                credit=credit,
            ))
        return LedgerStatement(selection=ALL_LEDGERS, is_all_ledgers=True, rows=rows)

    def ledger_statement(
        self,
        selection: str,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> LedgerStatement:
        """
        Statement of one ledger, or of a ledger group taken as the
        union of its member ledgers.

        Opening balance covers vouchers dated before start_date.
        Vouchers in the window with no effect on the selection are
        left out; the rest carry a running balance.
        """
        if selection == ALL_LEDGERS:
            return self._all_ledgers_listing(start_date, end_date)

        ledger_names, is_group = self.ledger_service.resolve_selection(selection)
        if not ledger_names:
            return LedgerStatement(
                selection=selection,
                is_group=is_group,
                opening_display=format_balance(ZERO),
                closing_display=format_balance(ZERO),
            )

        ordered = sorted(self.store, key=lambda v: v.date)

        opening = ZERO
        if start_date:
            for v in ordered:
                if v.date < start_date:
                    opening += signed(self.ledger_service.group_impact(v, ledger_names, is_group))

        balance = opening
        rows = []
        for v in ordered:
            if not in_window(v.date, start_date, end_date):
                continue
            result = self.ledger_service.group_impact(v, ledger_names, is_group)
            if result.is_zero:
                continue
            balance += signed(result)
            rows.append(StatementRow(
                id=v.id,
                date=v.date,
                particulars=result.particulars,
                voucher_type=v.type,
                debit=result.debit,
                credit=result.credit,
                balance=balance,
                balance_display=format_balance(balance),
            ))

        return LedgerStatement(
            selection=selection,
            is_group=is_group,
            opening_balance=opening,
            closing_balance=balance,
            opening_display=format_balance(opening),
            closing_display=format_balance(balance),
            rows=rows,
        )

    # --- Trial Balance ---

    def trial_balance(self) -> TrialBalance:
        """
        Net balance of every ledger across all vouchers.

        Registry ledgers come first (in registry order), then any
        ledger named only on a voucher. Each ledger is netted to a
        single side; ledgers that net to zero are omitted.
        """
        balances: dict[str, list[Decimal]] = {}

        def post(name: str, debit: Decimal = ZERO, credit: Decimal = ZERO) -> None:
            if not name:
                return
            totals = balances.setdefault(name, [ZERO, ZERO])
            totals[0] += debit
            totals[1] += credit

        for name in self.registry.ledger_names():
            post(name)

        for v in self.store:
            if isinstance(v, SalesPurchaseVoucher):
                tax_heads = (
                    [(SystemLedger.IGST, v.total_igst)]
                    if v.is_inter_state
                    else [(SystemLedger.CGST, v.total_cgst), (SystemLedger.SGST, v.total_sgst)]
                )
                if v.type == VoucherType.SALES:
                    post(v.party, debit=v.total)
                    post(SystemLedger.SALES.value, credit=v.total_taxable_amount)
                    for head, amount in tax_heads:
                        post(head.value, credit=amount)
                else:
                    post(v.party, credit=v.total)
                    post(SystemLedger.PURCHASES.value, debit=v.total_taxable_amount)
                    for head, amount in tax_heads:
                        post(head.value, debit=amount)
            elif isinstance(v, PaymentReceiptVoucher):
                if v.type == VoucherType.PAYMENT:
                    post(v.party, debit=v.amount)
                    post(v.account, credit=v.amount)
                else:
                    post(v.party, credit=v.amount)
                    post(v.account, debit=v.amount)
            elif isinstance(v, ContraVoucher):
                post(v.from_account, credit=v.amount)
                post(v.to_account, debit=v.amount)
            elif isinstance(v, JournalVoucher):
                for entry in v.entries:
                    post(entry.ledger, debit=entry.debit, credit=entry.credit)
            else:
                raise TypeError(f"Unsupported voucher type: {type(v).__name__}")

        rows = []
        for name, (debit, credit) in balances.items():
            if debit > credit:
                rows.append(TrialBalanceRow(ledger=name, debit=debit - credit, credit=ZERO))
            elif credit > debit:
                rows.append(TrialBalanceRow(ledger=name, debit=ZERO, credit=credit - debit))

        total_debit = sum((r.debit for r in rows), ZERO)
        total_credit = sum((r.credit for r in rows), ZERO)
        is_balanced = total_debit == total_credit
        if not is_balanced:
            # Reportable, not fatal: usually a voucher whose stated
            # totals disagree with its lines.
            logger.warning(
                "Trial balance does not agree: debit={} credit={}",
                total_debit, total_credit,
            )

        return TrialBalance(
            rows=rows,
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=is_balanced,
        )

    # --- Stock Summary ---

    def stock_summary(self) -> list[StockSummaryRow]:
        """
        Opening, inward (purchases), outward (sales) and closing
        quantity per stock item. Lines are matched on exact item
        name; lines for uncatalogued items are ignored.
        """
        summary = {
            item.name: [item.quantity or ZERO, ZERO, ZERO]
            for item in self.registry.stock_items
        }

        for v in self.store:
            if not isinstance(v, SalesPurchaseVoucher):
                continue
            for line in v.items:
                movement = summary.get(line.name)
                if movement is None:
                    continue
                if v.type == VoucherType.PURCHASE:
                    movement[1] += line.qty
                else:
                    movement[2] += line.qty

        return [
            StockSummaryRow(
                name=name,
                opening=opening,
                inward=inward,
                outward=outward,
                closing=opening + inward - outward,
            )
            for name, (opening, inward, outward) in summary.items()
        ]
