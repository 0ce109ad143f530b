"""
Dashboard service — headline figures for the company overview.

Party balances here use a simplified sign convention, not the
full double-entry resolver: a sale or payment raises the party's
balance and a purchase or receipt lowers it.
"""

from datetime import datetime
from decimal import Decimal

from ledger_engine.models.enums import VoucherType
from ledger_engine.schemas.reports import DashboardSummary, MonthlyPoint
from ledger_engine.schemas.voucher import ZERO
from ledger_engine.services.registry_service import SUNDRY_CREDITORS, SUNDRY_DEBTORS

MONTHS_SHOWN = 6

# Sign of each voucher type's effect on its party's balance.
PARTY_SIGN = {
    VoucherType.SALES: 1,
    VoucherType.PAYMENT: 1,
    VoucherType.PURCHASE: -1,
    VoucherType.RECEIPT: -1,
}


def _headline(voucher) -> Decimal:
    if voucher.type in (VoucherType.SALES, VoucherType.PURCHASE):
        return voucher.total
    return voucher.amount


class DashboardService:

    def __init__(self, registry, store):
        self.registry = registry
        self.store = store

    def party_balances(self) -> dict[str, Decimal]:
        balances = {name: ZERO for name in self.registry.ledger_names()}
        for v in self.store:
            sign = PARTY_SIGN.get(v.type)
            if sign is None:
                continue
            balances[v.party] = balances.get(v.party, ZERO) + sign * _headline(v)
        return balances

    def monthly_series(self) -> list[MonthlyPoint]:
        """
        Sales and purchase totals per calendar month, oldest first,
        limited to the latest six months that have any activity.
        """
        buckets: dict[tuple[int, int], list[Decimal]] = {}
        for v in self.store:
            if v.type not in (VoucherType.SALES, VoucherType.PURCHASE):
                continue
            day = datetime.strptime(v.date, "%Y-%m-%d")
            bucket = buckets.setdefault((day.year, day.month), [ZERO, ZERO])
            if v.type == VoucherType.SALES:
                bucket[0] += v.total
            else:
                bucket[1] += v.total

        points = []
        for year, month in sorted(buckets)[-MONTHS_SHOWN:]:
            sales, purchases = buckets[(year, month)]
            label = datetime(year, month, 1).strftime("%b %y")
            points.append(MonthlyPoint(month=label, sales=sales, purchases=purchases))
        return points

    def summary(self) -> DashboardSummary:
        total_sales = sum((v.total for v in self.store if v.type == VoucherType.SALES), ZERO)
        total_purchases = sum((v.total for v in self.store if v.type == VoucherType.PURCHASE), ZERO)

        balances = self.party_balances()
        debtors = self.registry.ledgers_in_group(SUNDRY_DEBTORS)
        creditors = self.registry.ledgers_in_group(SUNDRY_CREDITORS)
        receivables = sum((balances[n] for n in debtors if balances.get(n, ZERO) > 0), ZERO)
        payables = sum((-balances[n] for n in creditors if balances.get(n, ZERO) < 0), ZERO)

        return DashboardSummary(
            company_name=self.registry.company.name,
            total_sales=total_sales,
            total_purchases=total_purchases,
            total_receivables=receivables,
            total_payables=payables,
            monthly=self.monthly_series(),
        )
