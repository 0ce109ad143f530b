"""
Voucher service — the voucher store and its state machine.

A voucher is drafted (outside this service), persisted by
appending it to the store, and may afterwards be edited in
place with its id retained. There is no delete.

Rules enforced here:
1. A journal is accepted only if balanced (debit == credit > 0)
2. Ids are assigned at the moment a voucher enters the store
3. The store is kept newest first, by date
4. Changing the party of a sales/purchase voucher recomputes
   its inter-state flag and, if that flips, every tax figure

Rejections return None and leave the store untouched.
"""

import uuid
from datetime import datetime, timezone

from loguru import logger

from ledger_engine.models.enums import VoucherType
from ledger_engine.schemas.voucher import (
    ZERO,
    JournalVoucher,
    SalesPurchaseVoucher,
)
from ledger_engine.services.tax_service import TaxService


def new_voucher_id() -> str:
    """Timestamp plus a random suffix, e.g. 2024-06-05T10:15:00.123Z-1f3a9c2b."""
    now = datetime.now(timezone.utc)
    return f"{now.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3]}Z-{uuid.uuid4().hex[:8]}"


class VoucherStore:
    """Ordered, append/replace-only collection of vouchers."""

    def __init__(self, vouchers=()):
        self._vouchers = list(vouchers)

    def __iter__(self):
        return iter(self._vouchers)

    def __len__(self) -> int:
        return len(self._vouchers)

    def all(self) -> list:
        return list(self._vouchers)

    def get(self, voucher_id: str):
        return next((v for v in self._vouchers if v.id == voucher_id), None)

    def extend(self, vouchers: list) -> None:
        """Append and re-sort newest first. The sort is stable."""
        self._vouchers.extend(vouchers)
        self._vouchers.sort(key=lambda v: v.date, reverse=True)

    def replace(self, voucher) -> bool:
        for index, existing in enumerate(self._vouchers):
            if existing.id == voucher.id:
                self._vouchers[index] = voucher
                return True
        return False


def journal_totals(voucher: JournalVoucher) -> JournalVoucher:
    """Return a copy with total_debit/total_credit summed from entries."""
    return voucher.model_copy(update={
        "total_debit": sum((e.debit for e in voucher.entries), ZERO),
        "total_credit": sum((e.credit for e in voucher.entries), ZERO),
    })


class VoucherService:

    def __init__(self, registry, store: VoucherStore):
        self.registry = registry
        self.store = store
        self.tax_service = TaxService(registry)

    def _accepts(self, voucher) -> bool:
        if isinstance(voucher, JournalVoucher) and not voucher.is_balanced:
            logger.warning(
                "Journal rejected: debits={} credits={}",
                voucher.total_debit, voucher.total_credit,
            )
            return False
        return True

    def _with_id(self, voucher):
        if voucher.id:
            return voucher
        return voucher.model_copy(update={"id": new_voucher_id()})

    def add_vouchers(self, vouchers: list) -> list:
        """
        Append a batch of vouchers, assigning ids where missing.

        Unbalanced journals are dropped from the batch. Returns the
        vouchers that were stored.
        """
        accepted = [self._with_id(v) for v in vouchers if self._accepts(v)]
        if accepted:
            self.store.extend(accepted)
        logger.info(
            "Stored {} voucher(s), rejected {}",
            len(accepted), len(vouchers) - len(accepted),
        )
        return accepted

    def add_voucher(self, voucher):
        """Append one voucher. Returns it with its id, or None if rejected."""
        added = self.add_vouchers([voucher])
        return added[0] if added else None

    def create_voucher(self, voucher):
        """
        Persist a voucher entered by hand.

        Sales/purchase lines are priced from the stock registry and
        the party's state; journal totals are summed from entries.
        Figures typed into the derived fields are ignored.
        """
        if isinstance(voucher, SalesPurchaseVoucher):
            voucher = self.tax_service.reprice(
                voucher,
                inter_state=self.tax_service.party_is_inter_state(voucher.party),
            )
        elif isinstance(voucher, JournalVoucher):
            voucher = journal_totals(voucher)
        return self.add_voucher(voucher)

    def _with_party_state(self, voucher):
        """
        Set the inter-state flag from the voucher's party and
        reprice every line if the flag flips.
        """
        inter_state = self.tax_service.party_is_inter_state(voucher.party)
        if inter_state == voucher.is_inter_state:
            return voucher
        logger.info(
            "Voucher {} repriced as {}",
            voucher.id, "inter-state" if inter_state else "intra-state",
        )
        return self.tax_service.reprice(voucher, inter_state=inter_state)

    def update_voucher(self, voucher):
        """
        Replace a persisted voucher by id. Unknown id returns None.

        A sales/purchase voucher moved to another party is treated
        as a party change.
        """
        existing = self.store.get(voucher.id) if voucher.id else None
        if existing is None:
            return None
        if not self._accepts(voucher):
            return None
        if (
            isinstance(voucher, SalesPurchaseVoucher)
            and isinstance(existing, SalesPurchaseVoucher)
            and voucher.party != existing.party
        ):
            voucher = self._with_party_state(voucher)
        self.store.replace(voucher)
        logger.info("Voucher {} updated", voucher.id)
        return voucher

    def change_party(self, voucher_id: str, party: str):
        """
        Move a sales/purchase voucher to another party.

        If the new party's state changes the inter-state status,
        every line's split and the voucher totals are recomputed
        with each item's catalogue rate (0 when uncatalogued).
        The replacement is built in full before it is stored.
        """
        voucher = self.store.get(voucher_id)
        if not isinstance(voucher, SalesPurchaseVoucher):
            return None

        updated = self._with_party_state(voucher.model_copy(update={"party": party}))
        self.store.replace(updated)
        return updated

    def by_type(self, voucher_type: VoucherType) -> list:
        return [v for v in self.store if v.type == voucher_type]
