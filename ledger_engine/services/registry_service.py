"""
Entity registry — the master data every other component reads.

The registry holds ledgers, ledger groups, units, stock groups,
stock items and the company profile. It enforces:
1. Names are unique within their kind (case-insensitive)
2. The ledger group tree has no cycles
3. The system ledgers (Sales, Purchases, CGST, SGST, IGST) exist

Rejected additions are no-ops that return None. The caller
decides how to tell the user.
"""

from loguru import logger

from ledger_engine.models.enums import SystemLedger
from ledger_engine.schemas.masters import (
    PRIMARY_GROUP,
    CompanyDetails,
    Ledger,
    LedgerGroupMaster,
    StockGroup,
    StockItem,
    Unit,
)

SUNDRY_DEBTORS = "Sundry Debtors"
SUNDRY_CREDITORS = "Sundry Creditors"

# Group each system ledger is filed under when the registry has
# to create it.
SYSTEM_LEDGER_GROUPS = {
    SystemLedger.SALES: "Sales Accounts",
    SystemLedger.PURCHASES: "Purchase Accounts",
    SystemLedger.CGST: "Duties & Taxes",
    SystemLedger.SGST: "Duties & Taxes",
    SystemLedger.IGST: "Duties & Taxes",
}


def _key(name: str) -> str:
    return name.strip().casefold()


def _by_name(entity) -> str:
    return entity.name.casefold()


class EntityRegistry:
    """
    In-memory master data for one company.

    Lists are kept sorted by name, which is also the iteration
    order reports use when they walk ledgers.
    """

    def __init__(
        self,
        company: CompanyDetails | None = None,
        ledgers=(),
        ledger_groups=(),
        units=(),
        stock_groups=(),
        stock_items=(),
    ):
        self.company = company or CompanyDetails()
        self.ledgers: list[Ledger] = list(ledgers)
        self.ledger_groups: list[LedgerGroupMaster] = list(ledger_groups)
        self.units: list[Unit] = list(units)
        self.stock_groups: list[StockGroup] = list(stock_groups)
        self.stock_items: list[StockItem] = list(stock_items)
        self._inject_system_ledgers()

    def _inject_system_ledgers(self) -> None:
        for system_ledger, group in SYSTEM_LEDGER_GROUPS.items():
            if self.find_ledger(system_ledger.value) is None:
                self.add_ledger(Ledger(name=system_ledger.value, group=group))

    # --- Ledgers ---

    def find_ledger(self, name: str) -> Ledger | None:
        """Look a ledger up by name, ignoring case."""
        if not name:
            return None
        key = _key(name)
        for ledger in self.ledgers:
            if _key(ledger.name) == key:
                return ledger
        return None

    def ledgers_by_name(self) -> dict[str, Ledger]:
        """Exact-name index, as used by the GST reports."""
        return {ledger.name: ledger for ledger in self.ledgers}

    def ledger_names(self) -> list[str]:
        return [ledger.name for ledger in self.ledgers]

    def add_ledger(self, ledger: Ledger) -> Ledger | None:
        if self.find_ledger(ledger.name) is not None:
            logger.info("Ledger '{}' already exists, not added", ledger.name)
            return None
        self.ledgers.append(ledger)
        self.ledgers.sort(key=_by_name)
        return ledger

    def replace_ledger(self, ledger: Ledger) -> Ledger | None:
        """Replace a ledger wholesale. There is no partial update."""
        existing = self.find_ledger(ledger.name)
        if existing is None:
            return None
        index = self.ledgers.index(existing)
        self.ledgers[index] = ledger
        return ledger

    def ledgers_in_group(self, group_name: str) -> list[str]:
        """Names of ledgers filed directly under the group."""
        return [ledger.name for ledger in self.ledgers if ledger.group == group_name]

    # --- Ledger Groups ---

    def find_ledger_group(self, name: str) -> LedgerGroupMaster | None:
        key = _key(name)
        for group in self.ledger_groups:
            if _key(group.name) == key:
                return group
        return None

    def is_group(self, name: str) -> bool:
        """Exact-name test used when a report selection is resolved."""
        return any(group.name == name for group in self.ledger_groups)

    def _creates_cycle(self, name: str, under: str) -> bool:
        """
        Walk the parent chain from `under` and report whether it
        reaches `name`. A visited set bounds the walk even if the
        stored tree is already cyclic.
        """
        target = _key(name)
        current = under
        visited = set()
        while current and _key(current) != _key(PRIMARY_GROUP):
            key = _key(current)
            if key == target:
                return True
            if key in visited:
                return True
            visited.add(key)
            parent = self.find_ledger_group(current)
            if parent is None:
                return False
            current = parent.under
        return False

    def add_ledger_group(self, group: LedgerGroupMaster) -> LedgerGroupMaster | None:
        if _key(group.name) == _key(PRIMARY_GROUP):
            return None
        if self.find_ledger_group(group.name) is not None:
            logger.info("Ledger group '{}' already exists, not added", group.name)
            return None
        if self._creates_cycle(group.name, group.under):
            logger.warning(
                "Ledger group '{}' under '{}' would create a cycle",
                group.name, group.under,
            )
            return None
        self.ledger_groups.append(group)
        self.ledger_groups.sort(key=_by_name)
        return group

    # --- Inventory masters ---

    def find_unit(self, name: str) -> Unit | None:
        key = _key(name)
        return next((u for u in self.units if _key(u.name) == key), None)

    def add_unit(self, unit: Unit) -> Unit | None:
        if self.find_unit(unit.name) is not None:
            return None
        self.units.append(unit)
        self.units.sort(key=_by_name)
        return unit

    def find_stock_group(self, name: str) -> StockGroup | None:
        key = _key(name)
        return next((g for g in self.stock_groups if _key(g.name) == key), None)

    def add_stock_group(self, group: StockGroup) -> StockGroup | None:
        if self.find_stock_group(group.name) is not None:
            return None
        self.stock_groups.append(group)
        self.stock_groups.sort(key=_by_name)
        return group

    def find_stock_item(self, name: str) -> StockItem | None:
        if not name:
            return None
        key = _key(name)
        return next((i for i in self.stock_items if _key(i.name) == key), None)

    def add_stock_item(self, item: StockItem) -> StockItem | None:
        if self.find_stock_item(item.name) is not None:
            return None
        self.stock_items.append(item)
        self.stock_items.sort(key=_by_name)
        return item

    def add_stock_items(self, items: list[StockItem]) -> list[StockItem]:
        """
        Add a batch of stock items, skipping names already present.

        Returns the items actually added.
        """
        added = []
        for item in items:
            if self.add_stock_item(item) is not None:
                added.append(item)
        logger.info(
            "Stock batch: {} added, {} skipped as duplicates",
            len(added), len(items) - len(added),
        )
        return added

    # --- Company ---

    def update_company(self, company: CompanyDetails) -> CompanyDetails:
        self.company = company
        return company
