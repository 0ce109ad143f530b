"""
Sample books loaded into an empty database.

A small trading company in Tamil Nadu with a chart of ledger
groups, a few parties, an inventory catalogue and a handful of
vouchers spread over June and July of the current year.
"""

from datetime import date
from decimal import Decimal

from ledger_engine.models.enums import RegistrationType
from ledger_engine.schemas.masters import (
    CompanyDetails,
    Ledger,
    LedgerGroupMaster,
    StockGroup,
    StockItem,
    Unit,
)
from ledger_engine.schemas.voucher import (
    ContraVoucher,
    PaymentReceiptVoucher,
    SalesPurchaseVoucher,
    VoucherItem,
)
from ledger_engine.services.registry_service import EntityRegistry
from ledger_engine.services.tax_service import TaxService

COMPANY = CompanyDetails(
    name="Accatum Machinors Pvt Ltd",
    address="4/14, 4/15 V.K.V Nanjappa Gounder Layout",
    gstin="33ABACA5718R1ZD",
    state="Tamil Nadu",
)

# (group, parent)
LEDGER_GROUPS = [
    ("Branch / Divisions", "Primary"),
    ("Capital Account", "Primary"),
    ("Current Assets", "Primary"),
    ("Current Liabilities", "Primary"),
    ("Direct Expenses", "Primary"),
    ("Direct Incomes", "Primary"),
    ("Fixed Assets", "Primary"),
    ("Indirect Expenses", "Primary"),
    ("Indirect Incomes", "Primary"),
    ("Investments", "Primary"),
    ("Loans (Liability)", "Primary"),
    ("Misc. Expenses (ASSET)", "Primary"),
    ("Purchase Accounts", "Primary"),
    ("Sales Accounts", "Primary"),
    ("Suspense A/c", "Primary"),
    ("Bank Accounts", "Current Assets"),
    ("Cash-in-Hand", "Current Assets"),
    ("Duties & Taxes", "Current Liabilities"),
    ("Provisions", "Current Liabilities"),
    ("Reserves & Surplus", "Capital Account"),
    ("Secured Loans", "Loans (Liability)"),
    ("Sundry Creditors", "Current Liabilities"),
    ("Sundry Debtors", "Current Assets"),
    ("Unsecured Loans", "Loans (Liability)"),
    ("Stock-in-Hand", "Current Assets"),
    ("Bank OD A/c", "Loans (Liability)"),
]

REGISTERED = RegistrationType.REGISTERED
UNREGISTERED = RegistrationType.UNREGISTERED

LEDGERS = [
    Ledger(name="Cash", group="Cash-in-Hand"),
    Ledger(name="HDFC Bank", group="Bank Accounts"),
    Ledger(name="Sales", group="Sales Accounts"),
    Ledger(name="Purchases", group="Purchase Accounts"),
    Ledger(name="Consulting Income", group="Indirect Incomes"),
    Ledger(name="CGST", group="Duties & Taxes"),
    Ledger(name="SGST", group="Duties & Taxes"),
    Ledger(name="IGST", group="Duties & Taxes"),
    Ledger(name="Balamurugan Fabricators", group="Sundry Creditors",
           gstin="33AKWPP4092M1ZB", registration_type=REGISTERED, state="Tamil Nadu"),
    Ledger(name="Local Supplier", group="Sundry Creditors",
           gstin="27AAAAA1234A1Z4", registration_type=REGISTERED, state="Maharashtra"),
    Ledger(name="Global Tech Supplies", group="Sundry Creditors",
           gstin="29BBBBB5678B1Z5", registration_type=REGISTERED, state="Karnataka"),
    Ledger(name="Local Customer", group="Sundry Debtors",
           gstin="27CCCCC9012C1Z6", registration_type=REGISTERED, state="Maharashtra"),
    Ledger(name="Prime Retail Customer", group="Sundry Debtors",
           registration_type=UNREGISTERED, state="Maharashtra"),
    Ledger(name="Rent Expense", group="Indirect Expenses"),
    Ledger(name="Office Supplies", group="Indirect Expenses"),
    Ledger(name="Owner Capital", group="Capital Account"),
]

UNITS = ["Nos", "Pcs", "Kgs", "Ltrs", "Box"]

STOCK_GROUPS = ["Electronics", "Hardware", "Software", "Accessories"]

# (name, group, unit, hsn, gst rate, opening quantity)
STOCK_ITEMS = [
    ("Laptop", "Electronics", "Nos", "847130", 18, 10),
    ("Mouse", "Accessories", "Nos", "847160", 18, 50),
    ("Keyboard", "Accessories", "Nos", "847160", 18, 45),
    ("1TB SSD Drive", "Hardware", "Nos", "847170", 18, 30),
    ("16GB DDR5 RAM", "Hardware", "Pcs", "847330", 28, 25),
    ("Accounting Software License", "Software", "Nos", "852380", 18, 100),
    ("27-inch Monitor", "Electronics", "Nos", "852852", 28, 15),
    ("Inspection table", "Hardware", "Nos", "8479", 18, 5),
    ("Toolstable", "Hardware", "Nos", "8461", 18, 8),
]


def sample_registry() -> EntityRegistry:
    registry = EntityRegistry(company=COMPANY)
    for name, under in LEDGER_GROUPS:
        registry.add_ledger_group(LedgerGroupMaster(name=name, under=under))
    for ledger in LEDGERS:
        if registry.find_ledger(ledger.name) is None:
            registry.add_ledger(ledger)
        else:
            registry.replace_ledger(ledger)
    for name in UNITS:
        registry.add_unit(Unit(name=name))
    for name in STOCK_GROUPS:
        registry.add_stock_group(StockGroup(name=name))
    for name, group, unit, hsn, rate, quantity in STOCK_ITEMS:
        registry.add_stock_item(StockItem(
            name=name, group=group, unit=unit, hsn=hsn,
            gst_rate=Decimal(rate), quantity=Decimal(quantity),
        ))
    return registry


def _lines(*lines) -> list[VoucherItem]:
    return [VoucherItem(name=name, qty=Decimal(qty), rate=Decimal(rate)) for name, qty, rate in lines]


def sample_vouchers(registry: EntityRegistry, year: int | None = None) -> list:
    """
    The sample vouchers, newest first. Trade vouchers keep their
    recorded inter-state flag and are priced from the catalogue.
    """
    year = year or date.today().year

    def day(month: int, dom: int, y: int = year) -> str:
        return date(y, month, dom).isoformat()

    tax_service = TaxService(registry)
    trade = [
        SalesPurchaseVoucher(
            id="9", type="Purchase", date=day(9, 2, 2024), due_date=day(10, 1, 2024),
            is_inter_state=False, invoice_no="035", party="Balamurugan Fabricators",
            items=_lines(("Inspection table", 2, 9900), ("Toolstable", 5, 4800)),
            narration="Purchase of inspection and tool tables",
        ),
        SalesPurchaseVoucher(
            id="2", type="Purchase", date=day(6, 5), due_date=day(7, 4),
            is_inter_state=True, invoice_no="GTS-001", party="Global Tech Supplies",
            items=_lines(("Laptop", 5, 55000), ("1TB SSD Drive", 10, 4500)),
            narration="Goods purchased for resale",
        ),
        SalesPurchaseVoucher(
            id="3", type="Sales", date=day(6, 10), due_date=day(7, 9),
            is_inter_state=False, invoice_no="INV-001", party="Local Customer",
            items=_lines(("Laptop", 2, 65000), ("Mouse", 2, 800)),
            narration="Goods sold on credit",
        ),
        SalesPurchaseVoucher(
            id="8", type="Sales", date=day(7, 5), due_date=day(8, 4),
            is_inter_state=False, invoice_no="INV-002", party="Prime Retail Customer",
            items=_lines(("27-inch Monitor", 3, 18000), ("Keyboard", 3, 1200)),
            narration="Goods sold to unregistered customer",
        ),
    ]
    others = [
        PaymentReceiptVoucher(
            id="1", type="Receipt", date=day(6, 1), account="Cash",
            party="Owner Capital", amount=Decimal("500000"), narration="Capital introduced",
        ),
        PaymentReceiptVoucher(
            id="4", type="Payment", date=day(6, 15), account="Cash",
            party="Rent Expense", amount=Decimal("25000"), narration="Rent paid for the month",
        ),
        ContraVoucher(
            id="5", type="Contra", date=day(6, 16), from_account="Cash",
            to_account="HDFC Bank", amount=Decimal("400000"), narration="Cash deposited into bank",
        ),
        PaymentReceiptVoucher(
            id="6", type="Payment", date=day(6, 20), account="HDFC Bank",
            party="Global Tech Supplies", amount=Decimal("200000"),
            narration="Partial payment made via cheque",
        ),
        PaymentReceiptVoucher(
            id="7", type="Receipt", date=day(7, 1), account="HDFC Bank",
            party="Local Customer", amount=Decimal("100000"), narration="Received partial payment",
        ),
    ]
    vouchers = [tax_service.reprice(v) for v in trade] + others
    return sorted(vouchers, key=lambda v: v.date, reverse=True)
