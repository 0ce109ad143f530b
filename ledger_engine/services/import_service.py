"""
Import service — bulk voucher import from JSON and .xlsx files,
and the blank spreadsheet template.

Every import returns an ImportSummary. A row that cannot be
read counts as failed and the rest are still imported; a file
that cannot be opened at all counts as one failure.
"""

import json
import zipfile
from datetime import date, datetime, timedelta
from io import BytesIO

from loguru import logger
from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from ledger_engine.schemas.invoice import ImportSummary
from ledger_engine.schemas.voucher import (
    JournalVoucher,
    SalesPurchaseVoucher,
    VoucherAdapter,
)
from ledger_engine.services.tax_service import TaxService
from ledger_engine.services.voucher_service import journal_totals

# Day zero of spreadsheet serial dates.
EXCEL_EPOCH = date(1899, 12, 30)

SALES_PURCHASES = "SalesPurchases"
PAYMENTS_RECEIPTS = "PaymentsReceipts"
CONTRA = "Contra"
JOURNAL = "Journal"

TEMPLATE_SHEETS = {
    SALES_PURCHASES: (
        ["date", "type", "invoiceNo", "party", "isInterState", "narration", "items"],
        ["2023-01-01", "Sales", "INV-101", "Local Customer", "FALSE", "Sold goods",
         '[{"name": "Laptop", "qty": 1, "rate": 50000}]'],
    ),
    PAYMENTS_RECEIPTS: (
        ["date", "type", "account", "party", "amount", "narration"],
        ["2023-01-02", "Payment", "HDFC Bank", "Local Supplier", "25000", "Paid for supplies"],
    ),
    CONTRA: (
        ["date", "type", "fromAccount", "toAccount", "amount", "narration"],
        ["2023-01-03", "Contra", "Cash", "HDFC Bank", "10000", "Cash deposited"],
    ),
    JOURNAL: (
        ["date", "type", "narration", "entries"],
        ["2023-01-04", "Journal", "Adjustment entry",
         '[{"ledger": "Rent Expense", "debit": 15000, "credit": 0}, '
         '{"ledger": "Cash", "debit": 0, "credit": 15000}]'],
    ),
}

TEMPLATE_FILENAME = "AI-Accounting_Voucher_Template.xlsx"


def is_voucher_like(item) -> bool:
    """Structural check applied before full validation."""
    return (
        isinstance(item, dict)
        and isinstance(item.get("type"), str)
        and isinstance(item.get("date"), str)
    )


def cell_date(value) -> str:
    """Spreadsheet date cell (date, serial number or text) as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (EXCEL_EPOCH + timedelta(days=int(value))).isoformat()
    if isinstance(value, str):
        return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
    raise ValueError(f"Unreadable date: {value!r}")


def cell_flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().upper() == "TRUE"


def _cell_json(value):
    if isinstance(value, (list, dict)):
        return value
    return json.loads(value)


def _row_payload(sheet: str, row: dict) -> dict:
    payload = {
        "date": cell_date(row.get("date")),
        "type": row.get("type"),
        "narration": row.get("narration"),
    }
    if sheet == SALES_PURCHASES:
        payload.update(
            party=row.get("party"),
            invoiceNo=str(row.get("invoiceNo") or ""),
            isInterState=cell_flag(row.get("isInterState")),
            items=_cell_json(row.get("items")),
        )
    elif sheet == PAYMENTS_RECEIPTS:
        payload.update(
            account=row.get("account"),
            party=row.get("party"),
            amount=str(row.get("amount")),
        )
    elif sheet == CONTRA:
        payload.update(
            fromAccount=row.get("fromAccount"),
            toAccount=row.get("toAccount"),
            amount=str(row.get("amount")),
        )
    else:
        payload["entries"] = _cell_json(row.get("entries"))
    return payload


def _sheet_rows(worksheet):
    rows = worksheet.iter_rows(values_only=True)
    header = next(rows, None)
    if not header:
        return
    keys = [str(h).strip() if h is not None else "" for h in header]
    for values in rows:
        if all(v is None for v in values):
            continue
        yield dict(zip(keys, values))


def build_template() -> bytes:
    """The four-sheet import template with one example row each."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, (header, example) in TEMPLATE_SHEETS.items():
        sheet = workbook.create_sheet(title=name)
        sheet.append(header)
        sheet.append(example)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class ImportService:

    def __init__(self, registry, voucher_service):
        self.registry = registry
        self.voucher_service = voucher_service
        self.tax_service = TaxService(registry)

    def _store(self, vouchers: list, failed: int) -> ImportSummary:
        accepted = self.voucher_service.add_vouchers(vouchers) if vouchers else []
        failed += len(vouchers) - len(accepted)
        summary = ImportSummary(success=len(accepted), failed=failed)
        logger.info("Import finished: {} succeeded, {} failed", summary.success, summary.failed)
        return summary

    def import_json(self, content: bytes) -> ImportSummary:
        """
        Import a JSON array of voucher objects as they are.

        Anything other than an array counts as a single failure.
        """
        try:
            data = json.loads(content)
        except ValueError as e:
            logger.warning("JSON import unreadable: {}", e)
            return ImportSummary(failed=1 if content else 0)
        if not isinstance(data, list):
            return ImportSummary(failed=1)

        vouchers, failed = [], 0
        for item in data:
            if not is_voucher_like(item):
                failed += 1
                continue
            try:
                vouchers.append(VoucherAdapter.validate_python(item))
            except ValidationError:
                failed += 1
        return self._store(vouchers, failed)

    def _recompute(self, voucher):
        """Derived figures are always rebuilt from the rows' own lines."""
        if isinstance(voucher, SalesPurchaseVoucher):
            return self.tax_service.reprice(voucher)
        if isinstance(voucher, JournalVoucher):
            return journal_totals(voucher)
        return voucher

    def import_spreadsheet(self, content: bytes) -> ImportSummary:
        """
        Import vouchers from the four template sheets.

        Missing sheets are skipped. Sales/purchase lines are taxed
        at the catalogue rate of their item (0 when uncatalogued)
        using the row's own isInterState flag.
        """
        try:
            workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            logger.warning("Spreadsheet import unreadable: {}", e)
            return ImportSummary(failed=1)

        vouchers, failed = [], 0
        try:
            for sheet in TEMPLATE_SHEETS:
                if sheet not in workbook.sheetnames:
                    continue
                for row in _sheet_rows(workbook[sheet]):
                    try:
                        voucher = VoucherAdapter.validate_python(_row_payload(sheet, row))
                    except (ValueError, TypeError) as e:
                        logger.debug("Skipping {} row: {}", sheet, e)
                        failed += 1
                        continue
                    vouchers.append(self._recompute(voucher))
        finally:
            workbook.close()
        return self._store(vouchers, failed)
