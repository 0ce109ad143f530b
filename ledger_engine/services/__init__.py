"""Business logic services."""

from ledger_engine.services.registry_service import EntityRegistry
from ledger_engine.services.tax_service import TaxService
from ledger_engine.services.ledger_service import LedgerService, impact
from ledger_engine.services.voucher_service import VoucherService, VoucherStore
from ledger_engine.services.report_service import ReportService
from ledger_engine.services.gst_service import GstService
from ledger_engine.services.dashboard_service import DashboardService
from ledger_engine.services.hsn_service import HsnValidationError, validate_hsn
from ledger_engine.services.extraction_service import (
    ExtractionError,
    HttpInvoiceExtractor,
    InvoiceExtractor,
    MassUploadService,
)
from ledger_engine.services.import_service import ImportService
from ledger_engine.services.persistence_service import CollectionStore
from ledger_engine.services.books_service import Books, BooksService

__all__ = [
    "EntityRegistry",
    "TaxService",
    "LedgerService",
    "impact",
    "VoucherService",
    "VoucherStore",
    "ReportService",
    "GstService",
    "DashboardService",
    "HsnValidationError",
    "validate_hsn",
    "ExtractionError",
    "HttpInvoiceExtractor",
    "InvoiceExtractor",
    "MassUploadService",
    "ImportService",
    "CollectionStore",
    "Books",
    "BooksService",
]
