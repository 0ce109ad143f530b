"""
Books service — loads and saves the whole set of books.

A Books object is an in-memory snapshot: the entity registry,
the voucher store and the services that operate on them. The
API loads one per request, works on it, and saves it back in
the same database session.
"""

from loguru import logger
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.models.enums import Collection
from ledger_engine.schemas.masters import (
    CompanyDetails,
    Ledger,
    LedgerGroupMaster,
    StockGroup,
    StockItem,
    Unit,
)
from ledger_engine.schemas.voucher import VoucherListAdapter
from ledger_engine.seed import sample_registry, sample_vouchers
from ledger_engine.services.dashboard_service import DashboardService
from ledger_engine.services.gst_service import GstService
from ledger_engine.services.import_service import ImportService
from ledger_engine.services.persistence_service import CollectionStore
from ledger_engine.services.registry_service import EntityRegistry
from ledger_engine.services.report_service import ReportService
from ledger_engine.services.voucher_service import VoucherService, VoucherStore

# Collection name -> (registry attribute, schema)
MASTER_COLLECTIONS = {
    Collection.LEDGERS: ("ledgers", Ledger),
    Collection.LEDGER_GROUPS: ("ledger_groups", LedgerGroupMaster),
    Collection.UNITS: ("units", Unit),
    Collection.STOCK_GROUPS: ("stock_groups", StockGroup),
    Collection.STOCK_ITEMS: ("stock_items", StockItem),
}


def _dump(model) -> dict:
    return model.model_dump(mode="json", by_alias=True)


class Books:
    """One company's registry and vouchers, with their services."""

    def __init__(self, registry: EntityRegistry, store: VoucherStore):
        self.registry = registry
        self.store = store
        self.vouchers = VoucherService(registry, store)
        self.reports = ReportService(registry, store)
        self.gst = GstService(registry, store)
        self.dashboard = DashboardService(registry, store)
        self.imports = ImportService(registry, self.vouchers)


def sample_books() -> Books:
    registry = sample_registry()
    return Books(registry, VoucherStore(sample_vouchers(registry)))


class BooksService:

    def __init__(self, db: Session, settings=None):
        self.db = db
        self.collections = CollectionStore(db)
        self.settings = settings or get_settings()

    def load(self) -> Books:
        """
        Read every collection into a Books snapshot.

        An empty database is seeded with the sample books when
        SEED_SAMPLE_DATA is on, and stays empty otherwise.
        """
        if self.collections.is_empty():
            if self.settings.SEED_SAMPLE_DATA:
                logger.info("Empty database, seeding sample books")
                books = sample_books()
                self.save(books)
                return books
            return Books(EntityRegistry(), VoucherStore())

        company_rows = self.collections.load(Collection.COMPANY_DETAILS)
        company = (
            CompanyDetails.model_validate(company_rows[0])
            if company_rows else CompanyDetails()
        )
        masters = {
            attribute: [schema.model_validate(r) for r in self.collections.load(collection)]
            for collection, (attribute, schema) in MASTER_COLLECTIONS.items()
        }
        registry = EntityRegistry(company=company, **masters)
        vouchers = VoucherListAdapter.validate_python(
            self.collections.load(Collection.VOUCHERS)
        )
        return Books(registry, VoucherStore(vouchers))

    def save(self, books: Books) -> None:
        """Overwrite every collection with the snapshot's contents."""
        registry = books.registry
        self.collections.save(Collection.COMPANY_DETAILS, [_dump(registry.company)])
        for collection, (attribute, _) in MASTER_COLLECTIONS.items():
            self.collections.save(
                collection, [_dump(m) for m in getattr(registry, attribute)]
            )
        self.collections.save(Collection.VOUCHERS, [_dump(v) for v in books.store])
