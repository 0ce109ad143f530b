"""
Master data API endpoints.

Ledgers, ledger groups, units, stock groups, stock items and
the company profile. Listings come back sorted by name.
Duplicate names and cyclic groups are rejected with 400.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ledger_engine.models.base import get_db
from ledger_engine.models.enums import HsnStatus
from ledger_engine.schemas.invoice import HsnValidationRequest, HsnValidationResult
from ledger_engine.schemas.masters import (
    CompanyDetails,
    Ledger,
    LedgerGroupMaster,
    StockGroup,
    StockItem,
    Unit,
)
from ledger_engine.services.books_service import BooksService
from ledger_engine.services.hsn_service import HsnValidationError, validate_hsn

router = APIRouter(prefix="/masters", tags=["Masters"])


def _commit(db: Session, service: BooksService, books) -> None:
    service.save(books)
    db.commit()


# --- Ledgers ---

@router.get("/ledgers", response_model=list[Ledger])
def list_ledgers(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.ledgers


@router.post("/ledgers", response_model=Ledger, status_code=201)
def create_ledger(request: Ledger, db: Session = Depends(get_db)):
    service = BooksService(db)
    books = service.load()
    ledger = books.registry.add_ledger(request)
    if ledger is None:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Ledger '{request.name}' already exists")
    _commit(db, service, books)
    return ledger


@router.put("/ledgers/{name}", response_model=Ledger)
def replace_ledger(name: str, request: Ledger, db: Session = Depends(get_db)):
    """Replace a ledger wholesale. The name in the body must match."""
    if request.name.casefold() != name.strip().casefold():
        raise HTTPException(status_code=400, detail="Ledger name cannot be changed")
    service = BooksService(db)
    books = service.load()
    ledger = books.registry.replace_ledger(request)
    if ledger is None:
        db.rollback()
        raise HTTPException(status_code=404, detail=f"Ledger '{name}' not found")
    _commit(db, service, books)
    return ledger


# --- Ledger Groups ---

@router.get("/ledger-groups", response_model=list[LedgerGroupMaster])
def list_ledger_groups(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.ledger_groups


@router.post("/ledger-groups", response_model=LedgerGroupMaster, status_code=201)
def create_ledger_group(request: LedgerGroupMaster, db: Session = Depends(get_db)):
    """
    Create a ledger group under an existing group or Primary.

    Duplicate names, the reserved name Primary and parents that
    would close a cycle are all rejected.
    """
    service = BooksService(db)
    books = service.load()
    group = books.registry.add_ledger_group(request)
    if group is None:
        db.rollback()
        raise HTTPException(
            status_code=400,
            detail=f"Ledger group '{request.name}' under '{request.under}' was rejected",
        )
    _commit(db, service, books)
    return group


# --- Units & Stock Groups ---

@router.get("/units", response_model=list[Unit])
def list_units(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.units


@router.post("/units", response_model=Unit, status_code=201)
def create_unit(request: Unit, db: Session = Depends(get_db)):
    service = BooksService(db)
    books = service.load()
    unit = books.registry.add_unit(request)
    if unit is None:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Unit '{request.name}' already exists")
    _commit(db, service, books)
    return unit


@router.get("/stock-groups", response_model=list[StockGroup])
def list_stock_groups(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.stock_groups


@router.post("/stock-groups", response_model=StockGroup, status_code=201)
def create_stock_group(request: StockGroup, db: Session = Depends(get_db)):
    service = BooksService(db)
    books = service.load()
    group = books.registry.add_stock_group(request)
    if group is None:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Stock group '{request.name}' already exists")
    _commit(db, service, books)
    return group


# --- Stock Items ---

@router.get("/stock-items", response_model=list[StockItem])
def list_stock_items(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.stock_items


@router.post("/stock-items", response_model=StockItem, status_code=201)
def create_stock_item(request: StockItem, db: Session = Depends(get_db)):
    """
    Add a stock item after checking its HSN code.

    A rate mismatch is allowed; an unknown HSN code is not.
    """
    try:
        check = validate_hsn(request.hsn or "", request.gst_rate or 0)
    except HsnValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if check.status == HsnStatus.INVALID:
        raise HTTPException(status_code=400, detail=check.message)

    service = BooksService(db)
    books = service.load()
    item = books.registry.add_stock_item(request)
    if item is None:
        db.rollback()
        raise HTTPException(status_code=400, detail=f"Stock item '{request.name}' already exists")
    _commit(db, service, books)
    return item


@router.post("/stock-items/bulk", response_model=list[StockItem], status_code=201)
def create_stock_items(request: list[StockItem], db: Session = Depends(get_db)):
    """Add many stock items at once. Names already present are skipped."""
    service = BooksService(db)
    books = service.load()
    added = books.registry.add_stock_items(request)
    _commit(db, service, books)
    return added


@router.post("/hsn/validate", response_model=HsnValidationResult)
def check_hsn(request: HsnValidationRequest):
    try:
        return validate_hsn(request.code, request.rate)
    except HsnValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


# --- Company ---

@router.get("/company", response_model=CompanyDetails)
def get_company(db: Session = Depends(get_db)):
    return BooksService(db).load().registry.company


@router.put("/company", response_model=CompanyDetails)
def update_company(request: CompanyDetails, db: Session = Depends(get_db)):
    service = BooksService(db)
    books = service.load()
    company = books.registry.update_company(request)
    _commit(db, service, books)
    return company
