"""
Voucher API endpoints.

Vouchers are created, edited in place and re-assigned to other
parties; there is no delete. Bulk entry comes through JSON or
spreadsheet import and through invoice mass upload.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from sqlalchemy.orm import Session

from ledger_engine.config import get_settings
from ledger_engine.models.base import get_db
from ledger_engine.models.enums import VoucherType
from ledger_engine.schemas.invoice import ImportSummary, MassUploadResponse
from ledger_engine.schemas.voucher import PartyChange, SalesPurchaseVoucher, Voucher
from ledger_engine.services.books_service import BooksService
from ledger_engine.services.extraction_service import (
    ExtractionError,
    HttpInvoiceExtractor,
    InvoiceExtractor,
    MassUploadService,
    extract_with_retry,
    voucher_from_invoice,
)
from ledger_engine.services.import_service import TEMPLATE_FILENAME, build_template
from ledger_engine.services.tax_service import TaxService

router = APIRouter(prefix="/vouchers", tags=["Vouchers"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_extractor() -> InvoiceExtractor:
    """Invoice extractor used by upload endpoints. Overridden in tests."""
    settings = get_settings()
    return HttpInvoiceExtractor(settings.EXTRACTION_URL, timeout=settings.EXTRACTION_TIMEOUT)


# --- CRUD ---

@router.get("", response_model=list[Voucher])
def list_vouchers(
    voucher_type: VoucherType | None = None,
    db: Session = Depends(get_db),
):
    """All vouchers, newest first, optionally of one type."""
    books = BooksService(db).load()
    if voucher_type is None:
        return books.store.all()
    return books.vouchers.by_type(voucher_type)


@router.post("", response_model=Voucher, status_code=201)
def create_voucher(request: Voucher, db: Session = Depends(get_db)):
    """
    Record a new voucher.

    Sales and purchase figures are recomputed from the stock
    catalogue and the party's state. Unbalanced journals are
    rejected.
    """
    service = BooksService(db)
    books = service.load()
    voucher = books.vouchers.create_voucher(request)
    if voucher is None:
        db.rollback()
        raise HTTPException(status_code=400, detail="Journal debits and credits must be equal and non-zero")
    service.save(books)
    db.commit()
    return voucher


@router.get("/{voucher_id}", response_model=Voucher)
def get_voucher(voucher_id: str, db: Session = Depends(get_db)):
    voucher = BooksService(db).load().store.get(voucher_id)
    if voucher is None:
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")
    return voucher


@router.put("/{voucher_id}", response_model=Voucher)
def update_voucher(voucher_id: str, request: Voucher, db: Session = Depends(get_db)):
    """Replace a voucher, keeping its id."""
    service = BooksService(db)
    books = service.load()
    if books.store.get(voucher_id) is None:
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")

    voucher = books.vouchers.update_voucher(request.model_copy(update={"id": voucher_id}))
    if voucher is None:
        db.rollback()
        raise HTTPException(status_code=400, detail="Journal debits and credits must be equal and non-zero")
    service.save(books)
    db.commit()
    return voucher


@router.patch("/{voucher_id}/party", response_model=Voucher)
def change_party(voucher_id: str, request: PartyChange, db: Session = Depends(get_db)):
    """
    Move a sales or purchase voucher to another party.

    Taxes are recomputed when the move changes whether the
    supply is inter-state.
    """
    service = BooksService(db)
    books = service.load()
    existing = books.store.get(voucher_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Voucher {voucher_id} not found")
    if not isinstance(existing, SalesPurchaseVoucher):
        raise HTTPException(status_code=400, detail=f"{existing.type} vouchers have no party to change")

    voucher = books.vouchers.change_party(voucher_id, request.party)
    service.save(books)
    db.commit()
    return voucher


# --- Bulk Import ---

@router.post("/import/json", response_model=ImportSummary)
def import_json(file: UploadFile = File(...), db: Session = Depends(get_db)):
    content = file.file.read()
    service = BooksService(db)
    books = service.load()
    summary = books.imports.import_json(content)
    service.save(books)
    db.commit()
    return summary


@router.post("/import/spreadsheet", response_model=ImportSummary)
def import_spreadsheet(file: UploadFile = File(...), db: Session = Depends(get_db)):
    content = file.file.read()
    service = BooksService(db)
    books = service.load()
    summary = books.imports.import_spreadsheet(content)
    service.save(books)
    db.commit()
    return summary


@router.get("/import/template")
def download_template():
    return Response(
        content=build_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


# --- Invoice Extraction ---

@router.post("/extract", response_model=SalesPurchaseVoucher)
def extract_invoice(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    extractor: InvoiceExtractor = Depends(get_extractor),
):
    """
    Read one invoice and return an unsaved Purchase voucher
    to review before posting it.
    """
    content = file.file.read()
    settings = get_settings()
    try:
        data = extract_with_retry(
            extractor,
            content,
            file.content_type or "application/octet-stream",
            max_retries=settings.EXTRACTION_MAX_RETRIES,
            initial_delay=settings.EXTRACTION_INITIAL_DELAY,
            file_name=file.filename or "invoice",
        )
    except ExtractionError as e:
        raise HTTPException(status_code=502, detail=f"Invoice extraction failed: {e}")

    books = BooksService(db).load()
    return voucher_from_invoice(
        data,
        TaxService(books.registry),
        default_rate=settings.DEFAULT_IMPORT_GST_RATE,
    )


@router.post("/mass-upload", response_model=MassUploadResponse)
def mass_upload(
    files: list[UploadFile] = File(...),
    db: Session = Depends(get_db),
    extractor: InvoiceExtractor = Depends(get_extractor),
):
    """
    Extract a batch of invoices one by one and post a Purchase
    voucher for each file that succeeds. Failed files are
    reported with their error and do not stop the batch.
    """
    uploads = [
        (f.filename or "invoice", f.content_type or "application/octet-stream", f.file.read())
        for f in files
    ]
    service = BooksService(db)
    books = service.load()
    mass_upload_service = MassUploadService(books.registry, books.vouchers, extractor)
    results = mass_upload_service.process(uploads)
    vouchers = mass_upload_service.accept(results)
    service.save(books)
    db.commit()
    return MassUploadResponse(files=results, vouchers=vouchers)
