"""
Extraction service — invoice extraction and mass upload.

An InvoiceExtractor turns an invoice image or PDF into
ExtractedInvoiceData. Calls are retried with exponential
backoff; a file that still fails is marked as an error and
the rest of the batch carries on.

Extracted invoices become Purchase vouchers only when the
batch is accepted. Ids are assigned at that point, not at
extraction.
"""

import time
import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal

import httpx
from loguru import logger
from pydantic import ValidationError

from ledger_engine.config import get_settings
from ledger_engine.models.enums import UploadStatus, VoucherType
from ledger_engine.schemas.invoice import ExtractedInvoiceData, MassUploadFile
from ledger_engine.schemas.voucher import SalesPurchaseVoucher, VoucherItem
from ledger_engine.services.tax_service import TaxService

RETRIES_EXHAUSTED = "Failed to extract invoice data after multiple retries."

DATE_FORMATS = ("%Y-%m-%d", "%d-%m-%Y")


class ExtractionError(Exception):
    """Raised when an invoice cannot be turned into structured data."""


class InvoiceExtractor(ABC):
    """Interface for anything that can read an invoice file."""

    @abstractmethod
    def extract(
        self, content: bytes, mime_type: str, file_name: str = "invoice"
    ) -> ExtractedInvoiceData:
        ...


class HttpInvoiceExtractor(InvoiceExtractor):
    """
    Posts the file to an extraction endpoint and validates the
    JSON reply as ExtractedInvoiceData.
    """

    def __init__(self, url: str, timeout: float = 60.0):
        self.url = url
        self.timeout = timeout

    def extract(
        self, content: bytes, mime_type: str, file_name: str = "invoice"
    ) -> ExtractedInvoiceData:
        if not self.url:
            raise ExtractionError("Invoice extraction service is not configured")
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.post(
                    self.url,
                    files={"file": (file_name, content, mime_type)},
                )
                response.raise_for_status()
                return ExtractedInvoiceData.model_validate(response.json())
        except httpx.HTTPError as e:
            raise ExtractionError(f"Extraction request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise ExtractionError(f"Extraction returned unreadable data: {e}") from e


def extract_with_retry(
    extractor: InvoiceExtractor,
    content: bytes,
    mime_type: str,
    max_retries: int = 3,
    initial_delay: float = 1.0,
    sleep=time.sleep,
    file_name: str = "invoice",
) -> ExtractedInvoiceData:
    """
    Call the extractor up to max_retries times, doubling the
    delay after each failure.
    """
    delay = initial_delay
    for attempt in range(1, max_retries + 1):
        try:
            return extractor.extract(content, mime_type, file_name)
        except ExtractionError as e:
            logger.warning(
                "Extraction attempt {}/{} failed: {}", attempt, max_retries, e
            )
            if attempt == max_retries:
                break
            sleep(delay)
            delay *= 2
    raise ExtractionError(RETRIES_EXHAUSTED)


def normalize_date(value: str | None, fallback: date | None = None) -> str:
    """
    Accept YYYY-MM-DD or DD-MM-YYYY and return YYYY-MM-DD.

    Anything unparseable falls back to today.
    """
    text = (value or "").strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    return (fallback or date.today()).isoformat()


def voucher_from_invoice(
    data: ExtractedInvoiceData,
    tax_service: TaxService,
    default_rate: Decimal,
    narration: str | None = None,
) -> SalesPurchaseVoucher:
    """
    Build an unsaved Purchase voucher from extracted invoice data.

    The seller becomes the party. Lines take the catalogue GST
    rate of a matching stock item, else default_rate.
    """
    draft = SalesPurchaseVoucher(
        type=VoucherType.PURCHASE.value,
        date=normalize_date(data.invoice_date),
        invoice_no=data.invoice_number,
        due_date=normalize_date(data.due_date) if data.due_date else None,
        party=data.seller_name,
        items=[
            VoucherItem(name=line.item_description, qty=line.quantity, rate=line.rate)
            for line in data.line_items
        ],
        narration=narration,
    )
    return tax_service.reprice(
        draft,
        inter_state=tax_service.party_is_inter_state(data.seller_name),
        default_rate=default_rate,
    )


class MassUploadService:
    """
    Processes a batch of invoice files one at a time and turns
    the successful ones into Purchase vouchers.
    """

    def __init__(self, registry, voucher_service, extractor: InvoiceExtractor, settings=None):
        self.registry = registry
        self.voucher_service = voucher_service
        self.extractor = extractor
        self.settings = settings or get_settings()
        self.tax_service = TaxService(registry)

    def process(self, uploads: list[tuple[str, str, bytes]]) -> list[MassUploadFile]:
        """
        Extract each (file_name, mime_type, content) in order.

        Each file moves pending -> processing -> success | error.
        One failure does not stop the batch.
        """
        files = [
            MassUploadFile(id=uuid.uuid4().hex, file_name=name, mime_type=mime)
            for name, mime, _ in uploads
        ]
        for upload, (_, mime_type, content) in zip(files, uploads):
            upload.status = UploadStatus.PROCESSING
            try:
                upload.extracted_data = extract_with_retry(
                    self.extractor,
                    content,
                    mime_type,
                    max_retries=self.settings.EXTRACTION_MAX_RETRIES,
                    initial_delay=self.settings.EXTRACTION_INITIAL_DELAY,
                    file_name=upload.file_name,
                )
                upload.status = UploadStatus.SUCCESS
            except ExtractionError as e:
                upload.status = UploadStatus.ERROR
                upload.error = str(e)
                logger.error("Extraction failed for {}: {}", upload.file_name, e)

        succeeded = sum(1 for f in files if f.status == UploadStatus.SUCCESS)
        logger.info("Mass upload processed: {}/{} succeeded", succeeded, len(files))
        return files

    def build_voucher(self, upload: MassUploadFile) -> SalesPurchaseVoucher:
        return voucher_from_invoice(
            upload.extracted_data,
            self.tax_service,
            default_rate=self.settings.DEFAULT_IMPORT_GST_RATE,
            narration=f"Auto-imported from {upload.file_name}",
        )

    def accept(self, files: list[MassUploadFile]) -> list:
        """Store a voucher for every successfully extracted file."""
        drafts = [
            self.build_voucher(f)
            for f in files
            if f.status == UploadStatus.SUCCESS and f.extracted_data is not None
        ]
        return self.voucher_service.add_vouchers(drafts)
