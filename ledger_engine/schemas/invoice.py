"""
Schemas for invoice extraction and mass upload.

ExtractedInvoiceData is what the extraction service returns for
one invoice image or PDF. It is turned into a Purchase voucher
only when the batch is accepted into the books.
"""

from decimal import Decimal

from pydantic import Field

from ledger_engine.models.enums import HsnStatus, UploadStatus
from ledger_engine.schemas.common import CamelModel
from ledger_engine.schemas.voucher import ZERO, Voucher


class ExtractedLineItem(CamelModel):
    item_description: str = ""
    hsn_code: str = ""
    quantity: Decimal = ZERO
    rate: Decimal = ZERO


class ExtractedInvoiceData(CamelModel):
    seller_name: str = ""
    invoice_number: str = ""
    invoice_date: str = ""  # YYYY-MM-DD
    due_date: str | None = None
    subtotal: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    total_amount: Decimal = ZERO
    line_items: list[ExtractedLineItem] = Field(default_factory=list)


class MassUploadFile(CamelModel):
    """Per-file status in a mass upload batch."""
    id: str
    file_name: str
    mime_type: str
    status: UploadStatus = UploadStatus.PENDING
    extracted_data: ExtractedInvoiceData | None = None
    error: str | None = None


class MassUploadResponse(CamelModel):
    files: list[MassUploadFile]
    vouchers: list[Voucher]


class ImportSummary(CamelModel):
    """Outcome of a bulk voucher import."""
    success: int = 0
    failed: int = 0


class HsnValidationRequest(CamelModel):
    code: str = Field(min_length=1)
    rate: Decimal = Field(ge=0, le=100)


class HsnValidationResult(CamelModel):
    status: HsnStatus
    message: str
    correct_rate: Decimal | None = None
