"""
HSN service — checks a stock item's HSN code and GST rate
against the official rate table.
"""

from decimal import Decimal

from loguru import logger

from ledger_engine.models.enums import HsnStatus
from ledger_engine.schemas.invoice import HsnValidationResult


class HsnValidationError(Exception):
    """Raised when an HSN code cannot be checked at all."""


# Official GST rate (percent) per HSN/SAC code.
HSN_MASTER: dict[str, Decimal] = {
    "8471": Decimal("18"),
    "8473": Decimal("28"),
    "8528": Decimal("28"),
    "8479": Decimal("18"),
    "8461": Decimal("18"),
    "847130": Decimal("18"),
    "847160": Decimal("18"),
    "847170": Decimal("18"),
    "847330": Decimal("28"),
    "852380": Decimal("18"),
    "852852": Decimal("28"),
    "9983": Decimal("18"),  # IT services
}


def validate_hsn(code: str, rate: Decimal) -> HsnValidationResult:
    """
    Classify an HSN code and declared rate as valid, mismatch
    (known code, different rate) or invalid (unknown code).

    Raises HsnValidationError for a blank code.
    """
    hsn = (code or "").strip()
    if not hsn:
        raise HsnValidationError("HSN code is required")

    correct_rate = HSN_MASTER.get(hsn)
    if correct_rate is None:
        logger.info("HSN {} not found", hsn)
        return HsnValidationResult(
            status=HsnStatus.INVALID,
            message=f"HSN code {hsn} not found or is invalid.",
        )

    if Decimal(rate) == correct_rate:
        return HsnValidationResult(
            status=HsnStatus.VALID,
            message=f"HSN is valid. Correct GST Rate: {correct_rate}%",
            correct_rate=correct_rate,
        )
    return HsnValidationResult(
        status=HsnStatus.MISMATCH,
        message=f"Rate Mismatch! Official rate for {hsn} is {correct_rate}%.",
        correct_rate=correct_rate,
    )
