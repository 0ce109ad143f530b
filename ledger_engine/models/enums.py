"""
Shared enumerations.

String enums compare equal to their values, so a voucher
loaded from JSON with type "Sales" matches VoucherType.SALES.
"""

import enum


class VoucherType(str, enum.Enum):
    """The six kinds of voucher the books record."""
    PURCHASE = "Purchase"
    SALES = "Sales"
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    CONTRA = "Contra"
    JOURNAL = "Journal"


class RegistrationType(str, enum.Enum):
    """GST registration status of a party ledger."""
    REGISTERED = "Registered"
    UNREGISTERED = "Unregistered"
    COMPOSITION = "Composition"


class SystemLedger(str, enum.Enum):
    """
    Ledgers posted to implicitly by sales and purchase vouchers.

    They are injected into every registry so that reports can
    reference them without the user creating them first.
    """
    SALES = "Sales"
    PURCHASES = "Purchases"
    CGST = "CGST"
    SGST = "SGST"
    IGST = "IGST"


class BalanceSide(str, enum.Enum):
    """Suffix used when displaying a running balance."""
    DEBIT = "Dr"
    CREDIT = "Cr"


class GstReturn(str, enum.Enum):
    """Every GST return form the reports menu offers."""
    GSTR_1 = "GSTR-1"
    GSTR_2 = "GSTR-2"
    GSTR_2A = "GSTR-2A"
    GSTR_2B = "GSTR-2B"
    GSTR_3 = "GSTR-3"
    GSTR_3A = "GSTR-3A"
    GSTR_3B = "GSTR-3B"
    GSTR_4 = "GSTR-4"
    GSTR_5 = "GSTR-5"
    GSTR_5A = "GSTR-5A"
    GSTR_6 = "GSTR-6"
    GSTR_7 = "GSTR-7"
    GSTR_8 = "GSTR-8"
    GSTR_9 = "GSTR-9"
    GSTR_9A = "GSTR-9A"
    GSTR_9C = "GSTR-9C"
    GSTR_10 = "GSTR-10"
    GSTR_10A = "GSTR-10A"


class HsnStatus(str, enum.Enum):
    VALID = "valid"
    INVALID = "invalid"
    MISMATCH = "mismatch"


class UploadStatus(str, enum.Enum):
    """Lifecycle of one file in a mass invoice upload."""
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    ERROR = "error"


class Collection(str, enum.Enum):
    """Named collections held by the persistence store."""
    COMPANY_DETAILS = "companyDetails"
    LEDGERS = "ledgers"
    LEDGER_GROUPS = "ledgerGroups"
    UNITS = "units"
    STOCK_GROUPS = "stockGroups"
    STOCK_ITEMS = "stockItems"
    VOUCHERS = "vouchers"
