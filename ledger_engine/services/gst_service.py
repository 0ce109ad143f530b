"""
GST service — statutory return aggregations.

GSTR-1 lists outward supplies, GSTR-2/2A/2B inward supplies
from registered suppliers, and GSTR-3B the consolidated tax
liability net of input tax credit. The remaining forms in the
catalogue are not implemented and render a placeholder.
"""

from loguru import logger

from ledger_engine.models.enums import GstReturn, RegistrationType, VoucherType
from ledger_engine.schemas.reports import (
    GstInvoiceRow,
    GstReturnReport,
    Gstr1Report,
    Gstr2Report,
    Gstr3bReport,
    TaxHeads,
)
from ledger_engine.schemas.voucher import ZERO, SalesPurchaseVoucher

NOT_IMPLEMENTED = "This report is not yet implemented."

INWARD_FORMS = (GstReturn.GSTR_2, GstReturn.GSTR_2A, GstReturn.GSTR_2B)


def _invoice_row(voucher: SalesPurchaseVoucher, ledger) -> GstInvoiceRow:
    return GstInvoiceRow(
        voucher_id=voucher.id,
        invoice_no=voucher.invoice_no,
        date=voucher.date,
        party=voucher.party,
        gstin=ledger.gstin if ledger is not None else None,
        taxable_value=voucher.total_taxable_amount,
        total_tax=voucher.total_cgst + voucher.total_sgst + voucher.total_igst,
        invoice_value=voucher.total,
    )


def _is_registered(ledger) -> bool:
    return ledger is not None and ledger.registration_type == RegistrationType.REGISTERED


def _is_b2b(ledger) -> bool:
    return _is_registered(ledger) and bool(ledger.gstin)


class GstService:

    def __init__(self, registry, store):
        self.registry = registry
        self.store = store

    def _vouchers(self, voucher_type: VoucherType) -> list[SalesPurchaseVoucher]:
        return [v for v in self.store if v.type == voucher_type]

    def gstr1(self) -> Gstr1Report:
        """Sales split into B2B (registered party with GSTIN) and B2C."""
        ledgers = self.registry.ledgers_by_name()
        b2b, b2c = [], []
        for v in self._vouchers(VoucherType.SALES):
            ledger = ledgers.get(v.party)
            if _is_b2b(ledger):
                b2b.append(_invoice_row(v, ledger))
            else:
                b2c.append(_invoice_row(v, ledger))
        return Gstr1Report(b2b=b2b, b2c=b2c)

    def gstr2(self) -> Gstr2Report:
        """Purchases from registered suppliers that carry a GSTIN."""
        ledgers = self.registry.ledgers_by_name()
        rows = [
            _invoice_row(v, ledgers.get(v.party))
            for v in self._vouchers(VoucherType.PURCHASE)
            if _is_b2b(ledgers.get(v.party))
        ]
        return Gstr2Report(b2b_purchases=rows)

    def gstr3b(self) -> Gstr3bReport:
        """
        Outward tax on all sales less ITC on purchases from
        registered parties, per tax head.

        net_tax keeps negative values; tax_payable floors them at
        zero for display without carrying the excess forward.
        """
        ledgers = self.registry.ledgers_by_name()

        taxable = ZERO
        outward = TaxHeads()
        for v in self._vouchers(VoucherType.SALES):
            taxable += v.total_taxable_amount
            outward = TaxHeads(
                igst=outward.igst + v.total_igst,
                cgst=outward.cgst + v.total_cgst,
                sgst=outward.sgst + v.total_sgst,
            )

        itc = TaxHeads()
        for v in self._vouchers(VoucherType.PURCHASE):
            if not _is_registered(ledgers.get(v.party)):
                continue
            itc = TaxHeads(
                igst=itc.igst + v.total_igst,
                cgst=itc.cgst + v.total_cgst,
                sgst=itc.sgst + v.total_sgst,
            )

        net = TaxHeads(
            igst=outward.igst - itc.igst,
            cgst=outward.cgst - itc.cgst,
            sgst=outward.sgst - itc.sgst,
        )
        payable = TaxHeads(
            igst=max(ZERO, net.igst),
            cgst=max(ZERO, net.cgst),
            sgst=max(ZERO, net.sgst),
        )
        return Gstr3bReport(
            outward_taxable_value=taxable,
            outward_tax=outward,
            eligible_itc=itc,
            net_tax=net,
            tax_payable=payable,
        )

    def gst_return(self, form: str) -> GstReturnReport | None:
        """
        Build the named return. Unknown form names return None;
        known but unimplemented forms return a placeholder.
        """
        try:
            gst_form = GstReturn(form)
        except ValueError:
            logger.info("Unknown GST return requested: {}", form)
            return None

        if gst_form == GstReturn.GSTR_1:
            return GstReturnReport(form=gst_form, gstr1=self.gstr1())
        if gst_form in INWARD_FORMS:
            return GstReturnReport(form=gst_form, gstr2=self.gstr2())
        if gst_form == GstReturn.GSTR_3B:
            return GstReturnReport(form=gst_form, gstr3b=self.gstr3b())
        return GstReturnReport(form=gst_form, implemented=False, message=NOT_IMPLEMENTED)
