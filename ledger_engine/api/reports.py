"""
Report API endpoints.

Every report is recomputed from the stored vouchers on each
request; nothing here writes to the database.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ledger_engine.models.base import get_db
from ledger_engine.schemas.reports import (
    DashboardSummary,
    DayBook,
    GstReturnReport,
    LedgerStatement,
    StockSummaryRow,
    TrialBalance,
)
from ledger_engine.schemas.voucher import ISO_DATE
from ledger_engine.services.books_service import BooksService
from ledger_engine.services.report_service import ALL_LEDGERS

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/day-book", response_model=DayBook)
def day_book(
    start_date: str | None = Query(default=None, pattern=ISO_DATE),
    end_date: str | None = Query(default=None, pattern=ISO_DATE),
    db: Session = Depends(get_db),
):
    return BooksService(db).load().reports.day_book(start_date, end_date)


@router.get("/ledger", response_model=LedgerStatement)
def ledger_statement(
    selection: str = Query(default=ALL_LEDGERS, min_length=1),
    start_date: str | None = Query(default=None, pattern=ISO_DATE),
    end_date: str | None = Query(default=None, pattern=ISO_DATE),
    db: Session = Depends(get_db),
):
    """
    Statement of a ledger or ledger group with running balance.
    "All Ledgers" lists every voucher without balances.
    """
    return BooksService(db).load().reports.ledger_statement(selection, start_date, end_date)


@router.get("/trial-balance", response_model=TrialBalance)
def trial_balance(db: Session = Depends(get_db)):
    return BooksService(db).load().reports.trial_balance()


@router.get("/stock-summary", response_model=list[StockSummaryRow])
def stock_summary(db: Session = Depends(get_db)):
    return BooksService(db).load().reports.stock_summary()


@router.get("/gst/{form}", response_model=GstReturnReport)
def gst_return(form: str, db: Session = Depends(get_db)):
    """GSTR-1, GSTR-2/2A/2B and GSTR-3B; other forms return a placeholder."""
    report = BooksService(db).load().gst.gst_return(form)
    if report is None:
        raise HTTPException(status_code=404, detail=f"Unknown GST return '{form}'")
    return report


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(db: Session = Depends(get_db)):
    return BooksService(db).load().dashboard.summary()
