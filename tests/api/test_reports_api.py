"""
Tests for report endpoints.

Report arithmetic is tested in the service tests; these check
routing, query parameters and error mapping.
"""

from decimal import Decimal


class TestDayBook:

    def test_day_book_window(self, client):
        response = client.get("/reports/day-book", params={"start_date": "2024-01-01", "end_date": "2024-12-31"})
        data = response.json()

        assert response.status_code == 200
        assert [r["id"] for r in data["rows"]] == ["9"]
        assert data["rows"][0]["voucherType"] == "Purchase"

    def test_bad_date_returns_422(self, client):
        assert client.get("/reports/day-book", params={"start_date": "June"}).status_code == 422


class TestLedgerStatement:

    def test_ledger_statement(self, client):
        data = client.get("/reports/ledger", params={"selection": "Rent Expense"}).json()

        assert data["selection"] == "Rent Expense"
        assert data["closingDisplay"] == "25000.00 Dr"

    def test_default_is_all_ledgers(self, client):
        data = client.get("/reports/ledger").json()

        assert data["isAllLedgers"] is True
        assert len(data["rows"]) == 9

    def test_journal_on_cash(self, client):
        client.post("/vouchers", json={
            "type": "Journal", "date": "2030-01-01",
            "entries": [
                {"ledger": "Rent Expense", "debit": 15000, "credit": 0},
                {"ledger": "Cash", "debit": 0, "credit": 15000},
            ],
        })

        data = client.get("/reports/ledger", params={"selection": "Cash", "start_date": "2030-01-01"}).json()

        assert len(data["rows"]) == 1
        assert Decimal(data["rows"][0]["credit"]) == Decimal("15000")
        assert data["rows"][0]["particulars"] == "Rent Expense"


class TestTrialBalance:

    def test_trial_balance_agrees(self, client):
        data = client.get("/reports/trial-balance").json()

        assert data["isBalanced"] is True
        assert Decimal(data["totalDebit"]) == Decimal(data["totalCredit"])


class TestStockSummary:

    def test_stock_summary(self, client):
        rows = {r["name"]: r for r in client.get("/reports/stock-summary").json()}

        assert Decimal(rows["Laptop"]["closing"]) == Decimal("13")


class TestGst:

    def test_gstr1(self, client):
        data = client.get("/reports/gst/GSTR-1").json()

        assert len(data["gstr1"]["b2b"]) == 1
        assert len(data["gstr1"]["b2c"]) == 1

    def test_gstr3b(self, client):
        data = client.get("/reports/gst/GSTR-3B").json()

        assert "gstr3B" not in data
        assert Decimal(data["gstr3b"]["taxPayable"]["igst"]) == 0

    def test_placeholder_form(self, client):
        data = client.get("/reports/gst/GSTR-10").json()

        assert data["implemented"] is False
        assert data["message"] == "This report is not yet implemented."

    def test_gstr2_keys(self, client):
        data = client.get("/reports/gst/GSTR-2B").json()

        assert len(data["gstr2"]["b2bPurchases"]) == 2

    def test_unknown_form_returns_404(self, client):
        assert client.get("/reports/gst/GSTR-99").status_code == 404


class TestDashboard:

    def test_dashboard(self, client):
        data = client.get("/reports/dashboard").json()

        assert data["companyName"] == "Accatum Machinors Pvt Ltd"
        assert Decimal(data["totalReceivables"]) == Decimal("128656")
        assert len(data["monthly"]) == 3
