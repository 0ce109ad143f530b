"""
Tests for master data endpoints.

These test status codes, camelCase payloads and rejections.
Registry rules are tested in test_registry_service.py.
"""


class TestLedgers:

    def test_list_ledgers_sorted(self, client):
        response = client.get("/masters/ledgers")
        names = [l["name"] for l in response.json()]

        assert response.status_code == 200
        assert "Local Customer" in names
        assert names == sorted(names, key=str.casefold)

    def test_ledger_payload_is_camel_case(self, client):
        ledgers = client.get("/masters/ledgers").json()
        customer = next(l for l in ledgers if l["name"] == "Local Customer")

        assert customer["registrationType"] == "Registered"

    def test_create_ledger_returns_201(self, client):
        response = client.post("/masters/ledgers", json={
            "name": "Axis Bank", "group": "Bank Accounts",
        })

        assert response.status_code == 201
        assert response.json()["name"] == "Axis Bank"
        names = [l["name"] for l in client.get("/masters/ledgers").json()]
        assert "Axis Bank" in names

    def test_duplicate_ledger_returns_400(self, client):
        response = client.post("/masters/ledgers", json={"name": "CASH", "group": "Cash-in-Hand"})

        assert response.status_code == 400

    def test_replace_ledger(self, client):
        response = client.put("/masters/ledgers/Local Customer", json={
            "name": "Local Customer", "group": "Sundry Debtors", "state": "Tamil Nadu",
        })

        assert response.status_code == 200
        assert response.json()["state"] == "Tamil Nadu"

    def test_replace_unknown_ledger_returns_404(self, client):
        response = client.put("/masters/ledgers/Ghost", json={"name": "Ghost", "group": "Suspense A/c"})

        assert response.status_code == 404


class TestLedgerGroups:

    def test_create_group(self, client):
        response = client.post("/masters/ledger-groups", json={"name": "Petty Cash", "under": "Cash-in-Hand"})

        assert response.status_code == 201

    def test_self_parent_group_returns_400(self, client):
        response = client.post("/masters/ledger-groups", json={"name": "Loop", "under": "Loop"})

        assert response.status_code == 400

    def test_duplicate_group_returns_400(self, client):
        response = client.post("/masters/ledger-groups", json={"name": "Sundry Debtors"})

        assert response.status_code == 400


class TestStockItems:

    def test_valid_hsn_accepted(self, client):
        response = client.post("/masters/stock-items", json={
            "name": "Graphics Card", "group": "Hardware", "unit": "Nos",
            "hsn": "847330", "gstRate": 28, "quantity": 4,
        })

        assert response.status_code == 201
        assert response.json()["gstRate"] in ("28", 28)

    def test_rate_mismatch_accepted(self, client):
        response = client.post("/masters/stock-items", json={
            "name": "Graphics Card", "group": "Hardware", "unit": "Nos",
            "hsn": "847330", "gstRate": 18,
        })

        assert response.status_code == 201

    def test_invalid_hsn_rejected(self, client):
        response = client.post("/masters/stock-items", json={
            "name": "Graphics Card", "group": "Hardware", "unit": "Nos",
            "hsn": "123456", "gstRate": 18,
        })

        assert response.status_code == 400
        assert "123456" in response.json()["detail"]

    def test_missing_hsn_rejected(self, client):
        response = client.post("/masters/stock-items", json={
            "name": "Graphics Card", "group": "Hardware", "unit": "Nos",
        })

        assert response.status_code == 400

    def test_bulk_add_skips_duplicates(self, client):
        response = client.post("/masters/stock-items/bulk", json=[
            {"name": "laptop", "group": "Electronics", "unit": "Nos"},
            {"name": "Webcam", "group": "Electronics", "unit": "Nos", "gstRate": 18},
        ])

        assert response.status_code == 201
        assert [i["name"] for i in response.json()] == ["Webcam"]


class TestHsnValidate:

    def test_mismatch_reported(self, client):
        response = client.post("/masters/hsn/validate", json={"code": "8528", "rate": 18})
        data = response.json()

        assert response.status_code == 200
        assert data["status"] == "mismatch"
        assert "28%" in data["message"]


class TestCompany:

    def test_get_company(self, client):
        data = client.get("/masters/company").json()

        assert data["state"] == "Tamil Nadu"

    def test_update_company(self, client):
        response = client.put("/masters/company", json={
            "name": "Accatum Machinors Pvt Ltd", "state": "Karnataka", "gstin": "29ABACA5718R1ZD",
        })

        assert response.status_code == 200
        assert client.get("/masters/company").json()["state"] == "Karnataka"
