from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from catalog.config.settings import settings
from catalog.main import app
from catalog.services.auth import require_admin
from catalog.services.csv_importer import CSVImportError
from catalog.services.inventory_service import get_inventory_service


@pytest.fixture
def service():
    mock_service = MagicMock()
    app.dependency_overrides[get_inventory_service] = lambda: mock_service
    yield mock_service
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(service):
    app.dependency_overrides[require_admin] = lambda: None
    return TestClient(app)


def test_admin_routes_require_auth(service):
    client = TestClient(app)

    assert client.get("/api/inventory/admin").status_code == 401
    assert client.post("/api/inventory/fix-data").status_code == 401
    assert client.delete("/api/inventory/1").status_code == 401
    assert client.get("/api/check-auth").status_code == 401
    service.sanitize_categories.assert_not_called()


def test_login_cookie_grants_access(service):
    client = TestClient(app)
    service.list_items.return_value = []

    bad = client.post("/api/login", json={"username": settings.AUTH.USERNAME, "password": "wrong"})
    assert bad.status_code == 401

    good = client.post(
        "/api/login",
        json={"username": settings.AUTH.USERNAME, "password": settings.AUTH.PASSWORD}
    )
    assert good.status_code == 200
    assert client.get("/api/check-auth").status_code == 200
    assert client.get("/api/inventory/admin").json() == []

    client.post("/api/logout")
    assert client.get("/api/check-auth").status_code == 401


def test_fix_data_reports_count(admin_client, service):
    service.sanitize_categories.return_value = 3

    response = admin_client.post("/api/inventory/fix-data")

    assert response.status_code == 200
    assert response.json() == {"message": "Cleaned 3 items.", "count": 3}


def test_fix_data_failure_is_500(admin_client, service):
    service.sanitize_categories.side_effect = RuntimeError("lock timeout")

    response = admin_client.post("/api/inventory/fix-data")

    assert response.status_code == 500
    assert response.json()["detail"] == "Transaction failed."


def test_item_crud(admin_client, service):
    item = {"id": 5, "name": "Chips", "category": "Groceries > Snacks", "imageurl": None, "comment": None}
    service.create_item.return_value = item
    service.get_item.return_value = item
    service.update_item.return_value = True
    service.delete_item.return_value = False

    created = admin_client.post("/api/inventory", json={"name": "Chips", "category": "Groceries > Snacks"})
    assert created.status_code == 200
    assert created.json()["id"] == 5

    assert admin_client.get("/api/inventory/5").json()["name"] == "Chips"

    updated = admin_client.put("/api/inventory/5", json={"name": "Crisps", "category": "Groceries > Snacks"})
    assert updated.json() == {"message": "Update successful"}
    service.update_item.assert_called_once_with(
        5, {"name": "Crisps", "category": "Groceries > Snacks", "imageurl": None, "comment": None}
    )

    assert admin_client.delete("/api/inventory/5").status_code == 404


def test_get_missing_item_is_404(admin_client, service):
    service.get_item.return_value = None
    assert admin_client.get("/api/inventory/42").status_code == 404


def test_create_rejects_blank_fields(admin_client, service):
    response = admin_client.post("/api/inventory", json={"name": "", "category": "Snacks"})
    assert response.status_code == 422
    service.create_item.assert_not_called()


def test_upload_csv(admin_client, service):
    service.import_csv.return_value = 2
    content = b"name,category\nChips,Groceries > Snacks\nTea,Groceries > Drinks\n"

    response = admin_client.post(
        "/api/inventory/upload",
        files={"csvFile": ("items.csv", content, "text/csv")}
    )

    assert response.status_code == 201
    assert response.json() == {"message": "Added 2 items.", "count": 2}
    service.import_csv.assert_called_once_with(content)


def test_upload_errors(admin_client, service):
    assert admin_client.post("/api/inventory/upload").status_code == 400

    service.import_csv.side_effect = CSVImportError("CSV is empty or invalid.")
    response = admin_client.post(
        "/api/inventory/upload",
        files={"csvFile": ("items.csv", b"title\n", "text/csv")}
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "CSV is empty or invalid."
