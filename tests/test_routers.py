import pytest
from bs4 import BeautifulSoup
from fastapi.testclient import TestClient

from database import get_db
from main import app
from print_engine.print_config import DEFAULT_PRINT_SETTINGS
from print_engine.stylesheet import PREVIEW_STYLE_ID

INVOICE_REQUEST = {
    "document_type": "invoice",
    "document": {"title": "Invoice", "number": "INV-0042", "date": "2026-03-01"},
    "columns": [
        {"key": "desc", "header": "Description"},
        {"key": "amount", "header": "Amount", "format": "number", "align": "right"},
    ],
    "rows": [
        {"desc": "Item A", "amount": 1000},
        {"desc": "Item B", "amount": 2500},
    ],
    "totals": [
        {"label": "Subtotal", "value": 3500},
        {"label": "Total", "value": 3500, "highlight": True},
    ],
}


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "ok"


def test_get_defaults(client):
    data = client.get("/api/print-settings/defaults").json()
    assert data["settings"] == DEFAULT_PRINT_SETTINGS
    assert data["config"]["table"]["header"]["alignment"] == "center"


def test_get_settings_without_stored_values(client):
    data = client.get("/api/print-settings").json()
    assert data["settings"] == DEFAULT_PRINT_SETTINGS
    assert data["overrides"] == []


def test_update_and_read_settings(client):
    response = client.put("/api/print-settings", json={"page_direction": "rtl", "party_info_enabled": False})
    assert response.status_code == 200
    assert sorted(response.json()["updated"]) == ["page_direction", "party_info_enabled"]

    settings = client.get("/api/print-settings").json()["settings"]
    assert settings["page_direction"] == "rtl"
    assert settings["party_info_enabled"] is False


def test_update_rejects_invalid_enum(client):
    response = client.put("/api/print-settings", json={"header_alignment": "diagonal"})
    assert response.status_code == 422


def test_document_type_overrides(client):
    client.put("/api/print-settings", json={"footer_text": "Shared"})
    client.put("/api/print-settings?document_type=invoice", json={"footer_text": "Invoices"})

    data = client.get("/api/print-settings?document_type=invoice").json()
    assert data["settings"]["footer_text"] == "Invoices"
    assert data["overrides"] == ["footer_text"]

    reset = client.post("/api/print-settings/reset?document_type=invoice").json()
    assert reset["removed"] == 1
    assert client.get("/api/print-settings?document_type=invoice").json()["settings"]["footer_text"] == "Shared"


def test_invalid_document_type(client):
    assert client.get("/api/print-settings?document_type=Bad Type").status_code == 400


def test_print_html(client):
    response = client.post("/api/print/html", json=INVOICE_REQUEST)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")

    soup = BeautifulSoup(response.text, "html.parser")
    assert [td.get_text() for td in soup.select("tbody td.align-right")] == ["1,000", "2,500"]
    assert [td.get_text() for td in soup.select("tfoot td.totals-value")] == ["3,500", "3,500"]
    assert "window.print()" in soup.find("script").get_text()


def test_print_html_uses_stored_separator(client):
    client.put("/api/print-settings?document_type=invoice", json={"table_thousands_separator": "."})
    soup = BeautifulSoup(client.post("/api/print/html", json=INVOICE_REQUEST).text, "html.parser")
    assert [td.get_text() for td in soup.select("tbody td.align-right")] == ["1.000", "2.500"]


def test_unknown_formatter_is_rejected(client):
    request = dict(INVOICE_REQUEST, columns=[{"key": "desc", "header": "Description", "format": "currency"}])
    response = client.post("/api/print/html", json=request)
    assert response.status_code == 400
    assert "currency" in response.json()["detail"]


def test_preview_json(client):
    request = dict(INVOICE_REQUEST, settings={"page_direction": "rtl"})
    data = client.post("/api/print/preview", json=request).json()
    assert data["style_id"] == PREVIEW_STYLE_ID
    assert data["direction"] == "rtl"
    assert data["sections"] == ["header", "table", "footer"]
    assert data["tree"]["attrs"]["dir"] == "rtl"


def test_preview_page(client):
    request = dict(INVOICE_REQUEST, party={"name": "Acme Trading"})
    response = client.post("/api/print/preview/page", json=request)
    soup = BeautifulSoup(response.text, "html.parser")
    assert soup.find("style", id=PREVIEW_STYLE_ID) is not None
    assert soup.select_one(".print-party-value").get_text() == "Acme Trading"
    assert soup.find("script") is None


def test_statement_sections_through_the_api(client):
    request = dict(
        INVOICE_REQUEST,
        party={"name": "Acme Trading"},
        statistics=[{"label": "Balance", "value": 12500, "unit": "SAR"}],
        payment_details=[{"label": "Method", "value": "Cash"}],
        payment_details_title="Payment details",
    )
    data = client.post("/api/print/preview", json=request).json()
    assert data["sections"] == ["header", "party", "statistics", "payment_details", "table", "footer"]

    soup = BeautifulSoup(client.post("/api/print/html", json=request).text, "html.parser")
    assert soup.select_one(".print-stat-value").get_text() == "12,500"
    assert soup.select_one(".print-stat-label").get_text() == "Balance SAR"
    assert soup.select_one(".payment-value").get_text() == "Cash"


def test_unsafe_setting_override_stays_inside_the_stylesheet(client):
    request = dict(INVOICE_REQUEST, settings={"page_text_color": "red;}</style><script>alert(1)</script>"})
    html = client.post("/api/print/html", json=request).text
    assert "<script>alert(1)</script>" not in html
    assert len(BeautifulSoup(html, "html.parser").find_all("script")) == 1
