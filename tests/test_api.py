from fastapi.testclient import TestClient

from fintrack.main import app
from fintrack.models.finance import DashboardRequest
from fintrack.routers.dashboard import build_view
from fintrack.utils.metrics import DashboardView

client = TestClient(app)

payload = {
    "reference_month": "2024-03",
    "transactions": [
        {"id": 1, "date": "2024-03-01", "type": "income", "amount": "3000", "category": "salary"},
        {"id": 2, "date": "2024-03-05", "type": "expense", "amount": "800", "category": "rent"},
        {"id": 3, "date": "2024-02-11", "type": "expense", "amount": "45", "category": "food"},
    ],
    "goals": [{"id": 1, "name": "Emergency Fund", "current": "500", "target": "1000"}],
}


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_dashboard():
    response = client.post("/api/dashboard", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert body["metrics"]["income"] == 3000.0
    assert body["metrics"]["remaining"] == 1700.0
    assert body["currency"] == "USD"
    assert [item["name"] for item in body["pie_chart"]] == ["Income", "Expenses", "Savings"]
    assert [tx["id"] for tx in body["recent_transactions"]] == [2, 1]
    assert body["featured_insight"]["type"] == "savings"
    assert body["next_index"] == 1
    assert body["previous_index"] == 4
    assert body["rotation_interval_seconds"] == 10


def test_dashboard_featured_insight_follows_index():
    response = client.post("/api/dashboard", json={**payload, "insight_index": 7, "currency": "EUR"})
    body = response.json()
    assert body["insight_index"] == 2
    assert body["currency"] == "EUR"
    assert "50.0%" in body["featured_insight"]["message"]


def test_insights_endpoint_with_empty_body():
    response = client.post("/api/dashboard/insights", json={"reference_month": "2024-03"})
    assert response.status_code == 200
    insights = response.json()
    assert len(insights) == 5
    assert insights[2]["message"] == "Set your first goal to start tracking progress!"


def test_rejects_bad_reference_month():
    response = client.post("/api/dashboard", json={**payload, "reference_month": "March"})
    assert response.status_code == 422


def test_csv_report():
    response = client.post("/api/reports/monthly.csv", json=payload)
    assert response.status_code == 200
    lines = response.text.strip().splitlines()
    assert lines[0] == "date,type,category,amount,description"
    assert len(lines) == 3


def test_pdf_report():
    response = client.post("/api/reports/monthly.pdf", json=payload)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")


def test_pdf_report_with_non_latin_currency():
    response = client.post("/api/reports/monthly.pdf", json={**payload, "currency": "₹"})
    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_goal_contribution():
    goal = {"id": 1, "name": "Emergency Fund", "current": "500", "target": "1000"}
    response = client.post("/api/dashboard/goals/contribution", json={"goal": goal, "amount": "250"})
    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["progress"] == 75.0
    assert body["goal"]["current"] == "750.0"


def test_goal_contribution_skips_unparseable_amounts():
    goal = {"id": 1, "name": "Emergency Fund", "current": "500", "target": "1000"}
    for amount in ["abc", True, None]:
        response = client.post("/api/dashboard/goals/contribution", json={"goal": goal, "amount": amount})
        body = response.json()
        assert body["applied"] is False
        assert body["progress"] == 50.0
        assert body["goal"]["current"] == "500"


def test_build_view_returns_dashboard_view():
    view = build_view(DashboardRequest(**payload))
    assert isinstance(view, DashboardView)
    assert view.currency == "USD"
