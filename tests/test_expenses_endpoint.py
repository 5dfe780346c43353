from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.seed_data import DEFAULT_CATEGORIES

FOOD = DEFAULT_CATEGORIES[0]["id"]
TRANSPORT = DEFAULT_CATEGORIES[1]["id"]


def _expense(**overrides):
    payload = {
        "date": "2023-03-15",
        "amount": 12.5,
        "category": FOOD,
        "description": "Lunch",
        "payment_method": "credit",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_health(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        r = await ac.get("/api/v1/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_create_and_get_expense(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        r = await ac.post("/api/v1/expenses/", json=_expense(amount=12.499))
        assert r.status_code == 201
        created = r.json()
        assert Decimal(created["amount"]) == Decimal("12.50")
        assert created["payment_method"] == "credit"

        r = await ac.get(f"/api/v1/expenses/{created['id']}")
        assert r.status_code == 200
        assert r.json()["description"] == "Lunch"


@pytest.mark.asyncio
async def test_create_expense_validation(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        r = await ac.post("/api/v1/expenses/", json=_expense(amount=0))
        assert r.status_code == 422
        r = await ac.post("/api/v1/expenses/", json=_expense(payment_method="cheque"))
        assert r.status_code == 422
        r = await ac.post("/api/v1/expenses/", json=_expense(category="missing-category"))
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_list_expenses_with_filters_and_pagination(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await ac.post("/api/v1/expenses/", json=_expense(date="2023-03-01", amount=10, description="Coffee beans"))
        await ac.post("/api/v1/expenses/", json=_expense(date="2023-03-05", amount=40, category=TRANSPORT,
                                                         description="Train", payment_method="debit"))
        await ac.post("/api/v1/expenses/", json=_expense(date="2023-04-02", amount=70, description="Dinner"))

        r = await ac.get("/api/v1/expenses/", params={"start_date": "2023-03-01", "end_date": "2023-03-31"})
        body = r.json()
        assert r.status_code == 200
        assert body["pagination"]["total"] == 2
        assert [item["description"] for item in body["data"]] == ["Train", "Coffee beans"]

        r = await ac.get("/api/v1/expenses/", params={"categories": TRANSPORT})
        assert [item["description"] for item in r.json()["data"]] == ["Train"]

        r = await ac.get("/api/v1/expenses/", params={"min_amount": 20, "payment_methods": "credit"})
        assert [item["description"] for item in r.json()["data"]] == ["Dinner"]

        r = await ac.get("/api/v1/expenses/", params={"search": "coffee"})
        assert [item["description"] for item in r.json()["data"]] == ["Coffee beans"]

        r = await ac.get("/api/v1/expenses/", params={"limit": 2, "page": 2})
        body = r.json()
        assert len(body["data"]) == 1
        assert body["pagination"] == {"total": 3, "page": 2, "limit": 2, "total_pages": 2}


@pytest.mark.asyncio
async def test_update_and_delete_expense(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        created = (await ac.post("/api/v1/expenses/", json=_expense())).json()

        r = await ac.put(f"/api/v1/expenses/{created['id']}", json={"amount": 20, "category": TRANSPORT})
        assert r.status_code == 200
        assert Decimal(r.json()["amount"]) == Decimal("20")
        assert r.json()["category"] == TRANSPORT

        r = await ac.put(f"/api/v1/expenses/{created['id']}", json={"category": "nope"})
        assert r.status_code == 404

        r = await ac.delete(f"/api/v1/expenses/{created['id']}")
        assert r.status_code == 204
        r = await ac.get(f"/api/v1/expenses/{created['id']}")
        assert r.status_code == 404
        r = await ac.delete(f"/api/v1/expenses/{created['id']}")
        assert r.status_code == 404


@pytest.mark.asyncio
async def test_monthly_summary(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await ac.post("/api/v1/expenses/", json=_expense(amount=10))
        await ac.post("/api/v1/expenses/", json=_expense(amount=15))
        await ac.post("/api/v1/expenses/", json=_expense(amount=40, category=TRANSPORT))

        r = await ac.get("/api/v1/expenses/summary/2023-03")
        assert r.status_code == 200
        summary = r.json()
        assert [row["category"] for row in summary] == [TRANSPORT, FOOD]
        assert Decimal(summary[1]["total"]) == Decimal("25")
