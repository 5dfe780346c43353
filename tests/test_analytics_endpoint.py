import pytest
from httpx import ASGITransport, AsyncClient

from app.core.seed_data import DEFAULT_CATEGORIES

FOOD = DEFAULT_CATEGORIES[0]
TRANSPORT = DEFAULT_CATEGORIES[1]


async def _spend(ac, day, amount, category):
    r = await ac.post("/api/v1/expenses/", json={
        "date": day,
        "amount": amount,
        "category": category["id"],
        "description": "spend",
        "payment_method": "debit",
    })
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_category_breakdown_and_daily_totals(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await _spend(ac, "2023-03-01", 60, FOOD)
        await _spend(ac, "2023-03-01", 15, TRANSPORT)
        await _spend(ac, "2023-03-20", 25, TRANSPORT)

        r = await ac.get("/api/v1/analytics/category-breakdown/2023-03")
        assert r.status_code == 200
        food, transport = r.json()
        assert (food["category"], food["category_name"], food["color"]) == (FOOD["id"], FOOD["name"], FOOD["color"])
        assert food["amount"] == 60.0
        assert food["percentage"] == pytest.approx(60.0)
        assert transport["category"] == TRANSPORT["id"]
        assert transport["percentage"] == pytest.approx(40.0)

        r = await ac.get("/api/v1/analytics/daily-totals/2023-03")
        assert r.json() == [
            {"date": "2023-03-01", "total": 75.0},
            {"date": "2023-03-20", "total": 25.0},
        ]


@pytest.mark.asyncio
async def test_monthly_totals(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await _spend(ac, "2022-12-31", 10, FOOD)
        await _spend(ac, "2023-02-01", 30, FOOD)

        r = await ac.get("/api/v1/analytics/monthly-totals/2023-02", params={"count": 3})
        assert r.status_code == 200
        assert r.json() == [
            {"month": "2022-12", "total": 10.0},
            {"month": "2023-01", "total": 0.0},
            {"month": "2023-02", "total": 30.0},
        ]

        r = await ac.get("/api/v1/analytics/monthly-totals/2023-02")
        assert len(r.json()) == 6

        r = await ac.get("/api/v1/analytics/monthly-totals/2023-02", params={"count": 0})
        assert r.status_code == 422


@pytest.mark.asyncio
async def test_malformed_month_is_rejected(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        for path in ["category-breakdown/2023-3", "daily-totals/03-2023", "trend-analysis/2023-13"]:
            r = await ac.get(f"/api/v1/analytics/{path}")
            assert r.status_code in (400, 422), path


@pytest.mark.asyncio
async def test_compare_months(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await _spend(ac, "2023-02-10", 100, FOOD)
        await _spend(ac, "2023-03-10", 150, FOOD)
        await _spend(ac, "2023-03-11", 20, TRANSPORT)

        r = await ac.get("/api/v1/analytics/compare/2023-03/2023-02")
        assert r.status_code == 200
        food, transport = r.json()
        assert food["category"] == FOOD["id"]
        assert food["difference"] == 50.0
        assert food["percentage_change"] == 50.0
        assert food["previous_month"] == {"month": "2023-02", "amount": 100.0}
        assert transport["percentage_change"] == 100.0

        r = await ac.get("/api/v1/analytics/compare/2023-03")
        assert r.json() == [food, transport]


@pytest.mark.asyncio
async def test_trend_analysis(api_app):
    async with AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test") as ac:
        await _spend(ac, "2023-01-05", 100, FOOD)
        await _spend(ac, "2023-02-05", 200, FOOD)
        await _spend(ac, "2023-03-05", 300, FOOD)

        r = await ac.get("/api/v1/analytics/trend-analysis/2023-03", params={"months": 3})
        assert r.status_code == 200
        body = r.json()
        assert body["trend"] == "increasing"
        assert body["current_month_total"] == 300.0
        assert body["average_spending"] == 200.0
        assert [change["change"] for change in body["monthly_changes"]] == [100.0, 100.0]
        assert body["volatility"] == 0.0
        assert "Your spending has been increasing over the last three months." in body["insights"]

        r = await ac.get("/api/v1/analytics/trend-analysis/2023-03", params={"months": 0})
        assert r.status_code == 422
        assert "No months available" in r.json()["detail"]
