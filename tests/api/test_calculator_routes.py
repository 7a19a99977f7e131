"""Tests for the FastAPI incentive routes."""

import pytest
from fastapi.testclient import TestClient

from incentive_calc.api.app import app

COMPARE_URL = "/api/v1/incentives/compare"


@pytest.fixture
def client():
    return TestClient(app)


class TestCompareEndpoint:
    def test_baseline_figures(self, client, canonical_payload):
        resp = client.post(COMPARE_URL, json=canonical_payload)
        assert resp.status_code == 200
        base = resp.json()["baseline"]
        assert base["loan_amount"] == 280000
        assert base["monthly_tax"] == pytest.approx(350.0)
        assert base["monthly_mortgage_payment"] == pytest.approx(1769.79, abs=0.01)
        assert base["total_monthly"] == pytest.approx(2319.79, abs=0.01)

    def test_amounts_are_numbers(self, client, canonical_payload):
        data = client.post(COMPARE_URL, json=canonical_payload).json()
        assert isinstance(data["savings"]["monthly"], float)
        assert isinstance(data["adjusted"]["interest_rate"], float)

    def test_price_reduction(self, client, canonical_payload):
        resp = client.post(COMPARE_URL, json={
            **canonical_payload,
            "use_flex_cash": True,
            "flex_cash_amount": 10000,
            "flex_cash_target": "price_reduction",
        })
        adj = resp.json()["adjusted"]
        assert adj["home_price"] == 340000
        assert adj["loan_amount"] == 272000
        assert adj["price_reduction"] == 10000
        assert adj["flex_cash_target"] == "price_reduction"

    def test_flex_cash_buy_down(self, client, canonical_payload):
        data = client.post(COMPARE_URL, json={
            **canonical_payload,
            "use_flex_cash": True,
            "flex_cash_amount": 10000,
            "flex_cash_target": "rate_buy_down",
            "use_rate_buy_down": True,
            "rate_buy_down_amount": 1.0,
        }).json()
        assert data["adjusted"]["interest_rate"] == pytest.approx(5.5)
        assert data["adjusted"]["loan_amount"] == 280000
        assert data["savings"]["monthly"] > 0
        assert data["incentives"][0]["impact"] == "Lower interest rate (using $10,000 flex cash)"

    def test_hoa_coverage(self, client, canonical_payload):
        data = client.post(COMPARE_URL, json={
            **canonical_payload,
            "builder_pays_hoa": True,
            "hoa_payment_years": 2,
        }).json()
        assert data["adjusted"]["hoa_savings_total"] == 3600
        assert data["adjusted"]["monthly_hoa"] == 0
        assert data["savings"]["lifetime"] == pytest.approx(150 * 360 + 3600)

    def test_breakdown_only_on_request(self, client, canonical_payload):
        without = client.post(COMPARE_URL, json=canonical_payload).json()
        assert without["breakdown"] is None

        with_math = client.post(COMPARE_URL, json={**canonical_payload, "include_breakdown": True}).json()
        titles = [section["title"] for section in with_math["breakdown"]]
        assert titles == ["Without Incentives", "With Incentives", "Savings"]

    def test_no_incentives_empty_table(self, client, canonical_payload):
        data = client.post(COMPARE_URL, json=canonical_payload).json()
        assert data["incentives"] == []
        assert data["savings"]["monthly"] == 0


class TestValidation:
    def test_home_price_too_low(self, client, canonical_payload):
        resp = client.post(COMPARE_URL, json={**canonical_payload, "home_price": 40000})
        assert resp.status_code == 422

    def test_rate_buy_down_without_amount(self, client, canonical_payload):
        resp = client.post(COMPARE_URL, json={**canonical_payload, "use_rate_buy_down": True})
        assert resp.status_code == 422
        locs = [err["loc"] for err in resp.json()["detail"]]
        assert ["body", "rate_buy_down_amount"] in locs

    def test_rate_buy_down_too_large(self, client, canonical_payload):
        resp = client.post(COMPARE_URL, json={
            **canonical_payload, "use_rate_buy_down": True, "rate_buy_down_amount": 6,
        })
        assert resp.status_code == 422


class TestOtherRoutes:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_defaults(self, client):
        data = client.get("/api/v1/incentives/defaults").json()
        assert data["home_price"] == 350000
        assert data["interest_rate"] == pytest.approx(6.5)
        assert data["flex_cash_target"] == "price_reduction"
        assert data["loan_term_years"] == 30
