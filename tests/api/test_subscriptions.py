"""Tests for the /api/subscriptions endpoints."""

import pytest
from fastapi.testclient import TestClient

from api import app


client = TestClient(app)


def subscribe(headers, plan="free"):
    return client.post("/api/subscriptions/subscribe", json={"plan": plan}, headers=headers)


class TestPlans:
    def test_plans_are_public(self):
        response = client.get("/api/subscriptions/plans")

        assert response.status_code == 200
        plans = {plan["name"]: plan for plan in response.json()}
        assert plans["free"]["price"] == 0
        assert plans["basic"]["price"] == 9.99
        assert plans["premium"]["monthly_quota"] == -1


class TestSubscribe:
    def test_subscribe(self, auth_headers, test_user_id):
        response = subscribe(auth_headers, "basic")

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == test_user_id
        assert data["plan"] == "basic"
        assert data["status"] == "active"
        assert data["monthly_quota"] == 1000
        assert data["quota_used"] == 0

    def test_second_subscription_rejected(self, auth_headers):
        subscribe(auth_headers)
        response = subscribe(auth_headers, "premium")

        assert response.status_code == 400
        assert response.json()["message"] == "Active subscription already exists"

    @pytest.mark.parametrize(
        "body,error",
        [
            ({"plan": "enterprise"}, "Invalid subscription plan. Valid plans are: free, basic, premium"),
            ({}, "Subscription plan is required"),
        ],
    )
    def test_invalid_plan(self, auth_headers, body, error):
        response = client.post("/api/subscriptions/subscribe", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Validation failed", "errors": [error]}

    def test_my_subscription(self, auth_headers):
        subscribe(auth_headers, "premium")
        response = client.get("/api/subscriptions/my-subscription", headers=auth_headers)
        assert response.json()["plan"] == "premium"

    def test_my_subscription_missing(self, auth_headers):
        response = client.get("/api/subscriptions/my-subscription", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "No active subscription found"


class TestChangePlan:
    def test_cancel(self, auth_headers):
        subscribe(auth_headers)
        response = client.put("/api/subscriptions/cancel", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Subscription cancelled successfully"
        assert response.json()["subscription"]["status"] == "cancelled"
        assert subscribe(auth_headers, "basic").status_code == 201

    def test_upgrade(self, auth_headers):
        subscribe(auth_headers)
        response = client.put(
            "/api/subscriptions/upgrade", json={"plan": "premium"}, headers=auth_headers
        )

        assert response.json()["message"] == "Subscription upgraded successfully"
        assert response.json()["subscription"]["monthly_quota"] == -1

    def test_downgrade_rejected(self, auth_headers):
        subscribe(auth_headers, "premium")
        response = client.put(
            "/api/subscriptions/upgrade", json={"plan": "basic"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Cannot downgrade or set same plan. Use cancel and resubscribe for downgrades."
        )


class TestUsage:
    def test_usage_and_quota(self, auth_headers):
        subscribe(auth_headers, "basic")

        usage = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        quota = client.get("/api/subscriptions/quota", headers=auth_headers).json()

        assert usage == {"quota": 1000, "used": 0, "remaining": 1000}
        assert quota == {"remaining": 1000}

    def test_unlimited(self, auth_headers):
        subscribe(auth_headers, "premium")

        usage = client.get("/api/subscriptions/usage", headers=auth_headers).json()
        assert usage["remaining"] == "unlimited"
