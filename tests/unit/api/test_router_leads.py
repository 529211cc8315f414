"""Tests for the lead endpoints."""

import logging

import jwt
import pytest
from httpx import AsyncClient

from leadtrack.core.settings import AuthSettings
from leadtrack.crypto.session import SessionTokenManager

LEAD = {
    "client": "Acme",
    "title": "Website rebuild",
    "date": "2026-03-01",
    "value": 12000.5,
    "likelihood": 70,
    "status": "new",
}


async def _sign_up(client: AsyncClient, email: str) -> dict[str, str]:
    """Register and log in a user, returning auth headers."""
    await client.post(
        "/api/auth/register",
        json={"name": email.split("@")[0], "email": email, "password": "pw"},
    )
    login = await client.post(
        "/api/auth/login", json={"email": email, "password": "pw"}
    )
    return {"Authorization": f"Bearer {login.json()['token']}"}


def _notifications(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [
        r.getMessage() for r in caplog.records if r.name == "leadtrack.notify.stubs"
    ]


@pytest.fixture
async def alice(client: AsyncClient) -> dict[str, str]:
    return await _sign_up(client, "alice@example.com")


@pytest.fixture
async def bob(client: AsyncClient) -> dict[str, str]:
    return await _sign_up(client, "bob@example.com")


class TestSessionGuard:
    """Session token checks on the lead routes."""

    async def test_missing_token_is_401(self, client: AsyncClient) -> None:
        resp = await client.get("/api/leads")
        assert resp.status_code == 401

    async def test_garbage_token_is_403(self, client: AsyncClient) -> None:
        resp = await client.get(
            "/api/leads", headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 403

    async def test_foreign_secret_is_403(self, client: AsyncClient) -> None:
        token = SessionTokenManager(
            "some-other-secret-that-is-long-enough-for-hs256"
        ).create_token("u-1", "Mallory")
        resp = await client.get(
            "/api/leads", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 403

    async def test_token_without_id_is_403(self, client: AsyncClient) -> None:
        token = jwt.encode(
            {"name": "No Id"}, AuthSettings().jwt_secret, algorithm="HS256"
        )
        resp = await client.get(
            "/api/leads", headers={"Authorization": f"Bearer {token}"}
        )
        assert resp.status_code == 403


class TestCreateLead:
    """POST /api/leads."""

    async def test_creates_and_lists(
        self, client: AsyncClient, alice: dict[str, str]
    ) -> None:
        resp = await client.post("/api/leads", json=LEAD, headers=alice)

        assert resp.status_code == 201
        created = resp.json()
        assert created["client"] == "Acme"
        assert created["value"] == 12000.5
        assert created["date"] == "2026-03-01"

        listed = await client.get("/api/leads", headers=alice)
        assert [lead["id"] for lead in listed.json()] == [created["id"]]

    async def test_sends_new_lead_notifications(
        self,
        client: AsyncClient,
        alice: dict[str, str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.INFO, logger="leadtrack.notify.stubs"):
            await client.post("/api/leads", json=LEAD, headers=alice)

        messages = _notifications(caplog)
        assert (
            "[Teams] Notification: New Opportunity Identified for client Acme"
            in messages
        )

    async def test_likelihood_out_of_range_is_422(
        self, client: AsyncClient, alice: dict[str, str]
    ) -> None:
        resp = await client.post(
            "/api/leads", json={**LEAD, "likelihood": 150}, headers=alice
        )
        assert resp.status_code == 422

    async def test_leads_are_private(
        self, client: AsyncClient, alice: dict[str, str], bob: dict[str, str]
    ) -> None:
        await client.post("/api/leads", json=LEAD, headers=alice)

        resp = await client.get("/api/leads", headers=bob)
        assert resp.json() == []


    async def test_store_failure_is_json_500(self, client: AsyncClient) -> None:
        # A session for a user that was never stored trips the owner foreign key.
        token = SessionTokenManager(AuthSettings().jwt_secret).create_token(
            "ghost", "Ghost"
        )
        headers = {"Authorization": f"Bearer {token}"}

        resp = await client.post("/api/leads", json=LEAD, headers=headers)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Database error"}

        follow_up = await client.get("/api/leads", headers=headers)
        assert follow_up.status_code == 200
        assert follow_up.json() == []


class TestUpdateLead:
    """PUT /api/leads/{id}."""

    async def test_updates_owned_lead(
        self, client: AsyncClient, alice: dict[str, str]
    ) -> None:
        lead = (await client.post("/api/leads", json=LEAD, headers=alice)).json()

        resp = await client.put(
            f"/api/leads/{lead['id']}",
            json={**LEAD, "status": "won", "likelihood": 100},
            headers=alice,
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "won"
        assert resp.json()["id"] == lead["id"]

    async def test_missing_lead_is_404(
        self, client: AsyncClient, alice: dict[str, str]
    ) -> None:
        resp = await client.put("/api/leads/nope", json=LEAD, headers=alice)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Lead not found"}

    async def test_other_users_lead_is_403(
        self, client: AsyncClient, alice: dict[str, str], bob: dict[str, str]
    ) -> None:
        lead = (await client.post("/api/leads", json=LEAD, headers=alice)).json()

        resp = await client.put(
            f"/api/leads/{lead['id']}", json={**LEAD, "status": "lost"}, headers=bob
        )
        assert resp.status_code == 403
        assert resp.json() == {"error": "Unauthorized"}

    async def test_notifies_only_on_status_change(
        self,
        client: AsyncClient,
        alice: dict[str, str],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        lead = (await client.post("/api/leads", json=LEAD, headers=alice)).json()
        url = f"/api/leads/{lead['id']}"

        with caplog.at_level(logging.INFO, logger="leadtrack.notify.stubs"):
            await client.put(url, json={**LEAD, "title": "Renamed"}, headers=alice)
            assert _notifications(caplog) == []
            await client.put(url, json={**LEAD, "status": "won"}, headers=alice)

        messages = _notifications(caplog)
        assert messages == [
            "[Teams] Notification: Status Changed to won for client Acme",
            "[Email] Sending email to team: Status Changed to won for client Acme",
        ]


class TestSummary:
    """GET /api/leads/summary."""

    async def test_summary_for_caller(
        self, client: AsyncClient, alice: dict[str, str], bob: dict[str, str]
    ) -> None:
        await client.post("/api/leads", json=LEAD, headers=alice)
        await client.post(
            "/api/leads",
            json={**LEAD, "client": "Globex", "value": 500, "status": "won"},
            headers=alice,
        )
        await client.post("/api/leads", json=LEAD, headers=bob)

        resp = await client.get("/api/leads/summary", headers=alice)
        assert resp.status_code == 200
        body = resp.json()
        assert body["total_leads"] == 2
        assert body["active_value"] == 12000.5
        assert body["win_rate"] == 100
        assert body["top_clients"][0] == {"client": "Acme", "value": 12000.5}

    async def test_summary_requires_session(self, client: AsyncClient) -> None:
        resp = await client.get("/api/leads/summary")
        assert resp.status_code == 401
