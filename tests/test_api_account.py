"""
API tests for the account service.

Requests go through the full FastAPI stack (routing, validation, error
handlers, middleware) with the store and upstream services replaced by
the doubles in conftest.
"""

import pytest

from account_service.shared.security.rate_limiting import limiter

API = "/api/v1"


def _create(client, owner: str = "John") -> dict:
    response = client.post(f"{API}/accounts/{owner}")
    assert response.status_code == 200
    return response.json()


class TestHealthEndpoints:
    def test_health_returns_ok(self, client) -> None:
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert data["degraded"] == []

    def test_health_lists_degraded_services(self, client, sentiment) -> None:
        sentiment.broken = True
        account = _create(client)
        client.post(f"{API}/accounts/{account['id']}/feedback", json={"text": "hi"})

        assert client.get(f"{API}/health").json()["degraded"] == ["sentiment"]

    def test_readiness(self, client) -> None:
        response = client.get(f"{API}/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestSecurityHeaders:
    def test_headers_present(self, client) -> None:
        response = client.get(f"{API}/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store"
        assert response.headers["Content-Security-Policy"] == "default-src 'self'"


class TestCreateAccountEndpoint:
    def test_create_returns_new_account(self, client) -> None:
        data = _create(client)
        assert data["owner"] == "John"
        assert data["loyalty"] == "Basic"
        assert data["balance"] == 50.0
        assert data["commissions"] == 0.0
        assert data["free"] == 0
        assert data["sentiment"] == "Unknown"
        assert data["nextCommission"] == 9.99

    def test_reserved_owner_is_bad_request(self, client, repo) -> None:
        response = client.post(f"{API}/accounts/FAIL")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid account owner"
        assert repo.list() == []

    def test_duplicate_owner_conflicts(self, client) -> None:
        _create(client)
        response = client.post(f"{API}/accounts/John")
        assert response.status_code == 409
        assert response.json()["detail"] == "Account already exists for John!"


class TestReadEndpoints:
    def test_get_by_id(self, client) -> None:
        account = _create(client)
        response = client.get(f"{API}/accounts/{account['id']}")
        assert response.status_code == 200
        assert response.json() == account

    def test_get_with_total_refreshes_loyalty(self, client) -> None:
        account = _create(client)
        response = client.get(
            f"{API}/accounts/{account['id']}", params={"total": "150000"}
        )
        data = response.json()
        assert data["loyalty"] == "Gold"
        assert data["nextCommission"] == 6.99
        assert data["balance"] == 50.0

    def test_get_unknown_is_not_found(self, client) -> None:
        response = client.get(f"{API}/accounts/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Account not found"}

    def test_get_by_owner(self, client) -> None:
        account = _create(client, "Jane")
        response = client.get(f"{API}/accounts/owner/Jane")
        assert response.status_code == 200
        assert response.json()["id"] == account["id"]
        assert client.get(f"{API}/accounts/owner/Nobody").status_code == 404

    def test_list_with_paging_and_filter(self, client) -> None:
        for owner in ["Carol", "Alice", "Bob"]:
            _create(client, owner)

        everyone = client.get(f"{API}/accounts").json()
        assert [a["owner"] for a in everyone] == ["Alice", "Bob", "Carol"]

        page = client.get(f"{API}/accounts", params={"page": 2, "page_size": 2}).json()
        assert [a["owner"] for a in page] == ["Carol"]

        chosen = client.get(
            f"{API}/accounts", params=[("owners", "Carol"), ("owners", "Bob")]
        ).json()
        assert [a["owner"] for a in chosen] == ["Bob", "Carol"]

    def test_invalid_page_size_rejected(self, client) -> None:
        response = client.get(f"{API}/accounts", params={"page_size": 0})
        assert response.status_code == 422


class TestUpdateEndpoint:
    def test_trade_settles_commission(self, client, notifier) -> None:
        account = _create(client)
        response = client.put(
            f"{API}/accounts/{account['id']}",
            params={"total": "110000"},
            headers={"X-User-Id": "admin"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["loyalty"] == "Gold"
        assert data["balance"] == pytest.approx(43.01)
        assert data["commissions"] == pytest.approx(6.99)
        assert data["nextCommission"] == pytest.approx(6.99)
        assert notifier.changes[0].user_id == "admin"

    def test_total_is_required(self, client) -> None:
        account = _create(client)
        response = client.put(f"{API}/accounts/{account['id']}")
        assert response.status_code == 422

    def test_unknown_account(self, client) -> None:
        response = client.put(f"{API}/accounts/nope", params={"total": "10"})
        assert response.status_code == 404


class TestDeleteEndpoint:
    def test_delete_returns_removed_account(self, client) -> None:
        account = _create(client)
        response = client.delete(f"{API}/accounts/{account['id']}")
        assert response.status_code == 200
        assert response.json()["owner"] == "John"
        assert client.get(f"{API}/accounts/{account['id']}").status_code == 404

    def test_delete_unknown(self, client) -> None:
        _create(client)
        assert client.delete(f"{API}/accounts/nope").status_code == 404
        assert len(client.get(f"{API}/accounts").json()) == 1


class TestFeedbackEndpoint:
    def test_angry_feedback_earns_three_trades(self, client, sentiment) -> None:
        sentiment.sentiment = "Anger"
        account = _create(client)

        response = client.post(
            f"{API}/accounts/{account['id']}/feedback",
            json={"text": "Your fees are outrageous"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["free"] == 3
        assert data["sentiment"] == "Anger"
        assert "three free trades" in data["message"]

        refreshed = client.get(f"{API}/accounts/{account['id']}").json()
        assert refreshed["free"] == 3
        assert refreshed["nextCommission"] == 0.0

    def test_empty_text_rejected(self, client) -> None:
        account = _create(client)
        response = client.post(
            f"{API}/accounts/{account['id']}/feedback", json={"text": ""}
        )
        assert response.status_code == 422

    def test_unknown_account(self, client) -> None:
        response = client.post(f"{API}/accounts/nope/feedback", json={"text": "hi"})
        assert response.status_code == 404


class TestRateLimiting:
    @pytest.fixture
    def enabled_limiter(self):
        limiter.enabled = True
        limiter.reset()
        yield limiter
        limiter.reset()
        limiter.enabled = False

    def test_feedback_is_rate_limited(self, client, enabled_limiter) -> None:
        account = _create(client)
        statuses = [
            client.post(
                f"{API}/accounts/{account['id']}/feedback", json={"text": "hello"}
            ).status_code
            for _ in range(15)
        ]
        assert 429 in statuses
        assert statuses[0] == 200

    def test_acting_user_has_own_budget(self, client, enabled_limiter) -> None:
        account = _create(client)
        url = f"{API}/accounts/{account['id']}/feedback"
        for _ in range(12):
            client.post(url, json={"text": "hello"}, headers={"X-User-Id": "alice"})

        response = client.post(url, json={"text": "hello"}, headers={"X-User-Id": "bob"})
        assert response.status_code == 200
