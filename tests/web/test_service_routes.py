"""Tests for the health, override server and credit union proxy endpoints."""

from fastapi.testclient import TestClient

from leadscope.core.config import LeadscopeConfig
from leadscope.core.models.institution import SourceSystem
from leadscope.web.app import create_app

from support import StaticAdapter, failing
from web_support import CREDIT_UNIONS, build_app_collaborators


def test_health_reports_lead_state() -> None:
    with TestClient(create_app(**build_app_collaborators())) as client:
        before = client.get("/health").json()["data"]
        client.get("/api/leads")
        after = client.get("/health").json()["data"]

    assert before["status"] == "healthy"
    assert before["components"]["leads"] == "not_loaded"
    assert after["components"]["leads"] == "healthy"


def test_override_server_round_trip() -> None:
    with TestClient(create_app(**build_app_collaborators())) as client:
        assert client.get("/overrides").json() == {}

        first = client.put("/overrides/cu_1", json={"contact": "Ada", "status": "new"})
        second = client.put("/overrides/cu_1", json={"status": "won"})

        assert first.status_code == 204
        assert second.status_code == 204
        assert client.get("/overrides").json() == {"cu_1": {"contact": "Ada", "status": "won"}}


def test_override_server_rejects_invalid_fields() -> None:
    with TestClient(create_app(**build_app_collaborators())) as client:
        response = client.put("/overrides/cu_1", json={"status": "maybe"})

    assert response.status_code == 422
    assert response.json()["details"]["error_code"] == "VALIDATION_ERROR"


def test_proxy_caches_live_data() -> None:
    tier = StaticAdapter("ncua:9k6a-5st2", SourceSystem.NCUA, CREDIT_UNIONS)
    with TestClient(create_app(**build_app_collaborators(proxy_tier=tier))) as client:
        first = client.get("/api/ncua/credit-unions").json()
        second = client.get("/api/ncua/credit-unions").json()
        health = client.get("/health").json()["data"]

    assert first["source"] == "ncua:9k6a-5st2"
    assert second["source"] == "cache"
    assert second["data"] == first["data"]
    assert len(tier.calls) == 1
    assert health["components"]["proxy_cache"] == "1 entries"


def test_proxy_does_not_cache_fallback_data() -> None:
    tier = failing("ncua:9k6a-5st2", SourceSystem.NCUA)
    with TestClient(create_app(**build_app_collaborators(proxy_tier=tier))) as client:
        first = client.get("/api/ncua/credit-unions").json()
        second = client.get("/api/ncua/credit-unions").json()

    assert first["source"] == "embedded-sample"
    assert second["source"] == "embedded-sample"
    assert len(tier.calls) == 2
    assert first["data"]


def test_proxy_cache_can_be_disabled() -> None:
    config = LeadscopeConfig()
    config.cache.enabled = False
    tier = StaticAdapter("ncua:9k6a-5st2", SourceSystem.NCUA, CREDIT_UNIONS)
    with TestClient(create_app(**build_app_collaborators(config, proxy_tier=tier))) as client:
        client.get("/api/ncua/credit-unions")
        second = client.get("/api/ncua/credit-unions").json()

    assert second["source"] == "ncua:9k6a-5st2"
    assert len(tier.calls) == 2
