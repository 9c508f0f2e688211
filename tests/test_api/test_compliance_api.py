"""HTTP surface of the compliance engine.

  POST /api/compliance/check            shipment evaluation
  GET  /api/compliance/countries        supported countries
  GET  /api/compliance/countries/{code} full regulation profile
"""

from __future__ import annotations

import logging
import time

import pytest

US_TO_UK = {
    "origin_address": "New York, US",
    "destination_address": "London, UK",
    "item_description": "cotton t-shirts",
    "value": 1000,
    "weight": 10,
}


class TestCheck:
    def test_international_check(self, client):
        response = client.post("/api/compliance/check", json=US_TO_UK)
        assert response.status_code == 200
        body = response.json()
        assert body["origin_country"] == "US"
        assert body["destination_country"] == "UK"
        assert body["shipment_scope"] == "international"
        assert body["import_tax"] == pytest.approx(200.0)
        assert body["total_additional_costs"] == pytest.approx(405.0)
        assert body["errors"] == []
        assert "HS Code is required for international shipments. Please generate one." in body["warnings"]

    def test_blocked_domestic_check(self, client):
        payload = {
            **US_TO_UK,
            "destination_address": "Los Angeles, US",
            "item_description": "assault weapon parts",
        }
        body = client.post("/api/compliance/check", json=payload).json()
        assert body["shipment_scope"] == "domestic"
        assert body["errors"] == ["weapons cannot be shipped domestically"]
        assert body["total_additional_costs"] == 0

    def test_missing_field_is_normalized(self, client):
        response = client.post("/api/compliance/check", json={"origin_address": "New York, US"})
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert {"request.destination_address"} <= {field["path"] for field in body["fields"]}

    def test_unknown_field_is_rejected(self, client):
        response = client.post("/api/compliance/check", json={**US_TO_UK, "currency": "USD"})
        assert response.status_code == 422
        assert response.json()["fields"][0]["path"] == "request.currency"


class TestCountries:
    def test_list(self, client):
        response = client.get("/api/compliance/countries")
        assert response.status_code == 200
        body = response.json()
        assert len(body) == 29
        assert body[0] == {
            "code": "US",
            "name": "United States",
            "requires_pre_inspection": False,
            "certificate_types": ["FDA", "USDA", "EPA"],
        }

    def test_detail(self, client):
        response = client.get("/api/compliance/countries/cn")
        assert response.status_code == 200
        body = response.json()
        assert body["code"] == "CN"
        assert body["tax_rates"] == {"export": 13.0, "import": 13.0, "duty": 10.0}
        assert body["requires_pre_inspection"] is True
        assert "electronics" in body["restricted_item_categories"]

    def test_unknown_code(self, client):
        response = client.get("/api/compliance/countries/zz")
        assert response.status_code == 404
        assert response.json()["detail"] == {"message": "Unknown country code", "code": "ZZ"}


class TestSecurity:
    def test_missing_and_invalid_keys(self, client):
        missing = client.post("/api/compliance/check", json=US_TO_UK, headers={"X-API-Key": ""})
        assert missing.status_code == 401
        assert missing.json()["detail"]["message"] == "Missing API key"

        invalid = client.get("/api/compliance/countries", headers={"X-API-Key": "nope"})
        assert invalid.status_code == 401
        assert invalid.json()["detail"]["message"] == "Invalid API key"

    def test_default_dev_key(self, client, monkeypatch):
        monkeypatch.delenv("FREIGHTCHECK_API_KEYS")
        response = client.get("/api/compliance/countries", headers={"X-API-Key": "dev-key"})
        assert response.status_code == 200

    def test_rate_limiting(self, client, monkeypatch):
        from freightcheck.api import security as security_module

        security_module.set_rate_limit(2, window_seconds=60)
        start = time.time()
        monkeypatch.setattr(security_module.time, "time", lambda: start)

        assert client.get("/api/compliance/countries").status_code == 200
        assert client.get("/api/compliance/countries").status_code == 200
        burst = client.get("/api/compliance/countries")
        assert burst.status_code == 429
        assert burst.json()["detail"]["limit"] == 2

        other_route = client.get("/api/compliance/countries/us")
        assert other_route.status_code == 200
        other_key = client.get("/api/compliance/countries", headers={"X-API-Key": "second-key"})
        assert other_key.status_code == 200

        monkeypatch.setattr(security_module.time, "time", lambda: start + 61)
        assert client.get("/api/compliance/countries").status_code == 200

    def test_distinct_codes_share_one_bucket(self, client, monkeypatch):
        from freightcheck.api import security as security_module

        security_module.set_rate_limit(1000, window_seconds=60)
        start = time.time()
        monkeypatch.setattr(security_module.time, "time", lambda: start)

        for index in range(200):
            response = client.get(f"/api/compliance/countries/z{index:03d}")
            assert response.status_code == 404
        assert security_module.rate_limiter.tracked_buckets == 1

        security_module.set_rate_limit(3, window_seconds=60)
        for code in ("aa", "bb", "cc"):
            assert client.get(f"/api/compliance/countries/{code}").status_code == 404
        limited = client.get("/api/compliance/countries/dd")
        assert limited.status_code == 429
        assert limited.json()["detail"]["route"] == "/api/compliance/countries/{code}"

    def test_stale_windows_are_dropped(self, client, monkeypatch):
        from freightcheck.api import security as security_module

        security_module.set_rate_limit(100, window_seconds=60)
        start = time.time()
        monkeypatch.setattr(security_module.time, "time", lambda: start)
        client.get("/api/compliance/countries")
        client.get("/api/compliance/countries/us")
        client.get("/api/compliance/countries", headers={"X-API-Key": "second-key"})
        assert security_module.rate_limiter.tracked_buckets == 3

        monkeypatch.setattr(security_module.time, "time", lambda: start + 61)
        client.get("/api/compliance/countries")
        assert security_module.rate_limiter.tracked_buckets == 1


class TestServiceEndpoints:
    def test_health_is_public(self, client):
        response = client.get("/health", headers={"X-API-Key": ""})
        assert response.status_code == 200
        assert response.json() == {"ok": True, "status": "ok", "countries": 29}

    def test_version(self, client):
        body = client.get("/v1/version").json()
        assert body["engine_version"]
        assert body["regulation_snapshot"] == "2025-01"

    def test_run_id_header(self, client):
        echoed = client.get("/health", headers={"X-Run-ID": "run-123"})
        assert echoed.headers["X-Run-ID"] == "run-123"
        generated = client.get("/health")
        assert generated.headers["X-Run-ID"]

    def test_request_logging_redacts_key(self, client, caplog):
        caplog.set_level(logging.INFO, logger="freightcheck")
        client.post("/api/compliance/check", json=US_TO_UK, headers={"X-Run-ID": "run-log"})
        payloads = [record.payload for record in caplog.records if hasattr(record, "payload")]
        messages = [record.getMessage() for record in caplog.records if hasattr(record, "payload")]
        assert "request.start" in messages
        assert "compliance.check" in messages
        assert all(p["run_id"] == "run-log" for p in payloads)
        start = payloads[messages.index("request.start")]
        assert start["api_key"] == "test***"
        check = payloads[messages.index("compliance.check")]
        assert check["origin"] == "US"
        assert check["destination"] == "UK"
        assert check["errors"] == 0
