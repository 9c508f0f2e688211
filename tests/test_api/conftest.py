from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

TEST_API_KEY = "test-compliance-key"


@pytest.fixture
def client(monkeypatch):
    """Test client authenticated with a dedicated key and a generous rate limit."""
    from freightcheck.api import security
    from freightcheck.api.app import app

    monkeypatch.setenv("FREIGHTCHECK_API_KEYS", f"{TEST_API_KEY},second-key")
    security.set_rate_limit(1000)
    with TestClient(app, headers={"X-API-Key": TEST_API_KEY}) as test_client:
        yield test_client
    security.set_rate_limit(60)
