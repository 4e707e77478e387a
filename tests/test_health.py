# ================================
# HEALTH & INFO TESTS (test_health.py)
# ================================

import asyncio
import logging
from pathlib import Path

from societyhub import main

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class TestHealthEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_detailed_health_checks_database(self, client):
        body = client.get("/health/detailed").json()

        assert body["checks"]["database"] == "healthy"
        assert body["status"] == "healthy"

    def test_ready(self, client):
        assert client.get("/ready").json() == {"status": "ready"}

    def test_root_lists_endpoints(self, client):
        body = client.get("/").json()

        assert body["endpoints"]["complaints"] == "/api/complaints"

    def test_response_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"


class TestStartupMigrations:

    def test_migrations_keep_info_logging(self, monkeypatch):
        """Running migrations at startup must not reconfigure the app's loggers"""
        monkeypatch.chdir(PROJECT_ROOT)
        root_level = logging.getLogger().level
        service_logger = logging.getLogger("societyhub.services.booking_service")
        assert service_logger.isEnabledFor(logging.INFO)

        try:
            asyncio.run(main.run_database_migrations())

            assert service_logger.isEnabledFor(logging.INFO)
            assert logging.getLogger().level == root_level
        finally:
            logging.getLogger().setLevel(root_level)
