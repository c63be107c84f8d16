"""
Menu API — Configuration, Startup and Health Tests
====================================================

What:  Required-configuration checks, the startup refusal paths and /health.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from menu_api import main
from menu_api.config import Settings, settings
from menu_api.database import dispose_engine, get_engine, get_session_factory


class TestSettings:

    def test_missing_database_url_fails_validation(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings(_env_file=None, database_url="").validate_required()

    def test_database_url_present_passes(self):
        Settings(_env_file=None, database_url="sqlite+aiosqlite:///./menu.db").validate_required()

    def test_cors_origins_split(self):
        s = Settings(_env_file=None, cors_origins="http://a.test, http://b.test,")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_port_defaults_to_5000(self):
        with patch.dict(os.environ, {}, clear=True):
            assert Settings(_env_file=None).port == 5000


class TestStartup:

    def test_run_exits_without_database_url(self):
        with patch.object(settings, "database_url", ""), \
             patch.object(main, "setup_logging"), \
             patch.object(main.uvicorn, "run") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                main.run()

        assert exc_info.value.code == 1
        mock_run.assert_not_called()

    def test_run_starts_uvicorn_when_configured(self):
        with patch.object(main, "setup_logging"), \
             patch.object(main.uvicorn, "run") as mock_run:
            main.run()

        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["port"] == settings.port

    @pytest.mark.asyncio
    async def test_lifespan_refuses_to_start_without_database_url(self):
        with patch.object(settings, "database_url", ""), \
             patch.object(main, "setup_logging"):
            with pytest.raises(RuntimeError):
                async with main.lifespan(main.app):
                    pass


class TestLazyEngine:

    @pytest.mark.asyncio
    async def test_session_factory_is_built_once_on_the_shared_engine(self):
        try:
            factory = get_session_factory()
            assert get_session_factory() is factory
            assert factory.kw["bind"] is get_engine()
        finally:
            await dispose_engine()

    @pytest.mark.asyncio
    async def test_session_factory_requires_database_url(self):
        await dispose_engine()
        with patch.object(settings, "database_url", ""):
            with pytest.raises(ValueError, match="DATABASE_URL"):
                get_session_factory()


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_connected_database(self, test_client):
        try:
            response = await test_client.get("/health")
        finally:
            await dispose_engine()

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_reports_unreachable_database(self, test_client):
        with patch("menu_api.routes.health.get_engine", side_effect=ValueError("no database")):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
