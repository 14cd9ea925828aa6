"""Tests for server.py — composition root and lifespan."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from opslevel_sync.api import OpsLevelApi
from opslevel_sync.errors import ConfigError
from opslevel_sync.server import app_lifespan


class TestAppLifespan:
    async def test_builds_api_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPSLEVEL_SYNC_BASE_URL", "http://backstage.test")
        monkeypatch.setenv("OPSLEVEL_SYNC_FRAMEWORKS", "rails,django")
        monkeypatch.delenv("OPSLEVEL_SYNC_CONFIG", raising=False)
        monkeypatch.delenv("OPSLEVEL_SYNC_TIMEOUT", raising=False)

        async with app_lifespan(MagicMock()) as ctx:
            assert isinstance(ctx.http_client, httpx.AsyncClient)
            assert isinstance(ctx.api, OpsLevelApi)
            assert ctx.settings.frameworks == ("rails", "django")
            assert ctx.http_client.timeout.read == 30.0

        assert ctx.http_client.is_closed

    async def test_missing_base_url_fails_fast(self, monkeypatch):
        monkeypatch.delenv("OPSLEVEL_SYNC_BASE_URL", raising=False)
        monkeypatch.delenv("OPSLEVEL_SYNC_CONFIG", raising=False)

        with pytest.raises(ConfigError):
            async with app_lifespan(MagicMock()):
                pass
