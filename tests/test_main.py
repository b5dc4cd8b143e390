"""
Tests for application wiring and startup.
"""

import pytest
from unittest.mock import AsyncMock, patch

from main import create_app


class TestAppWiring:
    def test_routes_registered(self):
        paths = create_app().openapi()["paths"]

        assert "post" in paths["/api/register"]
        assert "post" in paths["/api/login"]
        assert "get" in paths["/api/current"]
        assert {"get", "post"} <= set(paths["/api/contacts"])
        assert {"get", "put", "delete"} <= set(paths["/api/contacts/{contact_id}"])

    @pytest.mark.asyncio
    async def test_process_time_header(self, client):
        resp = await client.get("/api/contacts")
        assert "x-process-time" in resp.headers


class TestStartup:
    @pytest.mark.asyncio
    async def test_exits_when_database_unreachable(self):
        app = create_app()
        with patch("main.connect_db", AsyncMock(side_effect=OSError("connection refused"))):
            with pytest.raises(SystemExit) as exc_info:
                async with app.router.lifespan_context(app):
                    pass
        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_startup_connects(self):
        app = create_app()
        with patch("main.connect_db", AsyncMock()) as mock_connect:
            async with app.router.lifespan_context(app):
                mock_connect.assert_awaited_once()
