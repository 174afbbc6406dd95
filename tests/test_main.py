"""Tests for the app factory, liveness route and the server entry point."""

from __future__ import annotations

from unittest.mock import patch

from httpx import ASGITransport, AsyncClient

from sociomap.__main__ import main
from sociomap.api.main import create_app
from sociomap.config import Settings
from sociomap.services.generator import AnthropicTextGenerator


async def test_root_is_plain_text(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.text == "SocioMap API is running"
    assert resp.headers["content-type"].startswith("text/plain")


async def test_cors_allows_any_origin(client):
    resp = await client.options(
        "/api/simulator",
        headers={
            "Origin": "https://example.org",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_create_app_uses_injected_settings():
    settings = Settings(_env_file=None, llm_provider="anthropic", anthropic_api_key="k")
    app = create_app(settings)
    assert app.state.settings is settings
    assert isinstance(app.state.text_generator, AnthropicTextGenerator)


async def test_create_app_with_injected_generator(generator):
    app = create_app(Settings(_env_file=None), text_generator=generator)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        resp = await ac.post(
            "/api/recommendations/economic-equity",
            json={"location": "Tulsa, OK", "description": "Mid-size city"},
        )
    assert resp.status_code == 200
    assert resp.json() == {"recommendations": "Economic Equity recommendations"}
    assert len(generator.calls) == 1


def test_main_runs_uvicorn_outside_production():
    with (
        patch("sociomap.__main__.settings") as mock_settings,
        patch("sociomap.__main__.uvicorn") as mock_uvicorn,
    ):
        mock_settings.host = "127.0.0.1"
        mock_settings.port = 3001
        mock_settings.is_production = False
        main(["--port", "4000"])

    mock_uvicorn.run.assert_called_once()
    kwargs = mock_uvicorn.run.call_args.kwargs
    assert kwargs["port"] == 4000
    assert kwargs["host"] == "127.0.0.1"


def test_main_skips_listen_in_production():
    with (
        patch("sociomap.__main__.settings") as mock_settings,
        patch("sociomap.__main__.uvicorn") as mock_uvicorn,
        patch("sociomap.__main__.setup_logging") as mock_setup,
    ):
        mock_settings.host = "0.0.0.0"
        mock_settings.port = 3001
        mock_settings.is_production = True
        mock_settings.log_level = "INFO"
        mock_settings.log_format = "text"
        main([])

    mock_uvicorn.run.assert_not_called()
    mock_setup.assert_called_once_with("INFO", "text")
