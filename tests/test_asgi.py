"""End-to-end tests through the ASGI interface."""

import logging
from typing import Any

import pytest

from warble.app import App
from warble.testing import TestClient


class TestPages:
    @pytest.mark.asyncio
    async def test_localized_page(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app) as client:
            response = await client.get("/apropos")

        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.text == "[fr-header about_page][fr-about apropos][fr-footer]"
        assert response.header("set-cookie").startswith("lang=fr")

    @pytest.mark.asyncio
    async def test_accept_language(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app) as client:
            response = await client.get("/", headers={"Accept-Language": "fr;q=0.5, en;q=0.9"})

        assert response.text.startswith("[en-header home]")
        assert response.header("set-cookie") is None

    @pytest.mark.asyncio
    async def test_cookie_preference(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app) as client:
            response = await client.get("/", query={"lang": "xx"}, cookies={"lang": "fr"})

        assert response.text.startswith("[fr-header home]")
        assert response.header("set-cookie") is None

    @pytest.mark.asyncio
    async def test_secure_canonical_url(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app, host="example.org", scheme="https") as client:
            response = await client.get("/")

        assert "[en-home https://example.org/]" in response.text

    @pytest.mark.asyncio
    async def test_non_ascii_route(self, site_config: dict) -> None:
        pages = {"fr": {"à-propos": {"view": "about_page", "title": "À propos"}}}
        app = App({**site_config, "pages_available": pages})
        async with TestClient(app) as client:
            plain = await client.get("/à-propos")
            encoded = await client.get("/%C3%A0-propos", query={"ref": "été"})

        assert plain.text == "[fr-header about_page][fr-about à-propos][fr-footer]"
        assert encoded.text == plain.text

    @pytest.mark.asyncio
    async def test_any_method_resolves_the_same(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app) as client:
            get = await client.get("/about")
            post = await client.request("POST", "/about")

        assert get.text == post.text

    @pytest.mark.asyncio
    async def test_head_has_no_body(self, site_config: dict) -> None:
        app = App(site_config)
        async with TestClient(app) as client:
            response = await client.request("HEAD", "/about")

        assert response.status == 200
        assert response.body == b""


class TestFailures:
    @pytest.mark.asyncio
    async def test_missing_fragment_is_500(
        self, site_config: dict, caplog: pytest.LogCaptureFixture
    ) -> None:
        app = App({**site_config, "page_include_after": ["missing"]})
        with caplog.at_level(logging.ERROR, logger="warble.server"):
            async with TestClient(app) as client:
                response = await client.get("/about")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "[en-header" not in response.text
        assert any("500 GET /about" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_debug_names_the_error(self, site_config: dict) -> None:
        app = App({**site_config, "page_include_after": ["missing"], "debug": True})
        async with TestClient(app) as client:
            response = await client.get("/about")

        assert response.status == 500
        assert "FragmentNotFound" in response.text
        assert "missing" in response.text


class TestLifespan:
    @staticmethod
    async def _run_lifespan(app: App) -> list[dict[str, Any]]:
        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        return sent

    @pytest.mark.asyncio
    async def test_startup_and_shutdown(self) -> None:
        app = App()
        calls: list[str] = []

        @app.on_startup
        def started() -> None:
            calls.append("start")

        @app.on_shutdown
        async def stopped() -> None:
            calls.append("stop")

        sent = await self._run_lifespan(app)

        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert calls == ["start", "stop"]
        assert app._frozen is True

    @pytest.mark.asyncio
    async def test_startup_failure(self, tmp_path) -> None:
        app = App({"directory_extensions": str(tmp_path / "missing")})
        sent = await self._run_lifespan(app)

        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "Doesn't appear to be a directory" in sent[0]["message"]
