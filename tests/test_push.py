"""Tests for the HTTP/2 push cache."""

import pytest
from starlette.requests import Request
from starlette.responses import Response

from berlioz_twig.push import (
    H2PUSH_CACHE_COOKIE,
    H2PUSH_COOKIE_MAX,
    H2PushCache,
    link_hash,
)


def _request(cookie_header: str) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/",
            "headers": [(b"cookie", cookie_header.encode())],
        }
    )


@pytest.mark.unit
class TestPreloadHeader:
    def test_basic_header(self) -> None:
        cache = H2PushCache()

        header = cache.preload("/app.css")

        assert header == "</app.css>; rel=preload"
        assert cache.headers == ["</app.css>; rel=preload"]

    def test_all_attributes(self) -> None:
        cache = H2PushCache()

        header = cache.preload(
            "/font.woff2",
            as_="font",
            type_="font/woff2",
            crossorigin=True,
        )

        assert header == (
            "</font.woff2>; rel=preload; as=font; type=font/woff2; crossorigin"
        )

    def test_nopush_is_not_cached(self) -> None:
        cache = H2PushCache()

        header = cache.preload("/app.js", nopush=True, as_="script")

        assert header == "</app.js>; rel=preload; as=script; nopush"
        assert "/app.js" not in cache
        assert cache.pushed == []


@pytest.mark.unit
class TestPushDeduplication:
    def test_push_recorded_once(self) -> None:
        cache = H2PushCache()

        first = cache.preload("/app.css", as_="style")
        second = cache.preload("/app.css", as_="style")
        third = cache.preload("/app.css", as_="style")

        assert first == "</app.css>; rel=preload; as=style"
        assert second == third == "</app.css>; rel=preload; as=style; nopush"
        assert cache.hashes == (link_hash("/app.css"),)
        assert cache.pushed == [link_hash("/app.css")]
        assert cache.headers == [first, second]

    def test_seeded_from_cookie(self) -> None:
        digest = link_hash("/app.css")
        cache = H2PushCache.from_request(_request(f"{H2PUSH_CACHE_COOKIE}={digest}"))

        assert "/app.css" in cache
        assert cache.preload("/app.css").endswith("; nopush")
        assert cache.pushed == []

    def test_seeded_from_bracketed_cookies(self) -> None:
        digest = link_hash("/app.js")
        cache = H2PushCache.from_request(
            _request(f"{H2PUSH_CACHE_COOKIE}[{digest}]=1; other=value")
        )

        assert cache.hashes == (digest,)

    def test_garbage_cookie_values_ignored(self) -> None:
        digest = link_hash("/app.js")
        cache = H2PushCache.from_cookies(
            {H2PUSH_CACHE_COOKIE: f"nothex.{digest}..{'z' * 32}"}
        )

        assert cache.hashes == (digest,)

    def test_no_request(self) -> None:
        assert len(H2PushCache.from_request(None)) == 0


@pytest.mark.unit
class TestApply:
    def test_headers_and_cookie(self) -> None:
        seeded = link_hash("/old.css")
        cache = H2PushCache([seeded])
        cache.preload("/app.css", as_="style")
        cache.preload("/old.css", as_="style")

        response = cache.apply(Response("ok"))

        assert response.headers.getlist("link") == [
            "</app.css>; rel=preload; as=style",
            "</old.css>; rel=preload; as=style; nopush",
        ]
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(
            f"{H2PUSH_CACHE_COOKIE}={seeded}.{link_hash('/app.css')};"
        )
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie

    def test_no_cookie_without_new_push(self) -> None:
        cache = H2PushCache()
        cache.preload("/app.css", nopush=True)

        response = cache.apply(Response("ok"))

        assert "set-cookie" not in response.headers
        assert response.headers["link"] == "</app.css>; rel=preload; nopush"

    def test_cookie_keeps_most_recent_pushes(self) -> None:
        cache = H2PushCache()
        for i in range(H2PUSH_COOKIE_MAX * 2):
            cache.preload(f"/assets/chunk-{i}.js", as_="script")

        response = cache.apply(Response("ok"))

        cookie = response.headers["set-cookie"]
        value = cookie.split(";", 1)[0].split("=", 1)[1]
        digests = value.split(".")
        assert len(cookie) < 4096
        assert len(digests) == H2PUSH_COOKIE_MAX
        last = H2PUSH_COOKIE_MAX * 2 - 1
        assert digests[-1] == link_hash(f"/assets/chunk-{last}.js")
        assert link_hash("/assets/chunk-0.js") not in digests
        assert len(cache) == H2PUSH_COOKIE_MAX * 2
