"""HTTP/2 server push bookkeeping.

Links already pushed to a client are remembered in the ``h2pushes`` cookie,
a dot separated list of the md5 digests of the links, so later responses only
send the advisory ``Link`` header with ``nopush``. Cookies in the older
``h2pushes[<digest>]=1`` form are read as well.
"""

import hashlib
import re
from collections.abc import Iterable, Mapping

from starlette.requests import Request
from starlette.responses import Response

from .logger import logger

H2PUSH_CACHE_COOKIE = "h2pushes"
# 100 digests of 33 bytes keep the cookie well under the 4096 byte limit.
H2PUSH_COOKIE_MAX = 100

_DIGEST = re.compile(r"^[0-9a-f]{32}$")
_LEGACY_COOKIE_KEY = re.compile(rf"^{H2PUSH_CACHE_COOKIE}\[([0-9a-f]{{32}})\]$")


def link_hash(link: str) -> str:
    return hashlib.md5(link.encode(), usedforsecurity=False).hexdigest()


class H2PushCache:
    """Push cache and pending ``Link`` headers for one response."""

    def __init__(self, hashes: Iterable[str] = ()) -> None:
        self._hashes: dict[str, None] = dict.fromkeys(hashes)
        self.headers: list[str] = []
        self.pushed: list[str] = []

    @classmethod
    def from_cookies(cls, cookies: Mapping[str, str]) -> "H2PushCache":
        hashes = [
            digest
            for digest in cookies.get(H2PUSH_CACHE_COOKIE, "").split(".")
            if _DIGEST.match(digest)
        ]
        for key in cookies:
            match = _LEGACY_COOKIE_KEY.match(key)
            if match:
                hashes.append(match.group(1))
        return cls(hashes)

    @classmethod
    def from_request(cls, request: Request | None) -> "H2PushCache":
        if request is None:
            return cls()
        return cls.from_cookies(request.cookies)

    @property
    def hashes(self) -> tuple[str, ...]:
        return tuple(self._hashes)

    def __contains__(self, link: object) -> bool:
        return isinstance(link, str) and link_hash(link) in self._hashes

    def __len__(self) -> int:
        return len(self._hashes)

    def cookie_value(self) -> str:
        """Dot-joined digests of the most recently pushed links."""
        return ".".join(list(self._hashes)[-H2PUSH_COOKIE_MAX:])

    def preload(
        self,
        link: str,
        *,
        nopush: bool = False,
        as_: str | None = None,
        type_: str | None = None,
        crossorigin: bool = False,
    ) -> str:
        """Queue a ``Link: rel=preload`` header and return its value.

        A link is pushed at most once per cache lifetime; afterwards, or when
        ``nopush`` is requested, the header is sent with ``nopush``.
        """
        digest = link_hash(link)
        push = not nopush and digest not in self._hashes

        header = f"<{link}>; rel=preload"
        if as_:
            header += f"; as={as_}"
        if type_:
            header += f"; type={type_}"
        if crossorigin:
            header += "; crossorigin"
        if not push:
            header += "; nopush"

        if header not in self.headers:
            self.headers.append(header)

        if push:
            self._hashes[digest] = None
            self.pushed.append(digest)
            logger.debug(f"Pushing {link}")
        else:
            logger.debug(f"Preloading {link} without push")

        return header

    def apply(self, response: Response) -> Response:
        """Write queued headers and the push cookie onto ``response``."""
        for header in self.headers:
            response.headers.append("Link", header)
        if self.pushed:
            response.set_cookie(
                H2PUSH_CACHE_COOKIE,
                self.cookie_value(),
                path="/",
                secure=False,
                httponly=True,
            )
        return response


__all__ = ["H2PUSH_CACHE_COOKIE", "H2PUSH_COOKIE_MAX", "H2PushCache", "link_hash"]
