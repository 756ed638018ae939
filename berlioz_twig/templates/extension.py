from __future__ import annotations

import typing as t
from jinja2 import Environment

from ..assets import AssetManifest
from ..core import Core, CoreAwareMixin
from ..exceptions import RouteNotFoundError
from ..logger import logger
from ..push import H2PushCache
from ._filters import (
    DEFAULT_DATE_PATTERN,
    date_format,
    human_file_size,
    instance_of,
    json_decode,
    nl2p,
    spaceless,
    truncate,
)

if t.TYPE_CHECKING:
    from collections.abc import Callable


class TwigExtension(CoreAwareMixin):
    """Berlioz helpers for Jinja2 templates.

    Filters: ``date_format``, ``truncate``, ``nl2p``, ``human_file_size``,
    ``json_decode``, ``spaceless``.
    Functions: ``path``, ``asset``, ``preload``.
    Tests: ``instance_of``.

    One instance serves one request: the asset manifest is read once per
    instance and the push cache is seeded from the request cookies.

    Example:
        ```python
        extension = TwigExtension(core)
        extension.register(environment)
        ```
    """

    def __init__(self, core: Core) -> None:
        self.core = core
        self.manifest = AssetManifest(core.config)
        self.h2push = H2PushCache.from_request(core.request)

    def get_filters(self) -> dict[str, Callable[..., t.Any]]:
        return {
            "date_format": self.filter_date_format,
            "truncate": truncate,
            "nl2p": nl2p,
            "human_file_size": human_file_size,
            "json_decode": json_decode,
            "spaceless": spaceless,
        }

    def get_functions(self) -> dict[str, Callable[..., t.Any]]:
        return {
            "path": self.function_path,
            "asset": self.function_asset,
            "preload": self.function_preload,
        }

    def get_tests(self) -> dict[str, Callable[..., bool]]:
        return {"instance_of": self.test_instance_of}

    def register(self, environment: Environment) -> Environment:
        """Install filters, functions and tests into ``environment``."""
        environment.filters.update(self.get_filters())
        environment.globals.update(self.get_functions())
        environment.tests.update(self.get_tests())
        return environment

    def filter_date_format(
        self,
        value: t.Any,
        pattern: str = DEFAULT_DATE_PATTERN,
        locale: str | None = None,
    ) -> str:
        """Format a date, in the core's locale unless one is given."""
        return date_format(value, pattern, locale or self.core.locale)

    def function_path(
        self,
        name: str,
        parameters: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Generate the path of a named route.

        Raises:
            RouteNotFoundError: If the router cannot generate the route.
        """
        params = {**(parameters or {}), **kwargs}
        path = self.core.router.generate(name, params)
        if path is None or path is False:
            logger.debug(f"Route '{name}' not found with parameters {params}")
            raise RouteNotFoundError(name)
        return path

    def function_asset(self, key: str) -> str:
        """Resolve an asset from the manifest, prefixed for the web root."""
        return self.manifest.resolve(key)

    def function_preload(
        self,
        link: str,
        parameters: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Preload ``link`` with an HTTP/2 ``Link`` header.

        Options: ``nopush``, ``as``, ``type`` and ``crossorigin``, given as a
        mapping or as keyword arguments.

        Example:
            <link rel="stylesheet" href="{{ preload(asset('app.css'), as='style') }}">
        """
        options = {**(parameters or {}), **kwargs}
        self.h2push.preload(
            link,
            nopush=bool(options.get("nopush")),
            as_=options.get("as") or None,
            type_=options.get("type") or None,
            crossorigin=bool(options.get("crossorigin")),
        )
        return link

    def test_instance_of(self, value: t.Any, class_name: str | type) -> bool:
        return instance_of(value, class_name)


__all__ = ["TwigExtension"]
