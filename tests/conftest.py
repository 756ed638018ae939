"""Shared fixtures for the template helper tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typing as t
from jinja2 import Environment

from berlioz_twig.config import Config
from berlioz_twig.core import Core
from berlioz_twig.templates import TwigExtension


class FakeRouter:
    """Router generating paths from ``str.format`` patterns."""

    def __init__(self, routes: dict[str, str]) -> None:
        self.routes = routes
        self.calls: list[tuple[str, dict[str, t.Any]]] = []

    def generate(
        self,
        name: str,
        parameters: dict[str, t.Any] | None = None,
    ) -> str | bool:
        self.calls.append((name, parameters or {}))
        pattern = self.routes.get(name)
        if pattern is None:
            return False
        try:
            return pattern.format(**(parameters or {}))
        except KeyError:
            return False


@pytest.fixture
def manifest_file(tmp_path: Path) -> Path:
    """Manifest written with Windows separators."""
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps(
            {
                "app.css": "build\\app.3f2a1c.css",
                "app.js": "build/app.9b8c7d.js",
                "images\\logo.png": "build\\images\\logo.77aa01.png",
            }
        )
    )
    return manifest


@pytest.fixture
def config(manifest_file: Path) -> Config:
    return Config(
        {
            "berlioz": {"locale": "fr_FR"},
            "twig": {
                "options": {
                    "manifest": str(manifest_file),
                    "assets_prefix": "/assets/",
                },
            },
        }
    )


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter(
        {
            "home": "/",
            "article": "/articles/{id}",
            "category": "/categories/{slug}/page-{page}",
        }
    )


@pytest.fixture
def core(config: Config, router: FakeRouter) -> Core:
    return Core(config=config, router=router)


@pytest.fixture
def extension(core: Core) -> TwigExtension:
    return TwigExtension(core)


@pytest.fixture
def env(extension: TwigExtension) -> Environment:
    """Plain (sync) Jinja2 environment with the extension installed."""
    return extension.register(Environment(autoescape=True))
