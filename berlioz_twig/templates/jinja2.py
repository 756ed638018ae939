from __future__ import annotations

from pathlib import Path

import typing as t
from jinja2 import (
    BaseLoader,
    ChoiceLoader,
    FileSystemLoader,
    PrefixLoader,
    select_autoescape,
)
from jinja2_async_environment import AsyncEnvironment

from ..config_errors import ConfigPathError
from ..logger import logger
from ._base import TemplatesBase, TemplatesBaseSettings

if t.TYPE_CHECKING:
    from collections.abc import Callable

    from .extension import TwigExtension


class Jinja2Templates(TemplatesBase):
    """Async Jinja2 template adapter.

    Features:
    - Async-first rendering via jinja2-async-environment
    - FileSystemLoader on the template directory, plus ``@namespace/``
      prefixed loaders for the configured ``twig.paths``
    - Filter, global, test and extension registration
    - Auto-escaping for HTML/XML by default

    Example:
        ```python
        templates = Jinja2Templates(template_dir="templates")
        templates.add_extension(TwigExtension(core))

        html = await templates.render("index.html", title="Hello World")
        ```
    """

    def __init__(
        self,
        template_dir: Path | str | None = None,
        *,
        paths: dict[str, Path | str] | None = None,
        enable_async: bool = True,
        autoescape: bool = True,
        cache_size: int = 400,
        auto_reload: bool = True,
        settings: TemplatesBaseSettings | None = None,
    ) -> None:
        """Initialize Jinja2 templates adapter.

        Args:
            template_dir: Directory containing templates (default: ./templates)
            paths: Namespaced template directories, used as ``@name/...``
            enable_async: Enable async template rendering (default: True)
            autoescape: Enable HTML/XML autoescaping (default: True)
            cache_size: Compiled template cache size (default: 400)
            auto_reload: Auto-reload templates when changed (default: True)
            settings: Optional settings object (overrides other params)
        """
        # Initialize base with settings
        if settings is None:
            settings = TemplatesBaseSettings(
                template_dir=template_dir,
                paths=paths or {},
                enable_async=enable_async,
                autoescape=autoescape,
                cache_size=cache_size,
                auto_reload=auto_reload,
            )
        super().__init__(settings)

        # Ensure template directory exists
        template_dir_setting = self.settings.template_dir
        if template_dir_setting is None:
            template_dir_setting = Path.cwd() / "templates"
        self.template_dir = Path(template_dir_setting)
        self.template_dir.mkdir(parents=True, exist_ok=True)
        self.extensions: list[TwigExtension] = []

        # Configure async Jinja2 environment
        self.env = AsyncEnvironment(
            loader=self._build_loader(),
            autoescape=(
                select_autoescape(
                    enabled_extensions=["html", "xml"],
                    default_for_string=True,  # Enable for render_string() too
                    default=True,  # Required for from_string() to escape
                )
                if self.settings.autoescape
                else False
            ),
            enable_async=self.settings.enable_async,
            cache_size=self.settings.cache_size,
            auto_reload=self.settings.auto_reload,
        )

    def _build_loader(self) -> BaseLoader:
        main_loader = FileSystemLoader(str(self.template_dir))
        if not self.settings.paths:
            return main_loader

        namespaces: dict[str, BaseLoader] = {}
        for namespace, directory in self.settings.paths.items():
            directory = Path(directory)
            if not directory.is_dir():
                msg = f"Template path for namespace '{namespace}' is not a directory"
                raise ConfigPathError(directory, msg)
            namespaces[f"@{namespace.lstrip('@')}"] = FileSystemLoader(str(directory))
            logger.debug(f"Template namespace @{namespace} -> {directory}")

        return ChoiceLoader([PrefixLoader(namespaces, delimiter="/"), main_loader])

    async def render(
        self,
        template_name: str,
        context: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Render a template file asynchronously.

        Args:
            template_name: Template filename (relative to template_dir)
            context: Template context dictionary
            **kwargs: Additional context variables

        Returns:
            Rendered template string

        Raises:
            TemplateNotFound: If template file doesn't exist
        """
        template = await self.env.get_template_async(template_name)
        merged_context = {**(context or {}), **kwargs}

        ctx = template.new_context(merged_context)
        rendering = template.root_render_func(ctx)
        return await self._render_to_string(rendering)

    async def render_string(
        self,
        template_string: str,
        context: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Render a template string asynchronously.

        Example:
            ```python
            html = await templates.render_string("{{ path('home') }}")
            ```
        """
        template = self.env.from_string(template_string)
        merged_context = {**(context or {}), **kwargs}

        ctx = template.new_context(merged_context)
        rendering = template.root_render_func(ctx)
        return await self._render_to_string(rendering)

    async def _render_to_string(self, rendering: t.Any) -> str:
        chunks = await self._collect_render_chunks(rendering)
        return "".join(chunks)

    async def _collect_render_chunks(self, rendering: t.Any) -> list[str]:
        if rendering is None:
            return []
        if isinstance(rendering, str):
            return [rendering]
        if isinstance(rendering, bytes):
            return [rendering.decode()]
        if hasattr(rendering, "__aiter__"):
            return [self._ensure_text(chunk) async for chunk in rendering]
        if hasattr(rendering, "__await__"):
            awaited_result = await rendering
            return await self._collect_render_chunks(awaited_result)
        if hasattr(rendering, "__iter__"):
            return [self._ensure_text(chunk) for chunk in rendering]
        return [self._ensure_text(rendering)]

    def _ensure_text(self, value: t.Any) -> str:
        if isinstance(value, bytes):
            return value.decode()
        return str(value)

    def add_filter(self, name: str, func: Callable[..., t.Any]) -> None:
        """Register a custom template filter.

        Example:
            ```python
            templates.add_filter("uppercase", lambda x: x.upper())
            # Template: {{ name|uppercase }}
            ```
        """
        self.env.filters[name] = func

    def add_global(self, name: str, value: t.Any) -> None:
        """Register a global variable available in all templates."""
        self.env.globals[name] = value

    def add_test(self, name: str, func: Callable[..., bool]) -> None:
        """Register a template test.

        Example:
            ```python
            templates.add_test("even", lambda n: n % 2 == 0)
            # Template: {% if count is even %}
            ```
        """
        self.env.tests[name] = func

    def add_extension(self, extension: TwigExtension) -> None:
        """Install an extension's filters, functions and tests."""
        extension.register(self.env)
        self.extensions.append(extension)


# Alias for convenience
TemplatesAdapter = Jinja2Templates

__all__ = ["Jinja2Templates", "TemplatesAdapter", "TemplatesBaseSettings"]
