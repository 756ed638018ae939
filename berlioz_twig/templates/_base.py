from pathlib import Path

import typing as t
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..config import Config
from ..config_errors import ConfigValueError


class TemplatesBaseSettings(BaseSettings):
    """Settings for templates adapters.

    Values come from the ``twig.options`` and ``twig.paths`` configuration
    sections; ``TWIG_*`` environment variables fill in anything not given.
    Options read elsewhere, such as ``manifest`` and ``assets_prefix``, are
    ignored here.
    """

    model_config = SettingsConfigDict(
        env_prefix="TWIG_",
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    template_dir: Path | None = None
    paths: dict[str, Path] = {}
    enable_async: bool = True
    autoescape: bool = True
    cache_size: int = 400
    auto_reload: bool = True

    def __init__(self, **values: t.Any) -> None:
        super().__init__(**values)

        # Default template_dir to cwd/templates if not specified
        if self.template_dir is None:
            self.template_dir = Path.cwd() / "templates"

    @classmethod
    def from_config(cls, config: Config) -> "TemplatesBaseSettings":
        options = config.get("twig.options") or {}
        if not isinstance(options, dict):
            msg = "'twig.options' must be an object"
            raise ConfigValueError("twig.options", options, msg)
        paths = config.get("twig.paths") or {}
        if not isinstance(paths, dict):
            msg = "'twig.paths' must be an object"
            raise ConfigValueError("twig.paths", paths, msg)
        values = {k: v for k, v in options.items() if v is not None}
        return cls(**values, paths=paths)


class TemplatesBase:
    """Base class for template adapters."""

    def __init__(self, settings: TemplatesBaseSettings | None = None) -> None:
        self.settings = settings or TemplatesBaseSettings()

    async def render(
        self,
        template_name: str,
        context: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Render a template file. Must be implemented by subclass."""
        raise NotImplementedError

    async def render_string(
        self,
        template_string: str,
        context: dict[str, t.Any] | None = None,
        **kwargs: t.Any,
    ) -> str:
        """Render a template string. Must be implemented by subclass."""
        raise NotImplementedError

    def add_filter(self, name: str, func: t.Callable[..., t.Any]) -> None:
        """Register a custom template filter. Must be implemented by subclass."""
        raise NotImplementedError

    def add_global(self, name: str, value: t.Any) -> None:
        """Register a global variable. Must be implemented by subclass."""
        raise NotImplementedError

    def add_test(self, name: str, func: t.Callable[..., bool]) -> None:
        """Register a template test. Must be implemented by subclass."""
        raise NotImplementedError
