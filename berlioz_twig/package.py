"""Package entry points for the host framework."""

from importlib import import_module

import typing as t

from .config import DEFAULT_CONFIG_RESOURCE, Config
from .config_errors import ConfigValueError
from .core import Core
from .logger import logger
from .templates import Jinja2Templates, TemplatesBaseSettings, TwigExtension


def import_string(dotted_path: str) -> t.Any:
    """Import ``package.module.Name`` (or ``package.module:Name``)."""
    module_name, _, attribute = dotted_path.replace(":", ".").rpartition(".")
    if not module_name:
        msg = f"'{dotted_path}' is not a dotted import path"
        raise ConfigValueError("twig.extensions", dotted_path, msg)
    try:
        return getattr(import_module(module_name), attribute)
    except (ImportError, AttributeError) as e:
        msg = f"Unable to import '{dotted_path}': {e}"
        raise ConfigValueError("twig.extensions", dotted_path, msg) from e


class TwigPackage:
    @staticmethod
    def config() -> Config:
        """Default configuration shipped with the package."""
        return Config.from_resource("berlioz_twig", DEFAULT_CONFIG_RESOURCE)

    @classmethod
    def register(cls, core: Core) -> Jinja2Templates:
        """Build the templates adapter for ``core`` and register it.

        The package defaults are merged under the core's configuration, then
        the extensions listed in ``twig.extensions`` and the values of
        ``twig.globals`` are installed. The adapter is stored on the core only,
        since it carries the request scoped push cache.
        """
        core.config = cls.config().merge(core.config)
        templates = Jinja2Templates(
            settings=TemplatesBaseSettings.from_config(core.config),
        )
        templates.add_extension(TwigExtension(core))

        for dotted_path in core.config.get("twig.extensions") or []:
            extension_cls = import_string(dotted_path)
            templates.add_extension(extension_cls(core))
            logger.debug(f"Registered template extension {dotted_path}")

        for name, value in (core.config.get("twig.globals") or {}).items():
            templates.add_global(name, value)

        core.templates = templates
        return templates


__all__ = ["TwigPackage", "import_string"]
