"""Berlioz template helpers for Jinja2.

Registers the ``path``, ``asset`` and ``preload`` functions, the
``date_format``, ``truncate``, ``nl2p``, ``human_file_size``, ``json_decode``
and ``spaceless`` filters, and the ``instance_of`` test.

Usage:
    ```python
    from berlioz_twig import Config, Core, TwigPackage

    core = Core(config=Config(app_config), router=router, request=request)
    templates = TwigPackage.register(core)
    html = await templates.render("index.html", title="Hello")
    ```
"""

from .config import Config
from .config_errors import ConfigError, ConfigMissingError
from .controller import RenderingController, RenderingControllerMixin
from .core import Core, CoreAwareMixin
from .exceptions import BerliozError, ManifestError, RouteNotFoundError
from .package import TwigPackage
from .push import H2PUSH_CACHE_COOKIE, H2PushCache
from .templates import Jinja2Templates, TwigExtension

__version__ = "1.0.0"

__all__ = [
    "BerliozError",
    "Config",
    "ConfigError",
    "ConfigMissingError",
    "Core",
    "CoreAwareMixin",
    "H2PUSH_CACHE_COOKIE",
    "H2PushCache",
    "Jinja2Templates",
    "ManifestError",
    "RenderingController",
    "RenderingControllerMixin",
    "RouteNotFoundError",
    "TwigExtension",
    "TwigPackage",
]
