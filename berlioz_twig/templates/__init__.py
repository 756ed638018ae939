"""Jinja2 templates with the Berlioz template helpers.

Usage:
    ```python
    from berlioz_twig.templates import TemplatesAdapter, TwigExtension

    templates = TemplatesAdapter(template_dir="templates")
    templates.add_extension(TwigExtension(core))

    html = await templates.render("index.html", title="Hello")
    ```
"""

from ._base import TemplatesBase, TemplatesBaseSettings
from ._filters import (
    TruncateSide,
    date_format,
    human_file_size,
    instance_of,
    json_decode,
    nl2p,
    spaceless,
    truncate,
)
from .extension import TwigExtension
from .jinja2 import Jinja2Templates, TemplatesAdapter

__all__ = [
    "Jinja2Templates",
    "TemplatesAdapter",
    "TemplatesBase",
    "TemplatesBaseSettings",
    "TruncateSide",
    "TwigExtension",
    "date_format",
    "human_file_size",
    "instance_of",
    "json_decode",
    "nl2p",
    "spaceless",
    "truncate",
]
