"""Loguru logger shared by the package.

Records are bound with ``mod_name`` so the host can filter them the same way
it filters its own adapters.
"""

import sys

import typing as t
from loguru import logger as _logger

from .depends import get_container

LOG_FORMAT: dict[str, str] = {
    "time": "<b><e>[</e> <w>{time:YYYY-MM-DD HH:mm:ss.SSS}</w> <e>]</e></b>",
    "level": " <level>{level:>8}</level>",
    "sep": " <b><w>in</w></b> ",
    "name": "<b>{extra[mod_name]:>20}</b>",
    "line": "<b><e>[</e><w>{line:^5}</w><e>]</e></b>",
    "message": "  <level>{message}</level>",
}

logger = _logger.bind(mod_name="berlioz_twig")


def configure_logger(level: str = "INFO", sink: t.Any = None) -> int:
    """Add a human-readable sink for the package's records.

    Returns the loguru handler id so callers can remove it again.
    """

    def _filter(record: dict[str, t.Any]) -> bool:
        return record["extra"].get("mod_name") == "berlioz_twig"

    return _logger.add(
        sink or sys.stderr,
        level=level.upper(),
        format="".join(LOG_FORMAT.values()),
        filter=t.cast("t.Any", _filter),
    )


get_container().add("logger", logger)

__all__ = ["LOG_FORMAT", "configure_logger", "logger"]
