"""Asset manifest lookups.

The manifest is a JSON object mapping logical asset names to built (usually
versioned) file paths, as written by front-end bundlers.
"""

from pathlib import Path

import msgspec
import typing as t

from .config import Config
from .config_errors import ConfigMissingError
from .exceptions import ManifestError
from .logger import logger

MANIFEST_KEY = "twig.options.manifest"
ASSETS_PREFIX_KEY = "twig.options.assets_prefix"


def standardize_separator(value: str) -> str:
    return value.replace("\\", "/")


class AssetManifest:
    """Manifest loaded once, on first lookup."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._entries: dict[str, str] | None = None

    @property
    def loaded(self) -> bool:
        return self._entries is not None

    @property
    def entries(self) -> dict[str, str]:
        if self._entries is None:
            self._entries = self.load()
        return self._entries

    def load(self) -> dict[str, str]:
        """Read and normalize the manifest named in the configuration.

        Raises:
            ConfigMissingError: If ``twig.options.manifest`` is not set.
            ManifestError: If the file is missing or not a JSON object.
        """
        filename = self.config.get(MANIFEST_KEY)
        if not filename:
            raise ConfigMissingError(MANIFEST_KEY)
        path = Path(filename)

        try:
            raw = path.read_bytes()
        except OSError as e:
            msg = f"Manifest file '{path}' does not exist"
            raise ManifestError(path, msg) from e

        try:
            manifest: t.Any = msgspec.json.decode(raw)
        except msgspec.DecodeError as e:
            msg = f"Manifest file '{path}' is not a valid JSON file"
            raise ManifestError(path, msg) from e
        if not isinstance(manifest, dict):
            msg = f"Manifest file '{path}' is not a valid JSON file"
            raise ManifestError(path, msg)

        entries = {
            standardize_separator(str(key)): standardize_separator(str(value))
            for key, value in manifest.items()
        }
        logger.debug(f"Loaded {len(entries)} assets from {path}")
        return entries

    def resolve(self, key: str) -> str:
        """Return the prefixed asset path, or an empty string if unknown."""
        value = self.entries.get(standardize_separator(key))
        if value is None:
            return ""
        return f"{self.config.get(ASSETS_PREFIX_KEY) or ''}{value}"


__all__ = ["ASSETS_PREFIX_KEY", "AssetManifest", "MANIFEST_KEY"]
