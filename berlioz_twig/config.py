"""Configuration access for the template helpers.

The host framework hands its configuration over as nested mappings; keys are
addressed with dots, e.g. ``config.get("twig.options.manifest")``.
"""

from copy import deepcopy
from importlib import resources
from pathlib import Path

import msgspec
import rich.repr
import typing as t

from .config_errors import ConfigError, ConfigPathError

DEFAULT_CONFIG_RESOURCE = "resources/config.default.json"


def deep_update(*dicts: dict[str, t.Any]) -> dict[str, t.Any]:
    """Deep merge multiple dictionaries."""
    result: dict[str, t.Any] = {}
    for d in dicts:
        if isinstance(d, dict):
            for key, value in d.items():
                if (
                    key in result
                    and isinstance(result[key], dict)
                    and isinstance(value, dict)
                ):
                    result[key] = deep_update(result[key], value)
                else:
                    result[key] = value
    return result


def load_json_config(path: Path | str) -> dict[str, t.Any]:
    """Read a JSON configuration file into a dictionary."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigPathError(path, f"Unable to read configuration file: {path}") from e
    try:
        data = msgspec.json.decode(raw)
    except msgspec.DecodeError as e:
        msg = f"Configuration file '{path}' is not valid JSON: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = f"Configuration file '{path}' must contain a JSON object"
        raise ConfigError(msg)
    return data


@rich.repr.auto
class Config:
    """Read-only view over nested configuration values."""

    _missing: t.ClassVar[object] = object()

    def __init__(self, data: dict[str, t.Any] | None = None) -> None:
        self.data: dict[str, t.Any] = deepcopy(data) if data else {}

    def __rich_repr__(self) -> rich.repr.Result:
        yield "keys", sorted(self.data)

    @classmethod
    def from_resource(cls, package: str, resource: str) -> "Config":
        raw = resources.files(package).joinpath(resource).read_bytes()
        return cls(msgspec.json.decode(raw))

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        return cls(load_json_config(path))

    def original(self) -> dict[str, t.Any]:
        """Return a copy of the configuration as loaded."""
        return deepcopy(self.data)

    def _lookup(self, key: str) -> t.Any:
        current: t.Any = self.data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return self._missing
            current = current[part]
        return current

    def has(self, key: str) -> bool:
        return self._lookup(key) is not self._missing

    def get(self, key: str, default: t.Any = None) -> t.Any:
        value = self._lookup(key)
        if value is self._missing:
            return default
        return value

    def merge(self, *others: "Config | dict[str, t.Any]") -> "Config":
        """Return a new config with ``others`` merged over this one."""
        layers = [o.data if isinstance(o, Config) else o for o in others]
        return Config(deep_update(self.data, *layers))


__all__ = ["Config", "deep_update", "load_json_config"]
