"""Error types raised while reading the package configuration."""

from typing import Any


class ConfigError(Exception):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        config_section: str | None = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.config_section = config_section


class ConfigPathError(ConfigError):
    """Raised when a configured path cannot be used."""

    def __init__(self, path: str | object, message: str | None = None) -> None:
        self.path = path
        error_msg = message or f"Invalid configuration path: {path}"
        super().__init__(error_msg)


class ConfigValueError(ConfigError):
    """Raised when configuration values are invalid."""

    def __init__(self, field_name: str, value: Any, message: str | None = None) -> None:
        self.value = value
        error_msg = message or f"Invalid value for '{field_name}': {value}"
        super().__init__(error_msg, field_name=field_name)


class ConfigMissingError(ConfigError):
    """Raised when required configuration is missing."""

    def __init__(self, field_name: str, context: str | None = None) -> None:
        if context:
            error_msg = f"Required configuration '{field_name}' is missing in {context}"
        else:
            error_msg = f"Required configuration '{field_name}' is missing"

        super().__init__(error_msg, field_name=field_name)
