from pathlib import Path


class BerliozError(Exception):
    """Base exception for errors raised by the template helpers."""


class RouteNotFoundError(BerliozError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Route named '{name}' not found")


class ManifestError(BerliozError):
    """Raised when the asset manifest cannot be read or decoded."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = path
        super().__init__(message)
