import typing as t
from bevy import get_container
from contextlib import suppress


class Depends:
    """Service lookup over the bevy container.

    The host framework registers its services (``"router"``) here; the
    template helpers resolve them lazily.
    """

    @staticmethod
    def set(class_: t.Any, instance: t.Any = None, module: str | None = None) -> t.Any:
        """Register a class/instance in the dependency container.

        Returns the instance that was registered.
        """
        if instance is None:
            instance = class_()
        get_container().add(class_, instance, qualifier=module)
        return instance

    @staticmethod
    def get_sync(category: t.Any, module: str | None = None) -> t.Any:
        """Get a registered service.

        Raises:
            RuntimeError: If nothing is registered under ``category``.
        """
        result = None
        with suppress(Exception):
            result = get_container().get(category, qualifier=module)
        if isinstance(result, tuple):
            result = result[0] if result else None
        if result is None:
            name = getattr(category, "__name__", category)
            msg = f"Dependency '{name}' not found in container"
            raise RuntimeError(msg)
        return result


depends = Depends()

__all__ = ["Depends", "depends", "get_container"]
