"""Request-scoped access to the host framework services."""

import typing as t
from starlette.requests import Request

from .config import Config
from .depends import depends
from .exceptions import BerliozError

DEFAULT_LOCALE = "en_us"


@t.runtime_checkable
class RouterProtocol(t.Protocol):
    def generate(
        self,
        name: str,
        parameters: dict[str, t.Any] | None = None,
    ) -> str | t.Literal[False] | None: ...


class Core:
    """Services the template helpers consume.

    ``router`` resolves from the dependency container when it was not given
    explicitly. ``templates`` is request scoped and set by
    ``TwigPackage.register``.
    """

    def __init__(
        self,
        config: Config | None = None,
        router: RouterProtocol | None = None,
        locale: str | None = None,
        request: Request | None = None,
    ) -> None:
        self.config = config or Config()
        self._router = router
        self._locale = locale
        self.request = request
        self.templates: t.Any = None

    @property
    def router(self) -> RouterProtocol:
        if self._router is None:
            self._router = depends.get_sync("router")
        return self._router

    @property
    def locale(self) -> str:
        return self._locale or self.config.get("berlioz.locale") or DEFAULT_LOCALE

    @locale.setter
    def locale(self, value: str | None) -> None:
        self._locale = value


class CoreAwareMixin:
    _core: Core | None = None

    @property
    def core(self) -> Core:
        if self._core is None:
            msg = f"Core is not accessible from {self.__class__.__name__}"
            raise BerliozError(msg)
        return self._core

    @core.setter
    def core(self, value: Core) -> None:
        self._core = value

    def has_core(self) -> bool:
        return self._core is not None


__all__ = ["Core", "CoreAwareMixin", "DEFAULT_LOCALE", "RouterProtocol"]
