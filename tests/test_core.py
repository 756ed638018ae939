"""Tests for core service access."""

import pytest

from berlioz_twig.config import Config
from berlioz_twig.core import DEFAULT_LOCALE, Core, CoreAwareMixin, RouterProtocol
from berlioz_twig.depends import depends
from berlioz_twig.exceptions import BerliozError

from tests.conftest import FakeRouter


@pytest.mark.unit
class TestCore:
    def test_locale_fallbacks(self) -> None:
        assert Core().locale == DEFAULT_LOCALE
        assert Core(Config({"berlioz": {"locale": "de_DE"}})).locale == "de_DE"
        config = Config({"berlioz": {"locale": "de_DE"}})
        assert Core(config, locale="it").locale == "it"

    def test_locale_setter(self) -> None:
        core = Core()
        core.locale = "es_ES"

        assert core.locale == "es_ES"

    def test_router_given(self, router: FakeRouter) -> None:
        core = Core(router=router)

        assert core.router is router
        assert isinstance(router, RouterProtocol)

    def test_router_from_container(self) -> None:
        router = FakeRouter({"home": "/"})
        depends.set("router", router)

        assert Core().router is router


@pytest.mark.unit
class TestCoreAware:
    def test_core_not_set(self) -> None:
        class Service(CoreAwareMixin):
            pass

        service = Service()

        assert not service.has_core()
        with pytest.raises(BerliozError, match="Service"):
            service.core  # noqa: B018

    def test_core_set(self) -> None:
        class Service(CoreAwareMixin):
            pass

        service = Service()
        core = Core()
        service.core = core

        assert service.has_core()
        assert service.core is core
