import typing as t
from starlette.responses import HTMLResponse

from .core import CoreAwareMixin
from .exceptions import BerliozError
from .templates import Jinja2Templates, TwigExtension


@t.runtime_checkable
class RenderingController(t.Protocol):
    """Controller able to render templates."""

    async def render(
        self,
        name: str,
        variables: dict[str, t.Any] | None = None,
    ) -> str:
        """Render the template ``name`` with ``variables``.

        Raises:
            jinja2.TemplateError: If the template cannot be loaded or rendered.
        """
        ...


class RenderingControllerMixin(CoreAwareMixin):
    """Rendering through the core's templates adapter.

    Example:
        ```python
        class PageController(RenderingControllerMixin):
            async def home(self) -> HTMLResponse:
                return await self.render_response("home.html", {"title": "Home"})
        ```
    """

    @property
    def templates(self) -> Jinja2Templates:
        if self.core.templates is None:
            msg = "No templates adapter on the core, call TwigPackage.register first"
            raise BerliozError(msg)
        return t.cast("Jinja2Templates", self.core.templates)

    async def render(
        self,
        name: str,
        variables: dict[str, t.Any] | None = None,
    ) -> str:
        return await self.templates.render(name, variables)

    async def render_response(
        self,
        name: str,
        variables: dict[str, t.Any] | None = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        """Render ``name`` into a response carrying the preload headers."""
        content = await self.render(name, variables)
        response = HTMLResponse(content, status_code=status_code)
        for extension in self.templates.extensions:
            if isinstance(extension, TwigExtension):
                extension.h2push.apply(response)
        return response


__all__ = ["RenderingController", "RenderingControllerMixin"]
