"""Template-render capability used by the layout composer.

The composer only needs "render this template name with this context
to a string". ``TemplateRenderer`` names that seam; ``KidaRenderer`` is
the kida-backed implementation. Rendering is blocking (template lookup,
file reads, evaluation), so the async path dispatches it to an anyio
worker thread.
"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

import anyio
from kida import Environment


@runtime_checkable
class TemplateRenderer(Protocol):
    """Anything that can render a named template with a context."""

    def render(self, name: str, context: Mapping[str, Any]) -> str: ...


class KidaRenderer:
    """Render templates through a kida ``Environment``.

    kida templates are immutable and safe to render from several
    threads at once, so one instance serves every composition.
    """

    __slots__ = ("_env",)

    def __init__(self, env: Environment) -> None:
        self._env = env

    @property
    def env(self) -> Environment:
        return self._env

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        template = self._env.get_template(name)
        return template.render(dict(context))

    def __repr__(self) -> str:
        return f"KidaRenderer({self._env!r})"


async def render_in_thread(
    renderer: TemplateRenderer, name: str, context: Mapping[str, Any]
) -> str:
    """Run a blocking render in an anyio worker thread."""
    return await anyio.to_thread.run_sync(renderer.render, name, context)  # type: ignore[union-attr]
