"""Nested layout composition.

A template opts into a layout by calling the injected ``extend()``
function while it renders::

    {{ extend("layouts/base", {"title": "Home"}) }}
    <h1>Welcome</h1>

After the template renders, the composer binds the output to ``content``
and renders the declared layout with the merged context. The layout can
call ``extend()`` again, so chains of any depth compose inside-out::

    page.html  --extend-->  layouts/section.html  --extend-->  layouts/base.html

Rules:

- Only the last ``extend()`` call of a template counts.
- The layout name gets ``default_extension`` appended when it has none
  and resolves against the directory of the template that declared it.
  A leading ``/`` resolves from the loader root instead.
- Context merging is shallow: ``{**context, **layout_data, "content": html}``.
  ``content`` always wins over a user value of the same name.
- Any render failure aborts the whole chain and propagates unchanged.
- Chains are not checked for cycles unless ``max_depth`` is set.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from kida.template import Markup

from kida_layouts.errors import LayoutDepthError, LayoutPathError
from kida_layouts.renderer import TemplateRenderer, render_in_thread

if TYPE_CHECKING:
    from kida_layouts.config import LayoutConfig

logger = logging.getLogger("kida_layouts.composer")

CONTENT_KEY = "content"
EXTEND_KEY = "extend"


@dataclass(frozen=True, slots=True)
class ExtendDeclaration:
    """The layout a template asked to be wrapped in, and the data for it."""

    layout: str
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RenderResult:
    """Outcome of rendering one level of a composition chain.

    Attributes:
        name: Template name that was rendered.
        output: Rendered string.
        context: Working context the template saw (``extend`` included).
        declaration: The last ``extend()`` call, or ``None`` when the
            template declared no layout.
    """

    name: str
    output: str
    context: dict[str, Any]
    declaration: ExtendDeclaration | None = None

    @property
    def extends(self) -> bool:
        return self.declaration is not None


class ExtendRecorder:
    """The ``extend`` callable injected into one render.

    Each render gets its own recorder, so concurrent compositions never
    share state. Calling it again replaces the earlier declaration.
    """

    __slots__ = ("declaration",)

    def __init__(self) -> None:
        self.declaration: ExtendDeclaration | None = None

    def __call__(
        self,
        layout: str | None = None,
        data: Mapping[str, Any] | None = None,
        /,
        **extra: Any,
    ) -> None:
        if not layout:
            raise LayoutPathError
        if not isinstance(layout, str):
            raise LayoutPathError(
                f"Layout name for extend() must be a string, got {type(layout).__name__}."
            )
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(
                f"Layout data for extend() must be a mapping, got {type(data).__name__}."
            )
        if extra:
            data = {**(data or {}), **extra}
        self.declaration = ExtendDeclaration(layout, {} if data is None else data)
        logger.debug("extend(%r) recorded", layout)
        # Rendered inline, so nothing may show up where extend() was called.
        return None


def resolve_layout_name(current: str, layout: str, default_extension: str = ".html") -> str:
    """Resolve a declared layout name against the declaring template.

    Example:
        >>> resolve_layout_name("pages/blog/post.html", "../layouts/base")
        'pages/layouts/base.html'
        >>> resolve_layout_name("pages/blog/post.html", "/layouts/base")
        'layouts/base.html'
    """
    layout = layout.replace("\\", "/")
    if not posixpath.splitext(layout)[1]:
        layout += default_extension
    if layout.startswith("/"):
        return posixpath.normpath(layout.lstrip("/"))
    directory = posixpath.dirname(current.replace("\\", "/"))
    return posixpath.normpath(posixpath.join(directory, layout))


def merge_context(result: RenderResult) -> dict[str, Any]:
    """Build the context for the layout that wraps *result*."""
    if result.declaration is None:
        msg = f"{result.name!r} did not call extend(); there is no layout to merge into"
        raise ValueError(msg)
    merged = {**result.context, **result.declaration.data}
    merged[CONTENT_KEY] = Markup(result.output)
    return merged


class LayoutComposer:
    """Render a template and every layout it extends, innermost first.

    Usage::

        composer = LayoutComposer(KidaRenderer(env))
        html = await composer.compose("pages/home.html", {"user": user})

    ``compose()`` renders each level in a worker thread; ``compose_sync()``
    runs the same chain on the calling thread.
    """

    __slots__ = ("_renderer", "default_extension", "max_depth")

    def __init__(
        self,
        renderer: TemplateRenderer,
        *,
        default_extension: str = ".html",
        max_depth: int | None = None,
    ) -> None:
        self._renderer = renderer
        self.default_extension = default_extension
        self.max_depth = max_depth

    @classmethod
    def from_config(cls, renderer: TemplateRenderer, config: LayoutConfig) -> LayoutComposer:
        return cls(
            renderer,
            default_extension=config.default_extension,
            max_depth=config.max_depth,
        )

    @property
    def renderer(self) -> TemplateRenderer:
        return self._renderer

    # -- Single level --

    async def render_step(self, name: str, context: Mapping[str, Any]) -> RenderResult:
        """Render one template with ``extend`` injected."""
        working, recorder = _prepare(context)
        output = await render_in_thread(self._renderer, name, working)
        return _settle(name, output, working, recorder)

    def render_step_sync(self, name: str, context: Mapping[str, Any]) -> RenderResult:
        """Synchronous twin of :meth:`render_step`."""
        working, recorder = _prepare(context)
        output = self._renderer.render(name, working)
        return _settle(name, output, working, recorder)

    # -- Whole chain --

    async def compose(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render *name* and wrap it in its layouts.

        Returns the outermost layout's output. Raises the first render
        failure of any level; nothing is returned alongside an error.
        """
        chain = [name]
        current: Mapping[str, Any] = context or {}
        while True:
            result = await self.render_step(name, current)
            step = self._advance(result, chain)
            if step is None:
                return result.output
            name, current = step

    def compose_sync(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Synchronous twin of :meth:`compose`."""
        chain = [name]
        current: Mapping[str, Any] = context or {}
        while True:
            result = self.render_step_sync(name, current)
            step = self._advance(result, chain)
            if step is None:
                return result.output
            name, current = step

    def _advance(
        self, result: RenderResult, chain: list[str]
    ) -> tuple[str, dict[str, Any]] | None:
        """Decide the next level, or ``None`` when the chain is complete."""
        if result.declaration is None:
            logger.debug("Rendered %s (chain complete after %d level(s))", result.name, len(chain))
            return None

        next_name = resolve_layout_name(
            result.name, result.declaration.layout, self.default_extension
        )
        chain.append(next_name)
        if self.max_depth is not None and len(chain) > self.max_depth:
            raise LayoutDepthError(tuple(chain), self.max_depth)

        logger.debug("Rendered %s, extending %s", result.name, next_name)
        return next_name, merge_context(result)

    def __repr__(self) -> str:
        return (
            f"LayoutComposer({self._renderer!r}, default_extension={self.default_extension!r}, "
            f"max_depth={self.max_depth!r})"
        )


def _prepare(context: Mapping[str, Any]) -> tuple[dict[str, Any], ExtendRecorder]:
    recorder = ExtendRecorder()
    working = dict(context)
    working[EXTEND_KEY] = recorder
    return working, recorder


def _settle(
    name: str, output: str, working: dict[str, Any], recorder: ExtendRecorder
) -> RenderResult:
    return RenderResult(name, output, working, recorder.declaration)
