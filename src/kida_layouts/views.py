"""Host-facing rendering surface.

``View`` is the value a request handler returns to have a template
composed with its layouts. ``LayoutEngine`` owns the configuration, the
kida environment, and the composer, and renders views. ``ViewEngine``
adapts the engine to the conventional ``(name, context, callback)``
view-engine contract for hosts that expect a completion callback.
"""

from __future__ import annotations

import inspect
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from kida import Environment

from kida_layouts.composer import LayoutComposer
from kida_layouts.config import LayoutConfig
from kida_layouts.environment import check_reserved_globals, create_environment
from kida_layouts.errors import ConfigurationError
from kida_layouts.renderer import KidaRenderer

type ViewCallback = Callable[[BaseException | None, str | None], Any]


@dataclass(frozen=True, slots=True)
class View:
    """Render a template together with every layout it extends.

    Usage::

        return View("pages/home.html", title="Home", items=items)
    """

    name: str
    context: dict[str, Any] = field(default_factory=dict)

    def __init__(self, name: str, /, **context: Any) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "context", context)


class LayoutEngine:
    """Configure once, then compose views with their layouts.

    Filters and globals are registered up front. The first render
    freezes the engine: the kida environment is built and further
    registration raises ``ConfigurationError``::

        engine = LayoutEngine(LayoutConfig(template_dir="views"))

        @engine.template_filter()
        def currency(value: float) -> str:
            return f"${value:,.2f}"

        html = await engine.render(View("pages/home.html", user=user))
    """

    __slots__ = (
        "_composer",
        "_custom_env",
        "_env",
        "_freeze_lock",
        "_frozen",
        "_template_filters",
        "_template_globals",
        "config",
    )

    def __init__(
        self,
        config: LayoutConfig | None = None,
        *,
        env: Environment | None = None,
    ) -> None:
        self.config: LayoutConfig = config or LayoutConfig()
        self._template_filters: dict[str, Callable[..., Any]] = {}
        self._template_globals: dict[str, Any] = {}
        self._custom_env: Environment | None = env  # User-provided kida environment
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state: set during _freeze()
        self._env: Environment | None = None
        self._composer: LayoutComposer | None = None

    # -- Registration --

    def template_filter(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            filter_name = name or func.__name__
            self._template_filters[filter_name] = func
            return func

        return decorator

    def template_global(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template global."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._check_not_frozen()
            global_name = name or func.__name__
            self._template_globals[global_name] = func
            return func

        return decorator

    # -- Rendering --

    @property
    def env(self) -> Environment:
        self._ensure_frozen()
        assert self._env is not None
        return self._env

    @property
    def composer(self) -> LayoutComposer:
        self._ensure_frozen()
        assert self._composer is not None
        return self._composer

    async def render(self, view: View) -> str:
        """Compose *view* with its layouts in worker threads."""
        return await self.composer.compose(view.name, view.context)

    def render_sync(self, view: View) -> str:
        """Compose *view* with its layouts on the calling thread."""
        return self.composer.compose_sync(view.name, view.context)

    def view_engine(self) -> ViewEngine:
        """Return a callback-style adapter bound to this engine."""
        return ViewEngine(self)

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking.

        Concurrent first renders must build exactly one environment.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the environment, renderer, and composer.

        MUST only be called while holding _freeze_lock.
        """
        if self._custom_env is not None:
            check_reserved_globals(self._template_globals)
            env = self._custom_env
            if self._template_filters:
                env.update_filters(self._template_filters)
            for name, value in self._template_globals.items():
                env.add_global(name, value)
        else:
            env = create_environment(
                self.config, self._template_filters, self._template_globals
            )
        self._env = env
        self._composer = LayoutComposer.from_config(KidaRenderer(env), self.config)
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the layout engine after it has started rendering. "
                "Register filters and globals before the first render."
            )
            raise ConfigurationError(msg)


class ViewEngine:
    """``(name, context, callback)`` adapter around a ``LayoutEngine``.

    The callback runs exactly once per call, either as
    ``callback(error, None)`` or ``callback(None, html)``. It may be a
    plain function or a coroutine function::

        engine_fn = LayoutEngine(config).view_engine()
        await engine_fn("home.html", {"name": "Dear User"}, on_done)
    """

    __slots__ = ("_engine",)

    def __init__(self, engine: LayoutEngine) -> None:
        self._engine = engine

    async def __call__(
        self,
        name: str,
        context: Mapping[str, Any],
        callback: ViewCallback,
    ) -> None:
        try:
            html = await self._engine.composer.compose(name, context)
        except Exception as exc:
            await _finish(callback, exc, None)
            return
        await _finish(callback, None, html)


async def _finish(callback: ViewCallback, error: BaseException | None, html: str | None) -> None:
    if inspect.isawaitable(outcome := callback(error, html)):
        await outcome
