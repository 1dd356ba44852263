"""kida-layouts: nested layouts for kida templates.

A template declares the layout that wraps it by calling ``extend()``;
layouts may extend further layouts. The rendered child is handed to its
layout as ``content``.

Basic usage::

    from kida_layouts import LayoutEngine, View

    engine = LayoutEngine()
    html = await engine.render(View("pages/home.html", title="Home"))

Template side::

    {{ extend("../layouts/base", {"title": title}) }}
    <h1>{{ title }}</h1>

Layout side::

    <html><body>{{ content }}</body></html>
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "ExtendDeclaration",
    "KidaRenderer",
    "LayoutComposer",
    "LayoutConfig",
    "LayoutDepthError",
    "LayoutEngine",
    "LayoutError",
    "LayoutPathError",
    "RenderResult",
    "TemplateRenderer",
    "View",
    "ViewEngine",
    "create_environment",
    "resolve_layout_name",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import kida_layouts`` fast while providing a clean top-level API.
    """
    if name in ("LayoutEngine", "View", "ViewEngine"):
        from kida_layouts import views as _views

        return getattr(_views, name)

    if name in ("ExtendDeclaration", "LayoutComposer", "RenderResult", "resolve_layout_name"):
        from kida_layouts import composer as _composer

        return getattr(_composer, name)

    if name in ("KidaRenderer", "TemplateRenderer"):
        from kida_layouts import renderer as _renderer

        return getattr(_renderer, name)

    if name == "LayoutConfig":
        from kida_layouts.config import LayoutConfig

        return LayoutConfig

    if name == "create_environment":
        from kida_layouts.environment import create_environment

        return create_environment

    if name in (
        "ConfigurationError",
        "LayoutDepthError",
        "LayoutError",
        "LayoutPathError",
    ):
        from kida_layouts import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
