"""Kida environment setup for layout composition.

Creates a kida Environment from a LayoutConfig and binds user-registered
filters and globals. The environment is created once when the engine
freezes and shared by every composition afterwards.
"""

from collections.abc import Callable
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader

from kida_layouts.composer import CONTENT_KEY, EXTEND_KEY
from kida_layouts.config import LayoutConfig
from kida_layouts.errors import ConfigurationError

RESERVED_NAMES = frozenset({CONTENT_KEY, EXTEND_KEY})


def create_environment(
    config: LayoutConfig,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment from layout configuration.

    Searches ``config.template_dir`` first, then each entry of
    ``config.component_dirs`` (shared layouts, partials) in order.
    """
    check_reserved_globals(globals_ or {})

    loaders = [FileSystemLoader(str(config.template_dir))]
    loaders.extend(FileSystemLoader(str(d)) for d in config.component_dirs)

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    if filters:
        env.update_filters(filters)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


def check_reserved_globals(globals_: dict[str, Any]) -> None:
    """Reject globals the composer rebinds on every render."""
    reserved = RESERVED_NAMES.intersection(globals_)
    if reserved:
        msg = (
            f"Template global(s) {', '.join(sorted(reserved))} clash with names "
            "bound by the layout composer on every render."
        )
        raise ConfigurationError(msg)
