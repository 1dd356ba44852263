"""Layout composition configuration.

LayoutConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from kida_layouts.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Layout engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = LayoutConfig(template_dir="views", default_extension=".kida")
    """

    # Templates
    template_dir: str | Path = "templates"
    component_dirs: tuple[str | Path, ...] = ()  # Extra search paths (partials, shared layouts)
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Layouts
    default_extension: str = ".html"  # Appended to layout names declared without one
    max_depth: int | None = None  # None = unbounded (cyclic chains are not detected)

    # Development
    debug: bool = False  # Reload templates from disk when they change

    def __post_init__(self) -> None:
        if not self.default_extension.startswith(".") or len(self.default_extension) < 2:
            msg = f"default_extension must look like '.html', got {self.default_extension!r}"
            raise ConfigurationError(msg)
        if self.max_depth is not None and self.max_depth < 1:
            msg = f"max_depth must be a positive integer or None, got {self.max_depth!r}"
            raise ConfigurationError(msg)
