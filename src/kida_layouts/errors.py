"""kida-layouts exception hierarchy.

Shared across the composer, the environment factory, and the view layer
so every module raises and catches the same types. Failures raised by
kida itself (missing templates, syntax errors) are never wrapped.
"""


class LayoutError(Exception):
    """Base for all kida-layouts errors."""


class ConfigurationError(LayoutError):
    """Raised when configuration or registration is invalid.

    Typically raised by ``LayoutConfig`` or while the engine freezes.
    """


class LayoutPathError(LayoutError, ValueError):
    """``extend()`` was called without a layout name.

    Raised inside template evaluation, so kida reports it as a render
    failure with this error as the cause.
    """

    def __init__(self, detail: str = "Missing layout name for extend().") -> None:
        super().__init__(detail)


class LayoutDepthError(LayoutError):
    """A composition chain grew past ``LayoutConfig.max_depth``.

    Only raised when the depth guard is enabled. ``chain`` holds every
    template name visited, entry template first.
    """

    def __init__(self, chain: tuple[str, ...], max_depth: int) -> None:
        self.chain = chain
        self.max_depth = max_depth
        super().__init__(
            f"Layout chain exceeded max_depth={max_depth}: {' -> '.join(chain)}"
        )
