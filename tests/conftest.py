"""Shared fixtures for kida-layouts tests."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import pytest
from kida import DictLoader, Environment

from kida_layouts.composer import LayoutComposer
from kida_layouts.renderer import KidaRenderer

type TemplateFunc = Callable[[dict[str, Any]], str]


class ScriptedRenderer:
    """Renderer whose templates are plain Python functions.

    Each call is recorded as ``(name, context)`` so tests can inspect
    exactly what every level of a chain was rendered with.
    """

    def __init__(self, templates: Mapping[str, TemplateFunc]) -> None:
        self.templates = dict(templates)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render(self, name: str, context: Mapping[str, Any]) -> str:
        self.calls.append((name, dict(context)))
        try:
            template = self.templates[name]
        except KeyError:
            raise LookupError(f"template not found: {name}") from None
        return template(dict(context))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def scripted() -> Callable[..., tuple[LayoutComposer, ScriptedRenderer]]:
    def factory(
        templates: Mapping[str, TemplateFunc], **kwargs: Any
    ) -> tuple[LayoutComposer, ScriptedRenderer]:
        renderer = ScriptedRenderer(templates)
        return LayoutComposer(renderer, **kwargs), renderer

    return factory


@pytest.fixture
def kida_composer() -> Callable[..., LayoutComposer]:
    """Composer over an in-memory kida environment."""

    def factory(templates: dict[str, str], **kwargs: Any) -> LayoutComposer:
        env = Environment(loader=DictLoader(templates), autoescape=True)
        return LayoutComposer(KidaRenderer(env), **kwargs)

    return factory


@pytest.fixture
def write_templates(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative_name: source}`` under a temporary template dir."""

    def writer(files: dict[str, str]) -> Path:
        root = tmp_path / "templates"
        for name, source in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source)
        root.mkdir(exist_ok=True)
        return root

    return writer
