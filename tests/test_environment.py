"""Tests for kida_layouts.environment: building the kida Environment."""

import pytest

from kida_layouts.config import LayoutConfig
from kida_layouts.environment import RESERVED_NAMES, create_environment
from kida_layouts.errors import ConfigurationError


class TestCreateEnvironment:
    def test_loads_from_template_dir(self, write_templates) -> None:
        root = write_templates({"hello.html": "Hello, {{ name }}!"})
        env = create_environment(LayoutConfig(template_dir=root))
        assert env.get_template("hello.html").render(name="World") == "Hello, World!"

    def test_template_dir_searched_before_component_dirs(self, write_templates, tmp_path) -> None:
        root = write_templates({"base.html": "app"})
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "base.html").write_text("shared")
        (shared / "only_shared.html").write_text("only shared")

        env = create_environment(LayoutConfig(template_dir=root, component_dirs=(shared,)))
        assert env.get_template("base.html").render() == "app"
        assert env.get_template("only_shared.html").render() == "only shared"

    def test_autoescape_from_config(self, write_templates) -> None:
        root = write_templates({"x.html": "{{ v }}"})
        escaped = create_environment(LayoutConfig(template_dir=root))
        raw = create_environment(LayoutConfig(template_dir=root, autoescape=False))
        assert escaped.get_template("x.html").render(v="<b>") == "&lt;b&gt;"
        assert raw.get_template("x.html").render(v="<b>") == "<b>"

    def test_filters_and_globals(self, write_templates) -> None:
        root = write_templates({"x.html": "{{ word | shout }} {{ brand }}"})
        env = create_environment(
            LayoutConfig(template_dir=root),
            filters={"shout": lambda s: s.upper() + "!"},
            globals_={"brand": "acme"},
        )
        assert env.get_template("x.html").render(word="hi") == "HI! acme"

    @pytest.mark.parametrize("name", sorted(RESERVED_NAMES))
    def test_reserved_globals_rejected(self, write_templates, name: str) -> None:
        root = write_templates({})
        with pytest.raises(ConfigurationError, match=name):
            create_environment(LayoutConfig(template_dir=root), globals_={name: object()})

    def test_reserved_names(self) -> None:
        assert frozenset({"content", "extend"}) == RESERVED_NAMES
