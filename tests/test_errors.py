"""Tests for kida_layouts.errors: exception hierarchy and error messages."""

from kida_layouts.errors import (
    ConfigurationError,
    LayoutDepthError,
    LayoutError,
    LayoutPathError,
)


class TestHierarchy:
    def test_configuration_error_is_layout_error(self) -> None:
        assert issubclass(ConfigurationError, LayoutError)

    def test_path_error_is_layout_error(self) -> None:
        assert issubclass(LayoutPathError, LayoutError)

    def test_path_error_is_value_error(self) -> None:
        assert issubclass(LayoutPathError, ValueError)

    def test_depth_error_is_layout_error(self) -> None:
        assert issubclass(LayoutDepthError, LayoutError)


class TestLayoutPathError:
    def test_default_message(self) -> None:
        assert str(LayoutPathError()) == "Missing layout name for extend()."

    def test_custom_message(self) -> None:
        assert str(LayoutPathError("nope")) == "nope"


class TestLayoutDepthError:
    def test_attributes(self) -> None:
        err = LayoutDepthError(("a.html", "b.html", "a.html"), 2)
        assert err.chain == ("a.html", "b.html", "a.html")
        assert err.max_depth == 2

    def test_message_lists_chain(self) -> None:
        err = LayoutDepthError(("a.html", "b.html", "a.html"), 2)
        assert str(err) == "Layout chain exceeded max_depth=2: a.html -> b.html -> a.html"
