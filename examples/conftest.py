"""Shared pytest configuration for kida-layouts examples.

``example`` executes the ``app.py`` next to the requesting test and
exposes its globals as attributes, so every test starts with a new engine.
"""

import runpy
from pathlib import Path
from types import SimpleNamespace

import pytest


@pytest.fixture
def example(request: pytest.FixtureRequest) -> SimpleNamespace:
    app_path = Path(request.path).parent / "app.py"
    namespace = runpy.run_path(str(app_path), run_name=f"example_{app_path.parent.name}")
    return SimpleNamespace(**namespace)
