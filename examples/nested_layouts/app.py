"""Nested layouts: a page wrapped in two layers of layout.

``home.html`` extends ``layouts/main``, which extends ``base``. Each
layout receives the level below it as ``content``; ``extend()`` data
(the page title) flows outward through the chain.

Run:
    python app.py
"""

from pathlib import Path

import anyio

from kida_layouts import LayoutConfig, LayoutEngine, View

engine = LayoutEngine(LayoutConfig(template_dir=Path(__file__).parent / "templates"))


@engine.template_filter()
def thousands(value: int) -> str:
    return f"{value:,}"


def home() -> View:
    return View(
        "home.html",
        name="Dear User",
        message="This is the home view.",
        pageTitle="Welcome",
        footerText=1334,
    )


async def main() -> None:
    print(await engine.render(home()))


if __name__ == "__main__":
    anyio.run(main)
