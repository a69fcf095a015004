"""Jinja2 rendering of the templates bundled under ``ddd/data/templates``."""
from __future__ import annotations

from typing import Any

from jinja2 import StrictUndefined, Template

from ddd.data import read_text


def render_template(name: str, **context: Any) -> str:
    """Render the bundled template ``name``; missing variables are an error."""
    template = Template(
        read_text("templates", name),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    return template.render(**context)


__all__ = ["render_template"]
