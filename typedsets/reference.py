"""Markdown reference of the library, rendered from a Jinja2 template."""

import os
from typing import Any

import jinja2

from .env import Entry, Environment
from .library import Section
from .report import format_signature
from .terms import pretty

_TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), "templates")
_ENV = jinja2.Environment(
    loader=jinja2.FileSystemLoader(_TEMPLATE_DIR),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
)
_ENV.filters["pretty"] = pretty
_ENV.filters["signature"] = format_signature


def render(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template with the given keyword arguments."""
    template = _ENV.get_template(template_name)
    return template.render(**kwargs)


def render_reference(
    env: Environment, sections: list[tuple[Section, tuple[Entry, ...]]]
) -> str:
    return render(
        "reference.md.j2",
        sections=sections,
        axioms=env.axioms(),
        conjectures=env.conjectures(),
        implicits=env.implicits,
        counts=env.describe(),
    )
