"""Pure rendering functions: structured data -> terminal text.

All renderers follow the same pattern:
  - Input: a ``WeatherReport`` or plain provider status data
  - Output: str (printed by the CLI)
  - No side effects, no I/O

Public API:
  - report: build_report_table, build_report_json, report_rows
  - providers: build_provider_list
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers. Output is plain text, not HTML.
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
