"""Pure rendering functions: derived tables -> HTML strings.

All renderers follow the same pattern:
  - Input: dataclasses from analysis/
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Number formatting (percentages, ± spreads, "n/a" for undefined values) happens
here and only here; analysis/ returns plain numbers.

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - effort_table: build_effort_table_html
  - ice_mode_table: build_ice_mode_html
  - sightings_table: build_predator_table_html, build_tow_table_html
  - grid_map: build_grid_map_html
  - palette: CategoryStyle, build_category_palette
  - formatting: format_estimate, format_percent

Adding a renderer (report section)
----------------------------------
1. Create ``renderers/{name}.py`` with a build function::

       from amlr_survey.renderers import render_template

       def build_mysection_html(rows: list[SomeRow]) -> str:
           return render_template("mysection.html.j2", rows=[...])

2. Create a Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments (no <html>/<body> tags).
   CSS goes in ``templates/base.html.j2`` within the <style> block.

3. Wire into ``flows/build.py``:
   - Call your build function in ``build_all()`` and pass the result
     to ``render_template("base.html.j2", ..., mysection=result)``.
   - Add the ``{{ mysection }}`` placeholder in ``base.html.j2``.

4. Add tests: call your build function with sample data and assert
   the returned HTML contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
