"""Fixed-width box rendering.

Functions:
    format_cell(value, column, section)  -> str
    format_row(section, row)             -> str
    render_box(section)                  -> str

A rendered box looks like::

    .___________________________.
    |           Modules         |
    |---------------------------|
    | fts5                      |
    | json1                     |
    |___________________________|

followed by one blank line. Column widths are fixed by the section, never
sized to content: a value longer than its column widens that row only.
"""

from typing import Any

from sqlite_intro.client import MalformedRow
from sqlite_intro.models import Column, Section


# --------------------------------------------------------------------------- #
# Cells and rows
# --------------------------------------------------------------------------- #

def format_cell(value: Any, column: Column, section: str = "") -> str:
    """Pad *value* into *column*'s field and surround it with its margins.

    Raises:
        MalformedRow: if the value cannot be rendered with the column's
                      format (e.g. text in an integer column, or ``None``).
    """
    try:
        text = format(value, column.format_spec)
    except (TypeError, ValueError) as exc:
        raise MalformedRow(section, value, f"column '{column.heading.strip()}': {exc}") from exc
    left, right = column.margin
    return " " * left + text + " " * right


def format_row(section: Section, row: tuple) -> str:
    if len(row) != len(section.columns):
        raise MalformedRow(
            section.name, row,
            f"expected {len(section.columns)} cells, got {len(row)}",
        )
    try:
        cells = [format_cell(v, c, section.name) for v, c in zip(row, section.columns)]
    except MalformedRow as exc:
        raise MalformedRow(section.name, row, exc.reason) from exc
    return "|" + "|".join(cells) + "|"


# --------------------------------------------------------------------------- #
# Box
# --------------------------------------------------------------------------- #

def _segments(section: Section, fill: str) -> str:
    """A border line split at every column boundary."""
    return "|" + "|".join(fill * c.inner_width for c in section.columns) + "|"


def render_box(section: Section) -> str:
    """Render *section* as a bordered table, ending with a blank line."""
    span = section.span

    lines = ["." + "_" * span + "."]
    lines.extend("|" + text + "|" for text in section.banner)
    lines.append("|" + "|".join(c.heading for c in section.columns) + "|")
    # A banner spans the whole box, and so does the rule below the headings.
    lines.append("|" + "-" * span + "|" if section.banner else _segments(section, "-"))
    lines.extend(format_row(section, row) for row in section.rows)
    lines.append(_segments(section, "_"))

    return "\n".join(lines) + "\n\n"
