"""Data models for the introspection report.

Contains the value types passed between the metadata source and the renderer:
    - Identifiers     (application_id / user_version / schema_version)
    - FunctionInfo    (one row of pragma_function_list)
    - Metadata        (a point-in-time snapshot of all six categories)
    - Column, Section (a boxed table, ready to render)
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple


# ---------------------------------------------------------------------------
# Source rows
# ---------------------------------------------------------------------------

class Identifiers(NamedTuple):
    application_id: int
    user_version: int
    schema_version: int


class FunctionInfo(NamedTuple):
    name: str
    builtin: int
    kind: str        # "s" scalar, "a" aggregate, "w" window
    encoding: str
    arg_count: int   # -1 means variadic
    flags: int


@dataclass(frozen=True)
class Metadata:
    version: str
    identifiers: tuple
    modules: tuple[str, ...] = ()
    settings: tuple[str, ...] = ()
    compile_options: tuple[str, ...] = ()
    functions: tuple[tuple, ...] = ()


# ---------------------------------------------------------------------------
# Boxed tables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Column:
    """One column of a boxed table.

    ``width``, ``align`` and ``kind`` form the Python format spec applied to
    each value (``f"{align}{width}{kind}"``); ``margin`` is the number of
    blanks printed left and right of the field. ``heading`` is written as-is
    and is expected to be exactly ``inner_width`` characters long.
    """

    heading: str
    width: int
    align: str = "<"
    kind: str = "s"
    margin: tuple[int, int] = (1, 1)

    @property
    def inner_width(self) -> int:
        return self.margin[0] + self.width + self.margin[1]

    @property
    def format_spec(self) -> str:
        return f"{self.align}{self.width}{self.kind}"


@dataclass(frozen=True)
class Section:
    name: str
    columns: tuple[Column, ...]
    rows: tuple[tuple[Any, ...], ...] = ()
    banner: tuple[str, ...] = field(default=())

    @property
    def span(self) -> int:
        """Width between the two outer border characters."""
        return sum(c.inner_width for c in self.columns) + len(self.columns) - 1
