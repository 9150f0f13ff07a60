"""Section assemblers - one per metadata category.

Functions:
    version_section(version)             -> Section
    identifiers_section(identifiers)     -> Section
    modules_section(names)               -> Section
    settings_section(names)              -> Section
    compile_options_section(options)     -> Section
    functions_section(functions)         -> Section

Headings are stored verbatim so the boxes line up byte for byte with the
classic ``intro.sql`` report.
"""

from operator import itemgetter
from typing import Any, Iterable

from sqlite_intro.client import MalformedRow
from sqlite_intro.models import Column, Section

# --------------------------------------------------------------------------- #
# Column layouts
# --------------------------------------------------------------------------- #

_VERSION_COLUMNS = (
    Column("    SQLite Version    ", 20, align=">"),
)

_IDENTIFIER_COLUMNS = (
    Column("    application_id    ", 20, align=">", kind="d"),
    Column("     user_version     ", 20, align=">", kind="d"),
    Column("    schema_version    ", 20, align=">", kind="d"),
)

_MODULE_COLUMNS = (
    Column("           Modules         ", 25),
)

_SETTING_COLUMNS = (
    Column("           PRAGMA          ", 25),
)

_COMPILE_OPTION_COLUMNS = (
    Column("          Compile Options            ", 35),
)

_FUNCTION_COLUMNS = (
    Column("              name              ", 30),
    Column(" builtin ", 1, align="", kind="d", margin=(4, 4)),
    Column(" type  ", 1, align="", margin=(3, 3)),
    Column(" encoding ", 7, margin=(2, 1)),
    Column(" narg ", 2, align=">", kind="d", margin=(2, 2)),
    Column("  flags  ", 7, align=">", kind="d"),
)

_CELL_TYPES = {"d": int, "s": str}

_FUNCTION_BANNER = (
    f"{'':32}Function List{'':33}",
    f"{'':32}{'-' * 13}{'':33}",
)


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #

def _section(
    name: str,
    columns: tuple[Column, ...],
    rows: Iterable[Any],
    sort_key: tuple[int, ...] = (),
    banner: tuple[str, ...] = (),
) -> Section:
    """Validate row arity and cell types, sort by *sort_key* (stable) and freeze.

    Every cell must match its column kind (``int`` for ``d``, ``str`` for
    ``s``), so sorting never compares mixed types.
    """
    checked: list[tuple] = []
    for row in rows:
        row = tuple(row)
        if len(row) != len(columns):
            raise MalformedRow(name, row, f"expected {len(columns)} cells, got {len(row)}")
        for value, column in zip(row, columns):
            expected = _CELL_TYPES[column.kind]
            if isinstance(value, bool) or not isinstance(value, expected):
                raise MalformedRow(
                    name, row,
                    f"column '{column.heading.strip()}' expects {expected.__name__}, "
                    f"got {type(value).__name__}",
                )
        checked.append(row)

    if sort_key:
        checked.sort(key=itemgetter(*sort_key))

    return Section(name=name, columns=columns, rows=tuple(checked), banner=banner)


def _single(values: Iterable[Any]) -> list[tuple]:
    return [(v,) for v in values]


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #

def version_section(version: str) -> Section:
    return _section("version", _VERSION_COLUMNS, [(version,)])


def identifiers_section(identifiers: Iterable[int]) -> Section:
    """application_id, user_version and schema_version on one row."""
    return _section("identifiers", _IDENTIFIER_COLUMNS, [identifiers])


def modules_section(names: Iterable[str]) -> Section:
    return _section("modules", _MODULE_COLUMNS, _single(names), sort_key=(0,))


def settings_section(names: Iterable[str]) -> Section:
    return _section("settings", _SETTING_COLUMNS, _single(names), sort_key=(0,))


def compile_options_section(options: Iterable[str]) -> Section:
    return _section("compile_options", _COMPILE_OPTION_COLUMNS, _single(options), sort_key=(0,))


def functions_section(functions: Iterable[tuple]) -> Section:
    """Registered functions, ordered by name then argument count.

    Overloads of the same name (e.g. ``substr`` with 2 and 3 arguments) stay
    in source order when their argument counts are equal.
    """
    return _section(
        "functions",
        _FUNCTION_COLUMNS,
        functions,
        sort_key=(0, 4),
        banner=_FUNCTION_BANNER,
    )
