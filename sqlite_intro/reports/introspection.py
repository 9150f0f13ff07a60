"""Introspection report generators.

Functions:
    build_report(source)              -> str   boxed text report
    get_metadata(source, database)    -> dict  same snapshot, JSON-ready
    get_version(source)               -> str
    get_module_names(source)          -> str   comma-separated

*source* is anything exposing the six SqliteClient read methods
(``get_version``, ``get_identifiers``, ``list_modules``, ``list_settings``,
``list_compile_options``, ``list_functions``).
"""

from datetime import datetime, timezone

from sqlite_intro.models import Metadata, Section
from sqlite_intro.reports.boxes import render_box
from sqlite_intro.reports.sections import (
    compile_options_section,
    functions_section,
    identifiers_section,
    modules_section,
    settings_section,
    version_section,
)

_FUNCTION_FIELDS = ("name", "builtin", "kind", "encoding", "arg_count", "flags")
_IDENTIFIER_FIELDS = ("application_id", "user_version", "schema_version")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_metadata(source) -> Metadata:
    """Fetch all six categories. Any source error propagates unchanged."""
    return Metadata(
        version=source.get_version(),
        identifiers=tuple(source.get_identifiers()),
        modules=tuple(source.list_modules()),
        settings=tuple(source.list_settings()),
        compile_options=tuple(source.list_compile_options()),
        functions=tuple(tuple(f) for f in source.list_functions()),
    )


def build_sections(metadata: Metadata) -> list[Section]:
    return [
        version_section(metadata.version),
        identifiers_section(metadata.identifiers),
        modules_section(metadata.modules),
        settings_section(metadata.settings),
        compile_options_section(metadata.compile_options),
        functions_section(metadata.functions),
    ]


def build_report(source) -> str:
    """Return the full boxed report.

    Everything is fetched before anything is rendered, so a failing source
    never yields a partial report.
    """
    metadata = collect_metadata(source)
    return "\n".join(render_box(s) for s in build_sections(metadata))


def get_metadata(source, database: str) -> dict:
    """Return the introspection snapshot as a JSON-serialisable report."""
    sections = {s.name: s for s in build_sections(collect_metadata(source))}

    return {
        "report_type":     "metadata",
        "database":        database,
        "generated_at":    datetime.now(timezone.utc).isoformat(),
        "version":         sections["version"].rows[0][0],
        "identifiers":     dict(zip(_IDENTIFIER_FIELDS, sections["identifiers"].rows[0])),
        "modules":         [r[0] for r in sections["modules"].rows],
        "settings":        [r[0] for r in sections["settings"].rows],
        "compile_options": [r[0] for r in sections["compile_options"].rows],
        "functions":       [dict(zip(_FUNCTION_FIELDS, r)) for r in sections["functions"].rows],
    }


def get_version(source) -> str:
    return source.get_version()


def get_module_names(source) -> str:
    return ",".join(sorted(source.list_modules()))
