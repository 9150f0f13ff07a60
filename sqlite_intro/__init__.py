"""sqlite-intro - render a SQLite engine's introspection metadata as boxed text tables."""

__version__ = "0.1.0"
