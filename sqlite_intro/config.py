"""Configuration loading and validation.

Usage:
    config = load("sqlite-intro.yaml")          # raises ConfigError on bad config
    url = config.resolve_database("main")       # returns "sqlite://app.db"
    path = database_path(url)                   # returns "app.db"
    generate_template("sqlite-intro.yaml")      # writes example file to disk
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_CONFIG = "sqlite-intro.yaml"
DEFAULT_TIMEOUT = 5.0


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the configuration is missing or invalid."""


class DatabaseNotFoundError(ConfigError):
    """Raised when a database alias is not found in the config."""


# ---------------------------------------------------------------------------
# Config dataclass
# ---------------------------------------------------------------------------

@dataclass
class Config:
    url: str = ""
    timeout: float = DEFAULT_TIMEOUT
    read_only: bool = True
    databases: dict[str, str] = field(default_factory=dict)

    def resolve_database(self, name: str | None = None) -> str:
        """Return the database URL for a given alias.

        With no name, the default ``database.url`` is used. A raw URL that is
        either mapped in ``databases`` or starts with ``sqlite:`` is accepted
        as-is.
        """
        if name is None:
            if self.url:
                return self.url
            raise DatabaseNotFoundError(
                "No database given and no default 'database.url' configured "
                "(or set the DATABASE_URL environment variable)."
            )
        if name in self.databases:
            return self.databases[name]
        if name in self.databases.values() or name.startswith("sqlite:"):
            return name
        available = ", ".join(self.databases.keys()) or "(none configured)"
        raise DatabaseNotFoundError(
            f"Database '{name}' not found. Available aliases: {available}"
        )


def database_path(url: str) -> str:
    """Strip the ``sqlite:`` scheme from *url* and return a sqlite3 path.

    ``sqlite://app.db``, ``sqlite:app.db`` and ``app.db`` all give ``app.db``;
    ``sqlite::memory:`` gives ``:memory:``. URL query parameters
    (``sqlite:app.db?mode=ro``) are dropped; the open mode comes from
    ``database.read_only``.
    """
    if url.startswith("sqlite:"):
        url = url.split("?", 1)[0]
    for prefix in ("sqlite://", "sqlite:"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load(config_path: str = DEFAULT_CONFIG) -> Config:
    """Load and validate configuration from a YAML file.

    The DATABASE_URL environment variable overrides ``database.url``. When
    the file does not exist but DATABASE_URL is set, defaults are used for
    everything else.

    Raises:
        ConfigError: if the file is missing (and DATABASE_URL is unset),
                     malformed, or holds invalid values.
    """
    path = Path(config_path)
    env_url = os.environ.get("DATABASE_URL", "").strip()

    if not path.exists():
        if env_url:
            return Config(url=env_url)
        raise ConfigError(
            f"Config file not found: '{config_path}'\n"
            "Run `python -m sqlite_intro init` to generate a template, "
            "or set the DATABASE_URL environment variable."
        )

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{config_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"'{config_path}' must be a YAML mapping at the top level.")

    database = raw.get("database") or {}
    if not isinstance(database, dict):
        raise ConfigError(f"'database' in '{config_path}' must be a mapping.")

    aliases = raw.get("databases") or {}
    if not isinstance(aliases, dict):
        raise ConfigError(f"'databases' in '{config_path}' must be a mapping of alias: url.")

    url = env_url or str(database.get("url") or "").strip()
    databases = {str(k): str(v) for k, v in aliases.items()}

    config = Config(
        url=url,
        timeout=database.get("timeout", DEFAULT_TIMEOUT),
        read_only=bool(database.get("read_only", True)),
        databases=databases,
    )
    _validate(config)
    return config


def _validate(config: Config) -> None:
    """Raise ConfigError if required fields are missing or invalid."""
    errors: list[str] = []

    if not config.url and not config.databases:
        errors.append(
            "  - no target database: set 'database.url' (or the DATABASE_URL "
            "environment variable) or add at least one alias under 'databases'"
        )
    if isinstance(config.timeout, bool) or not isinstance(config.timeout, (int, float)):
        errors.append("  - 'database.timeout' must be a number of seconds")
    elif config.timeout < 0:
        errors.append("  - 'database.timeout' must not be negative")

    if errors:
        raise ConfigError("Invalid configuration:\n" + "\n".join(errors))


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
database:
  url: "sqlite://app.db"      # default target; DATABASE_URL overrides it
  timeout: 5                  # seconds to wait when the database is locked
  read_only: true             # never create or modify the database file

databases:
  # Human-readable alias: SQLite URL or file path
  main:  "sqlite://app.db"
  cache: "/var/lib/app/cache.db"
"""


def generate_template(output_path: str = DEFAULT_CONFIG) -> None:
    """Write a template sqlite-intro.yaml to *output_path*.

    Raises:
        ConfigError: if the file already exists (to avoid overwriting it).
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
