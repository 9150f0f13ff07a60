"""Tests for sqlite_intro/config.py"""

import textwrap
from pathlib import Path

import pytest

from sqlite_intro.config import (
    Config,
    ConfigError,
    DatabaseNotFoundError,
    database_path,
    generate_template,
    load,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _no_database_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)


def write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "sqlite-intro.yaml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


VALID_YAML = """\
    database:
      url: "sqlite://app.db"
      timeout: 10
    databases:
      main:  "sqlite://app.db"
      cache: "/var/lib/app/cache.db"
    """


# ---------------------------------------------------------------------------
# load() - happy path
# ---------------------------------------------------------------------------

def test_load_valid_config(tmp_path):
    p = write_config(tmp_path, VALID_YAML)
    config = load(str(p))
    assert config.url == "sqlite://app.db"
    assert config.timeout == 10
    assert config.read_only is True
    assert config.databases == {"main": "sqlite://app.db", "cache": "/var/lib/app/cache.db"}


def test_load_aliases_only(tmp_path):
    p = write_config(tmp_path, """\
        databases:
          main: "app.db"
        """)
    config = load(str(p))
    assert config.url == ""
    assert config.resolve_database("main") == "app.db"


# ---------------------------------------------------------------------------
# load() - missing file
# ---------------------------------------------------------------------------

def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load(str(tmp_path / "no-such-file.yaml"))


def test_load_missing_file_with_database_url(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://env.db")
    config = load(str(tmp_path / "no-such-file.yaml"))
    assert config.url == "sqlite://env.db"
    assert config.databases == {}


# ---------------------------------------------------------------------------
# load() - invalid content
# ---------------------------------------------------------------------------

def test_load_no_target(tmp_path):
    p = write_config(tmp_path, """\
        database:
          timeout: 5
        """)
    with pytest.raises(ConfigError, match="no target database"):
        load(str(p))


def test_load_bad_timeout(tmp_path):
    p = write_config(tmp_path, """\
        database:
          url: "sqlite://app.db"
          timeout: soon
        """)
    with pytest.raises(ConfigError, match="timeout"):
        load(str(p))


def test_load_negative_timeout(tmp_path):
    p = write_config(tmp_path, """\
        database:
          url: "sqlite://app.db"
          timeout: -1
        """)
    with pytest.raises(ConfigError, match="negative"):
        load(str(p))


def test_load_not_a_mapping(tmp_path):
    p = write_config(tmp_path, "- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load(str(p))


def test_load_invalid_yaml(tmp_path):
    p = write_config(tmp_path, "database: [unclosed\n")
    with pytest.raises(ConfigError, match="Failed to parse"):
        load(str(p))


# ---------------------------------------------------------------------------
# load() - environment variable overrides
# ---------------------------------------------------------------------------

def test_env_database_url_overrides_config(tmp_path, monkeypatch):
    p = write_config(tmp_path, VALID_YAML)
    monkeypatch.setenv("DATABASE_URL", "sqlite://override.db")
    config = load(str(p))
    assert config.url == "sqlite://override.db"
    assert config.timeout == 10


# ---------------------------------------------------------------------------
# resolve_database()
# ---------------------------------------------------------------------------

def test_resolve_default():
    config = Config(url="sqlite://app.db")
    assert config.resolve_database() == "sqlite://app.db"


def test_resolve_default_missing_raises():
    config = Config(databases={"main": "app.db"})
    with pytest.raises(DatabaseNotFoundError, match="DATABASE_URL"):
        config.resolve_database()


def test_resolve_known_alias():
    config = Config(databases={"main": "sqlite://app.db"})
    assert config.resolve_database("main") == "sqlite://app.db"


def test_resolve_raw_value_fallback():
    config = Config(databases={"main": "/data/app.db"})
    assert config.resolve_database("/data/app.db") == "/data/app.db"


def test_resolve_raw_sqlite_url():
    config = Config(databases={"main": "app.db"})
    assert config.resolve_database("sqlite://other.db") == "sqlite://other.db"


def test_resolve_unknown_raises():
    config = Config(databases={"main": "app.db"})
    with pytest.raises(DatabaseNotFoundError, match="unknown-db"):
        config.resolve_database("unknown-db")


# ---------------------------------------------------------------------------
# database_path()
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("url, expected", [
    ("sqlite://app.db", "app.db"),
    ("sqlite:app.db", "app.db"),
    ("sqlite:///abs/app.db", "/abs/app.db"),
    ("sqlite::memory:", ":memory:"),
    ("plain/path.db", "plain/path.db"),
    ("sqlite:app.db?mode=ro", "app.db"),
    ("sqlite://app.db?mode=rwc&cache=shared", "app.db"),
    ("sqlite::memory:?cache=shared", ":memory:"),
])
def test_database_path(url, expected):
    assert database_path(url) == expected


# ---------------------------------------------------------------------------
# generate_template()
# ---------------------------------------------------------------------------

def test_generate_template_creates_file(tmp_path):
    out = tmp_path / "sqlite-intro.yaml"
    generate_template(str(out))
    assert out.exists()
    content = out.read_text()
    assert "database:" in content
    assert "databases:" in content


def test_generated_template_loads(tmp_path):
    out = tmp_path / "sqlite-intro.yaml"
    generate_template(str(out))
    config = load(str(out))
    assert config.url == "sqlite://app.db"
    assert "cache" in config.databases


def test_generate_template_refuses_to_overwrite(tmp_path):
    out = tmp_path / "sqlite-intro.yaml"
    out.write_text("existing content")
    with pytest.raises(ConfigError, match="already exists"):
        generate_template(str(out))
