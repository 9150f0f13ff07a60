"""Shared fixtures: an in-memory metadata source standing in for SqliteClient."""

import pytest

from sqlite_intro.models import FunctionInfo, Identifiers


class FakeSource:
    """Returns canned rows; set ``fail_on`` to make one method raise."""

    def __init__(
        self,
        version="3.45.1",
        identifiers=(0, 7, 3),
        modules=("json_each", "fts5", "json_tree"),
        settings=("user_version", "application_id", "journal_mode"),
        compile_options=("THREADSAFE=1", "ENABLE_FTS5", "COMPILER=gcc-13.2.0"),
        functions=(
            FunctionInfo("substr", 1, "s", "utf8", 3, 2099200),
            FunctionInfo("abs", 1, "s", "utf8", 1, 2099200),
            FunctionInfo("substr", 1, "s", "utf8", 2, 2099200),
            FunctionInfo("count", 1, "w", "utf8", 0, 2097152),
            FunctionInfo("char", 1, "s", "utf8", -1, 2099200),
        ),
        fail_on=None,
        error=None,
    ):
        self.database = "fixture.db"
        self._data = {
            "get_version": version,
            "get_identifiers": Identifiers(*identifiers) if len(identifiers) == 3 else identifiers,
            "list_modules": list(modules),
            "list_settings": list(settings),
            "list_compile_options": list(compile_options),
            "list_functions": list(functions),
        }
        self.fail_on = fail_on
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    def _get(self, name):
        self.calls.append(name)
        if name == self.fail_on:
            raise self.error
        return self._data[name]

    def get_version(self):
        return self._get("get_version")

    def get_identifiers(self):
        return self._get("get_identifiers")

    def list_modules(self):
        return self._get("list_modules")

    def list_settings(self):
        return self._get("list_settings")

    def list_compile_options(self):
        return self._get("list_compile_options")

    def list_functions(self):
        return self._get("list_functions")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def make_source():
    return FakeSource
