"""
Тесты поиска и чтения файлов шаблонов.
"""

import pytest

from elsql.errors import ElSqlLoadError
from elsql.loader import discover_files, read_lines_from, resolve_inputs
from tests.infrastructure import write


def rel(paths, root):
    return [p.relative_to(root.resolve()).as_posix() for p in paths]


class TestReadLines:

    def test_terminators_stripped(self, tmp_path):
        path = write(tmp_path / "a.elsql", "@NAME(A)\r\n  x\r\n")
        assert read_lines_from(path) == ["@NAME(A)", "  x"]

    def test_missing(self, tmp_path):
        with pytest.raises(ElSqlLoadError):
            read_lines_from(tmp_path / "none.elsql")


class TestDiscover:

    def test_finds_elsql_files_sorted(self, sqlproj):
        found = discover_files(sqlproj / "sql")
        assert rel(found, sqlproj / "sql") == ["Users-postgres.elsql", "Users.elsql", "extra/Orders.elsql"]

    def test_exclude_file_pattern(self, sqlproj):
        found = discover_files(sqlproj / "sql", exclude=["*-postgres.elsql"])
        assert rel(found, sqlproj / "sql") == ["Users.elsql", "extra/Orders.elsql"]

    def test_exclude_directory(self, sqlproj):
        found = discover_files(sqlproj / "sql", exclude=["extra/"])
        assert rel(found, sqlproj / "sql") == ["Users-postgres.elsql", "Users.elsql"]


class TestResolveInputs:

    def test_files_and_directories(self, sqlproj):
        users = sqlproj / "sql" / "Users.elsql"
        resolved = resolve_inputs([users, sqlproj / "sql" / "extra"])
        assert resolved[0] == users
        assert resolved[1].name == "Orders.elsql"

    def test_missing_input(self, tmp_path):
        with pytest.raises(ElSqlLoadError, match="Input not found"):
            resolve_inputs([tmp_path / "nope"])
