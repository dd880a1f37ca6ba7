"""
Сквозные тесты CLI (запуск `python -m elsql.cli` в подпроцессе).
"""

from elsql.cli import _parse_param
from tests.infrastructure import jload, run_cli, write


class TestRender:

    def test_render_default_dialect(self, sqlproj):
        cp = run_cli(sqlproj, "render", "Count", "sql/Users.elsql")
        assert cp.returncode == 0, cp.stderr
        assert cp.stdout == "SELECT COUNT(*) FROM users\n"

    def test_render_with_params_and_dialect(self, sqlproj):
        cp = run_cli(
            sqlproj, "render", "Select", "sql/Users.elsql",
            "--dialect", "postgres",
            "--param", "name=J%",
            "--param", "active=true",
            "--param", "paging_fetch=5",
        )
        assert cp.returncode == 0, cp.stderr
        assert cp.stdout.strip() == (
            "SELECT * FROM users WHERE name LIKE :name AND active = :active LIMIT 5"
        )

    def test_render_params_file(self, sqlproj):
        write(sqlproj / "params.yaml", "paging_offset: 20\n")
        cp = run_cli(sqlproj, "render", "Select", "sql/Users.elsql", "--params-file", "params.yaml")
        assert cp.returncode == 0, cp.stderr
        assert cp.stdout.strip() == "SELECT * FROM users OFFSET 20 ROWS"

    def test_render_directory_input_later_files_win(self, sqlproj):
        cp = run_cli(sqlproj, "render", "Count", "sql")
        assert cp.returncode == 0, cp.stderr
        # Users-postgres.elsql идёт раньше Users.elsql в порядке сортировки
        assert cp.stdout.strip() == "SELECT COUNT(*) FROM users"

    def test_render_custom_dialect_file(self, sqlproj):
        write(sqlproj / "dialects.yaml", "mydb:\n  base: mysql\n")
        cp = run_cli(
            sqlproj, "render", "Select", "sql/Users.elsql",
            "--dialects-file", "dialects.yaml", "--dialect", "mydb",
            "--param", "paging_offset=3",
        )
        assert cp.returncode == 0, cp.stderr
        assert cp.stdout.strip() == "SELECT * FROM users LIMIT 18446744073709551615 OFFSET 3"


class TestErrors:

    def test_unknown_fragment(self, sqlproj):
        cp = run_cli(sqlproj, "render", "Nope", "sql/Users.elsql")
        assert cp.returncode == 2
        assert "Unknown fragment name: Nope" in cp.stderr
        assert "Traceback" not in cp.stderr

    def test_unknown_dialect(self, sqlproj):
        cp = run_cli(sqlproj, "render", "Count", "sql/Users.elsql", "--dialect", "nosuchdb")
        assert cp.returncode == 2
        assert "Unknown dialect 'nosuchdb'" in cp.stderr

    def test_format_error_reports_line(self, tmp_path):
        write(tmp_path / "bad.elsql", "@NAME(A)\n  @IF(x)\n    y\n")
        cp = run_cli(tmp_path, "list", "bad.elsql")
        assert cp.returncode == 2
        assert "line 2" in cp.stderr

    def test_bad_param_syntax(self, sqlproj):
        cp = run_cli(sqlproj, "render", "Count", "sql/Users.elsql", "--param", "novalue")
        assert cp.returncode == 2
        assert "KEY=VALUE" in cp.stderr


class TestListAndDialects:

    def test_list_names(self, sqlproj):
        cp = run_cli(sqlproj, "list", "sql", "--exclude", "*-postgres.elsql")
        assert cp.returncode == 0, cp.stderr
        assert jload(cp.stdout) == {"names": ["Select", "Count", "Orders"]}
        assert cp.stdout.endswith("}\n")

    def test_dialects(self, tmp_path):
        cp = run_cli(tmp_path, "dialects")
        assert cp.returncode == 0, cp.stderr
        assert cp.stdout.endswith("}\n")
        data = jload(cp.stdout)
        by_name = {d["name"]: d for d in data["dialects"]}
        assert by_name["hsql"]["like_suffix"] == "ESCAPE '\\' "
        assert by_name["postgres"]["kind"] == "LimitOffsetDialect"
        assert "sqlserver2008" in by_name

    def test_version(self, tmp_path):
        cp = run_cli(tmp_path, "--version")
        assert cp.returncode == 0
        assert cp.stdout.startswith("elsql ")

    def test_debug_logging(self, sqlproj):
        cp = run_cli(sqlproj, "--debug", "list", "sql/Users.elsql")
        assert cp.returncode == 0, cp.stderr
        assert "DEBUG" in cp.stderr
        assert "Fragment tree:" in cp.stderr
        assert "NameFragment(name='Select')" in cp.stderr


class TestParseParam:

    def test_booleans(self):
        assert _parse_param("a=true") == ("a", True)
        assert _parse_param("a=false") == ("a", False)

    def test_strings_kept(self):
        assert _parse_param("a=5") == ("a", "5")
        assert _parse_param("a=x=y") == ("a", "x=y")
        assert _parse_param("a=") == ("a", "")
