from pathlib import Path

import pytest

from elsql.dialects import registry
from elsql.template import parse_lines

# Импорт из унифицированной инфраструктуры
from tests.infrastructure import jload, run_cli, write, write_elsql  # noqa: F401


@pytest.fixture
def parse():
    """Разбор шаблона, заданного списком строк."""
    def _parse(*lines: str, strict: bool = False):
        return parse_lines(list(lines), strict=strict)
    return _parse


@pytest.fixture
def sqlproj(tmp_path: Path) -> Path:
    """Каталог с основным файлом, переопределением для postgres и вложенным каталогом."""
    root = tmp_path
    write_elsql(root / "sql" / "Users.elsql", """
        -- основной файл
        @NAME(Select)
          SELECT * FROM users
          @WHERE
            @AND(:name)
              name @LIKE :name
            @AND(:active)
              active = :active
          @OFFSETFETCH

        @NAME(Count)
          SELECT COUNT(*) FROM users
    """)
    write_elsql(root / "sql" / "Users-postgres.elsql", """
        @NAME(Count)
          SELECT COUNT(1) FROM users
    """)
    write_elsql(root / "sql" / "extra" / "Orders.elsql", """
        @NAME(Orders)
          SELECT * FROM orders
    """)
    write(root / "sql" / "README.txt", "not a template\n")
    return root


@pytest.fixture
def restore_dialects():
    """Снимок реестра диалектов; восстанавливается после теста."""
    snapshot = dict(registry._REGISTRY)
    yield
    registry._REGISTRY.clear()
    registry._REGISTRY.update(snapshot)
