"""
Встроенные диалекты.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .base import DialectConfig
from ..errors import DialectError

ESCAPE_BACKSLASH = "ESCAPE '\\' "

# Рекомендованный MySQL способ задать OFFSET без LIMIT
MYSQL_MAX_ROWS = 18446744073709551615


@dataclass(frozen=True)
class LimitOffsetDialect(DialectConfig):
    """
    Диалекты с синтаксисом LIMIT/OFFSET (PostgreSQL, Vertica).
    """

    def paging_clause(self, offset: Optional[int], fetch: Optional[int]) -> str:
        if offset is not None and fetch is not None:
            return f"LIMIT {fetch} OFFSET {offset} "
        if offset is not None:
            return f"OFFSET {offset} "
        if fetch is not None:
            return f"LIMIT {fetch} "
        return ""


@dataclass(frozen=True)
class MySqlDialect(DialectConfig):
    """MySQL: OFFSET допустим только вместе с LIMIT."""

    def paging_clause(self, offset: Optional[int], fetch: Optional[int]) -> str:
        if offset is not None and fetch is not None:
            return f"LIMIT {fetch} OFFSET {offset} "
        if offset is not None:
            return f"LIMIT {MYSQL_MAX_ROWS} OFFSET {offset} "
        if fetch is not None:
            return f"LIMIT {fetch} "
        return ""


_FROM = " FROM "
_ORDER_BY = " ORDER BY "
_SELECT_PREFIX = re.compile(r"\s*SELECT\s+", re.IGNORECASE)


@dataclass(frozen=True)
class SqlServer2008Dialect(DialectConfig):
    """
    SQL Server 2008: нет OFFSET/FETCH, постраничная выборка строится
    через ROW_NUMBER() поверх исходного запроса.

    Запрос должен иметь вид ``SELECT <columns> FROM <rest> ORDER BY <order>``.
    """

    def paging_clause(self, offset: Optional[int], fetch: Optional[int]) -> str:
        if offset is None and fetch is None:
            return ""
        raise DialectError(f"Dialect '{self.name}' does not support @OFFSETFETCH/@FETCH, use @PAGING")

    def add_paging(self, select: str, offset: Optional[int], fetch: Optional[int]) -> str:
        if offset is None and fetch is None:
            return select

        prefix = _SELECT_PREFIX.match(select)
        from_pos = select.find(_FROM)
        order_pos = select.rfind(_ORDER_BY)
        if prefix is None or from_pos < 0 or order_pos < from_pos:
            raise DialectError(
                f"Dialect '{self.name}' requires SELECT ... FROM ... ORDER BY ... inside @PAGING"
            )

        columns = select[prefix.end():from_pos].strip()
        source = select[from_pos + len(_FROM):order_pos].strip()
        order = select[order_pos + len(_ORDER_BY):].strip()

        start = (offset or 0) + 1
        inner = f"SELECT {columns}, ROW_NUMBER() OVER (ORDER BY {order}) AS ROW_NUM FROM {source}"
        outer = f"SELECT * FROM ({inner}) AS ROW_TABLE WHERE ROW_NUM >= {start}"
        if fetch is not None:
            outer += f" AND ROW_NUM < {start + fetch}"
        return outer + " ORDER BY ROW_NUM "


DEFAULT = DialectConfig(name="default")
HSQL = DialectConfig(name="hsql", like_suffix=ESCAPE_BACKSLASH)
MYSQL = MySqlDialect(name="mysql")
POSTGRES = LimitOffsetDialect(name="postgres")
ORACLE = DialectConfig(name="oracle", like_suffix=ESCAPE_BACKSLASH)
SQLSERVER2008 = SqlServer2008Dialect(name="sqlserver2008")
VERTICA = LimitOffsetDialect(name="vertica")

BUILTIN_DIALECTS = (DEFAULT, HSQL, MYSQL, POSTGRES, ORACLE, SQLSERVER2008, VERTICA)


__all__ = [
    "LimitOffsetDialect",
    "MySqlDialect",
    "SqlServer2008Dialect",
    "ESCAPE_BACKSLASH",
    "DEFAULT",
    "HSQL",
    "MYSQL",
    "POSTGRES",
    "ORACLE",
    "SQLSERVER2008",
    "VERTICA",
    "BUILTIN_DIALECTS",
]
