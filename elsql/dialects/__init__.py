"""
Диалекты баз данных: правила LIKE и постраничной выборки.
"""

from .base import DialectConfig
from .builtin import (
    BUILTIN_DIALECTS,
    DEFAULT,
    HSQL,
    MYSQL,
    ORACLE,
    POSTGRES,
    SQLSERVER2008,
    VERTICA,
    LimitOffsetDialect,
    MySqlDialect,
    SqlServer2008Dialect,
)
from .load import load_dialects
from .registry import available, get, register

__all__ = [
    "DialectConfig",
    "LimitOffsetDialect",
    "MySqlDialect",
    "SqlServer2008Dialect",
    "BUILTIN_DIALECTS",
    "DEFAULT",
    "HSQL",
    "MYSQL",
    "ORACLE",
    "POSTGRES",
    "SQLSERVER2008",
    "VERTICA",
    "load_dialects",
    "available",
    "get",
    "register",
]
