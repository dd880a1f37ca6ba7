"""
ElSql: SQL-шаблоны с @-тегами и конфигурацией диалектов.

    bundle = ElSqlBundle.of(dialects.get("postgres"), Path("sql/Users"))
    sql = bundle.get_sql("Search", {"name": "Jo%", "paging_fetch": 20})
"""

from . import dialects
from .bundle import ElSqlBundle
from .dialects import DialectConfig
from .errors import (
    DialectError,
    DialectNotFoundError,
    ElSqlConfigError,
    ElSqlError,
    ElSqlFormatError,
    ElSqlLoadError,
    ElSqlLookupError,
    ElSqlRenderError,
    FragmentNotFoundError,
    InvalidParameterError,
    RawIncludeForbiddenError,
    VariableNotFoundError,
)
from .params import EmptyParameterSource, MapParameterSource, ParameterSource
from .template import FragmentRenderer, parse_lines, parse_text
from .version import tool_version

__all__ = [
    "dialects",
    "ElSqlBundle",
    "DialectConfig",
    "FragmentRenderer",
    "parse_lines",
    "parse_text",
    "ParameterSource",
    "MapParameterSource",
    "EmptyParameterSource",
    "ElSqlError",
    "ElSqlFormatError",
    "ElSqlLookupError",
    "FragmentNotFoundError",
    "VariableNotFoundError",
    "ElSqlRenderError",
    "InvalidParameterError",
    "RawIncludeForbiddenError",
    "DialectError",
    "DialectNotFoundError",
    "ElSqlConfigError",
    "ElSqlLoadError",
    "tool_version",
]
