"""
Источники значений параметров для рендеринга.

Рендерер не знает, откуда берутся значения: он спрашивает у источника,
задана ли переменная, и получает её значение по имени.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from ruamel.yaml import YAML

from .errors import ElSqlConfigError

_yaml = YAML(typ="safe")


@runtime_checkable
class ParameterSource(Protocol):
    """
    Протокол источника параметров.

    has_value отличает отсутствующую переменную от переменной
    со значением None.
    """

    def has_value(self, name: str) -> bool:
        ...

    def get_value(self, name: str) -> Any:
        ...


class MapParameterSource:
    """Источник параметров на основе словаря."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        self._values: Dict[str, Any] = dict(values or {})
        self._values.update(kwargs)

    def add_value(self, name: str, value: Any) -> MapParameterSource:
        """Добавляет значение и возвращает self для цепочек вызовов."""
        self._values[name] = value
        return self

    def add_values(self, values: Mapping[str, Any]) -> MapParameterSource:
        self._values.update(values)
        return self

    def has_value(self, name: str) -> bool:
        return name in self._values

    def get_value(self, name: str) -> Any:
        return self._values.get(name)

    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"MapParameterSource({self._values!r})"


class EmptyParameterSource:
    """Источник без параметров."""

    def has_value(self, name: str) -> bool:
        return False

    def get_value(self, name: str) -> Any:
        return None


EMPTY = EmptyParameterSource()


def as_parameter_source(params: Any) -> ParameterSource:
    """
    Приводит аргумент к источнику параметров.

    Args:
        params: None, словарь или готовый ParameterSource

    Returns:
        Источник параметров

    Raises:
        TypeError: Если тип аргумента не поддерживается
    """
    if params is None:
        return EMPTY
    if isinstance(params, ParameterSource):
        return params
    if isinstance(params, Mapping):
        return MapParameterSource(params)
    raise TypeError(f"Unsupported parameter source: {type(params).__name__}")


def to_sql_string(value: Any) -> str:
    """
    Каноническое строковое представление значения.

    Булевы значения дают "true"/"false", None - пустую строку.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def load_parameters(path: Path) -> MapParameterSource:
    """
    Загружает параметры из YAML-файла с отображением name -> value.

    Raises:
        ElSqlConfigError: Если файл не найден или содержит не отображение
    """
    if not path.is_file():
        raise ElSqlConfigError(f"Parameters file not found: {path}")
    raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ElSqlConfigError(f"Parameters file must be a YAML mapping: {path}")
    return MapParameterSource({str(k): v for k, v in raw.items()})


__all__ = [
    "ParameterSource",
    "MapParameterSource",
    "EmptyParameterSource",
    "EMPTY",
    "as_parameter_source",
    "to_sql_string",
    "load_parameters",
]
