"""
Загрузка пользовательских диалектов из YAML.

Формат файла:

    mydb:
      base: postgres          # зарегистрированный диалект, по умолчанию "default"
      like_suffix: "ESCAPE '\\' "

Производный диалект наследует поведение базового (класс и правила
постраничной выборки) и переопределяет только заданные поля.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import List

from ruamel.yaml import YAML

from . import registry
from .base import DialectConfig
from ..errors import DialectNotFoundError, ElSqlConfigError

_yaml = YAML(typ="safe")

_KNOWN_KEYS = {"base", "like_suffix"}


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        raise ElSqlConfigError(f"Dialects file not found: {path}")
    raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ElSqlConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_dialects(path: Path, *, replace: bool = True) -> List[DialectConfig]:
    """
    Загружает и регистрирует диалекты из YAML-файла.

    Args:
        path: Путь к YAML-файлу
        replace: Разрешает переопределять уже зарегистрированные имена

    Returns:
        Созданные диалекты в порядке объявления

    Raises:
        ElSqlConfigError: При неверной структуре файла или неизвестном base
    """
    raw = _read_yaml_map(path)
    result: List[DialectConfig] = []

    for name, spec in raw.items():
        spec = spec or {}
        if not isinstance(spec, dict):
            raise ElSqlConfigError(f"Dialect '{name}' must be a mapping in {path}")
        unknown = set(spec) - _KNOWN_KEYS
        if unknown:
            raise ElSqlConfigError(
                f"Dialect '{name}' has unknown keys {sorted(unknown)} in {path}"
            )

        base_name = str(spec.get("base", "default"))
        try:
            base = registry.get(base_name)
        except DialectNotFoundError as e:
            raise ElSqlConfigError(f"Dialect '{name}': {e}") from e

        changes = {"name": str(name)}
        if "like_suffix" in spec:
            suffix = spec["like_suffix"]
            if not isinstance(suffix, str):
                raise ElSqlConfigError(f"Dialect '{name}': like_suffix must be a string")
            changes["like_suffix"] = suffix

        dialect = dataclasses.replace(base, **changes)
        registry.register(dialect, replace=replace)
        result.append(dialect)

    return result


__all__ = ["load_dialects"]
