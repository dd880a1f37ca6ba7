"""
Реестр диалектов по имени.

Встроенные диалекты регистрируются при импорте пакета. Реестр меняется
только явными вызовами register (на этапе конфигурации).
"""

from __future__ import annotations

import logging
from typing import Dict, List

from .base import DialectConfig
from .builtin import BUILTIN_DIALECTS
from ..errors import DialectError, DialectNotFoundError

logger = logging.getLogger(__name__)

_REGISTRY: Dict[str, DialectConfig] = {}


def register(dialect: DialectConfig, *, replace: bool = False) -> None:
    """
    Регистрирует диалект под его именем (без учёта регистра).

    Args:
        dialect: Конфигурация диалекта
        replace: Разрешает заменить уже зарегистрированный диалект

    Raises:
        DialectError: Пустое имя или повторная регистрация без replace
    """
    name = dialect.name
    if not name or not isinstance(name, str):
        raise DialectError("Dialect must define a non-empty name")
    key = name.lower()
    if key in _REGISTRY and not replace:
        raise DialectError(f"Dialect '{name}' is already registered")
    _REGISTRY[key] = dialect
    logger.debug(f"Registered dialect '{key}' ({type(dialect).__name__})")


def get(name: str) -> DialectConfig:
    """
    Возвращает диалект по имени.

    Raises:
        DialectNotFoundError: Если диалект не зарегистрирован
    """
    key = (name or "").lower()
    if key not in _REGISTRY:
        raise DialectNotFoundError(name, available())
    return _REGISTRY[key]


def available() -> List[str]:
    """Имена зарегистрированных диалектов в алфавитном порядке."""
    return sorted(_REGISTRY)


for _dialect in BUILTIN_DIALECTS:
    register(_dialect)


__all__ = ["register", "get", "available"]
