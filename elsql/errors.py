"""
Базовые исключения для пользовательских ошибок.

Все ожидаемые ошибки, которые должны показываться пользователю
чистым сообщением (без стектрейса), наследуются от ElSqlError.

Программные ошибки и баги НЕ должны наследоваться от ElSqlError:
они пробрасываются с полным трейсбеком.
"""

from __future__ import annotations

from typing import Any, List, Optional


class ElSqlError(Exception):
    """
    Базовый класс для всех пользовательских ошибок elsql.

    Ошибки этого типа пользователь может исправить сам:
    неверный формат шаблона, неизвестное имя фрагмента,
    не переданная переменная, ошибка в конфигурации и т.д.
    """
    pass


# ---- Ошибки разбора шаблона ----

class ElSqlFormatError(ElSqlError):
    """Ошибка формата шаблона с указанием исходной строки."""

    def __init__(self, message: str, line_number: int, line_text: str = ""):
        self.message = message
        self.line_number = line_number
        self.line_text = line_text
        detail = f"{message} at line {line_number}"
        if line_text:
            detail += f": {line_text!r}"
        super().__init__(detail)


# ---- Ошибки поиска при рендеринге ----

class ElSqlLookupError(ElSqlError):
    """Не найден фрагмент или переменная во время рендеринга."""
    pass


class FragmentNotFoundError(ElSqlLookupError):
    """Фрагмент с таким именем не зарегистрирован."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown fragment name: {name}")


class VariableNotFoundError(ElSqlLookupError):
    """Не передана переменная, нужная для @INCLUDE(:var)."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable not found: {name}")


# ---- Ошибки вычисления значений ----

class ElSqlRenderError(ElSqlError):
    """Значение параметра не подходит для рендеринга."""
    pass


class InvalidParameterError(ElSqlRenderError):
    """Переменная постраничной выборки не приводится к целому числу."""
    def __init__(self, name: str, value: Any):
        self.name = name
        self.value = value
        super().__init__(f"Variable '{name}' must be an integer, got {value!r}")


class RawIncludeForbiddenError(ElSqlRenderError):
    """Вставка @INCLUDE(:var) как есть запрещена настройкой рендерера."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Raw include of variable '{name}' is not allowed")


# ---- Диалекты, конфигурация, файлы ----

class DialectError(ElSqlError):
    """Ошибка конфигурации диалекта или неподдерживаемая операция."""
    pass


class DialectNotFoundError(DialectError):
    """Диалект с таким именем не зарегистрирован."""
    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        self.available = list(available or [])
        super().__init__(
            f"Unknown dialect '{name}'. Available: {', '.join(self.available)}"
        )


class ElSqlConfigError(ElSqlError):
    """Некорректный файл конфигурации (YAML)."""
    pass


class ElSqlLoadError(ElSqlError):
    """Не удалось найти или прочитать файл шаблонов."""
    pass


__all__ = [
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
]
