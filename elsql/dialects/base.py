"""
Конфигурация диалекта базы данных.

Диалект решает три вопроса, в которых базы данных расходятся:
- содержит ли значение символы подстановки для LIKE;
- какой суффикс ESCAPE дописывать после LIKE;
- как записывается постраничная выборка (OFFSET/FETCH, LIMIT и т.д.).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

LIKE_WILDCARDS = frozenset("%_")
LIKE_ESCAPE = "\\"


@dataclass(frozen=True)
class DialectConfig:
    """
    Неизменяемая конфигурация диалекта.

    Поведение по умолчанию соответствует ANSI SQL:
    OFFSET n ROWS / FETCH FIRST|NEXT n ROWS ONLY.
    Диалекты с другим синтаксисом переопределяют методы.
    """
    name: str
    like_suffix: str = ""

    def is_like_wildcard(self, value: str) -> bool:
        """
        Проверяет, содержит ли значение неэкранированный % или _.

        Обратный слэш экранирует следующий символ.
        """
        escaped = False
        for char in value:
            if escaped:
                escaped = False
            elif char == LIKE_ESCAPE:
                escaped = True
            elif char in LIKE_WILDCARDS:
                return True
        return False

    def paging_clause(self, offset: Optional[int], fetch: Optional[int]) -> str:
        """
        Текст предложения постраничной выборки.

        Args:
            offset: Число пропускаемых строк или None
            fetch: Число выбираемых строк или None

        Returns:
            Текст с завершающим пробелом или пустая строка
        """
        if offset is not None and fetch is not None:
            return f"OFFSET {offset} ROWS FETCH NEXT {fetch} ROWS ONLY "
        if offset is not None:
            return f"OFFSET {offset} ROWS "
        if fetch is not None:
            return f"FETCH FIRST {fetch} ROWS ONLY "
        return ""

    def add_paging(self, select: str, offset: Optional[int], fetch: Optional[int]) -> str:
        """
        Применяет постраничную выборку к готовому запросу.

        По умолчанию предложение дописывается в конец запроса.
        """
        return select + self.paging_clause(offset, fetch)


__all__ = ["DialectConfig", "LIKE_WILDCARDS", "LIKE_ESCAPE"]
