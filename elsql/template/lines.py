"""
Построчная модель исходного текста шаблона.

Формат elsql чувствителен к отступам, поэтому вместо потока токенов
парсер работает с последовательностью строк. Каждая строка хранит
исходный номер (начиная с 1) для точной диагностики ошибок.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..errors import ElSqlFormatError

COMMENT_PREFIX = "--"


@dataclass(frozen=True)
class Line:
    """
    Строка шаблона с позиционной информацией.
    """
    text: str           # Исходный текст без символов перевода строки
    number: int         # Номер строки (начиная с 1)

    @property
    def trimmed(self) -> str:
        """Текст строки без пробелов по краям."""
        return self.text.strip()

    @property
    def indent(self) -> int:
        """Глубина отступа: количество ведущих пробелов."""
        return len(self.text) - len(self.text.lstrip(" "))

    def is_comment(self) -> bool:
        """Комментарий (--) или пустая строка."""
        trimmed = self.trimmed
        return not trimmed or trimmed.startswith(COMMENT_PREFIX)

    def contains_tab(self) -> bool:
        return "\t" in self.text

    def with_text(self, text: str) -> Line:
        """Новая строка с тем же номером (для разбора остатка строки)."""
        return Line(text=text, number=self.number)

    def __repr__(self) -> str:
        return f"Line({self.number}: {self.text!r})"


def split_text(text: str) -> List[str]:
    """Разбивает текст файла на сырые строки."""
    return text.splitlines()


def read_lines(raw_lines: Iterable[str]) -> List[Line]:
    """
    Строит модель строк для парсера.

    Табуляция проверяется сразу по всему входу, до начала разбора.
    Комментарии и пустые строки удаляются за один проход, при этом
    номера оставшихся строк сохраняются.

    Args:
        raw_lines: Сырые строки файла

    Returns:
        Значимые строки в исходном порядке

    Raises:
        ElSqlFormatError: Если хотя бы одна строка содержит табуляцию
    """
    lines = [
        Line(text=raw.rstrip("\r\n"), number=i)
        for i, raw in enumerate(raw_lines, start=1)
    ]

    for line in lines:
        if line.contains_tab():
            raise ElSqlFormatError("Tab character not permitted", line.number, line.text)

    return [line for line in lines if not line.is_comment()]


__all__ = ["Line", "COMMENT_PREFIX", "read_lines", "split_text"]
