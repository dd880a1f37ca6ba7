"""
Словарь тегов elsql и регулярные выражения для их распознавания.

У каждого тега ровно одна допустимая форма. Строка, начинающаяся
с ключевого слова тега, но не совпадающая с его формой, считается
ошибкой формата.
"""

from __future__ import annotations

import enum
import re
from typing import Optional

IDENTIFIER = r"[A-Za-z0-9_]+"


class Tag(str, enum.Enum):
    """Ключевые слова тегов."""

    # Блочные теги (открывают область отступа)
    NAME = "@NAME"
    WHERE = "@WHERE"
    AND = "@AND"
    OR = "@OR"
    IF = "@IF"
    PAGING = "@PAGING"

    # Строчные теги (могут стоять в любом месте строки)
    INCLUDE = "@INCLUDE"
    LIKE = "@LIKE"
    ENDLIKE = "@ENDLIKE"
    OFFSETFETCH = "@OFFSETFETCH"
    FETCH = "@FETCH"


BLOCK_TAGS = (Tag.NAME, Tag.PAGING, Tag.WHERE, Tag.AND, Tag.OR, Tag.IF)
INLINE_TAGS = (Tag.INCLUDE, Tag.LIKE, Tag.OFFSETFETCH, Tag.FETCH)

_CONDITION_ARGS = rf"\((:{IDENTIFIER})( ?= ?{IDENTIFIER})?\)"

# Полные формы блочных тегов (применяются к обрезанной строке)
NAME_PATTERN = re.compile(rf"@NAME\(({IDENTIFIER})\)")
WHERE_PATTERN = re.compile(r"@WHERE")
AND_PATTERN = re.compile(rf"@AND{_CONDITION_ARGS}")
OR_PATTERN = re.compile(rf"@OR{_CONDITION_ARGS}")
IF_PATTERN = re.compile(rf"@IF{_CONDITION_ARGS}")
PAGING_PATTERN = re.compile(rf"@PAGING\(:({IDENTIFIER}) ?, ?:({IDENTIFIER})\)")

# Формы строчных тегов (применяются к тексту начиная с тега; хвост - остаток строки)
INCLUDE_PATTERN = re.compile(rf"@INCLUDE\((:?{IDENTIFIER})\)(.*)", re.DOTALL)
OFFSET_FETCH_PATTERN = re.compile(
    rf"@OFFSETFETCH\(:({IDENTIFIER}) ?, ?:({IDENTIFIER})\)(.*)", re.DOTALL
)
FETCH_VARIABLE_PATTERN = re.compile(rf"@FETCH\(:({IDENTIFIER})\)(.*)", re.DOTALL)
FETCH_ROWS_PATTERN = re.compile(r"@FETCH\(([0-9]+)\)(.*)", re.DOTALL)

# Первая ссылка на переменную внутри тела @LIKE
VARIABLE_PATTERN = re.compile(rf":({IDENTIFIER})")

# Поиск ближайшего строчного тега в строке
INLINE_TAG_PATTERN = re.compile("|".join(re.escape(tag.value) for tag in INLINE_TAGS))


def block_tag_of(trimmed: str) -> Optional[Tag]:
    """Возвращает блочный тег, с которого начинается строка, или None."""
    for tag in BLOCK_TAGS:
        if trimmed.startswith(tag.value):
            return tag
    return None


def extract_match_value(group: Optional[str]) -> Optional[str]:
    """
    Извлекает значение сравнения из необязательного хвоста ``= value``.

    Снимается один ведущий '=' и окружающие пробелы.
    """
    if group is None:
        return None
    text = group.strip()
    if text.startswith("="):
        text = text[1:].strip()
    return text


__all__ = [
    "IDENTIFIER",
    "Tag",
    "BLOCK_TAGS",
    "INLINE_TAGS",
    "NAME_PATTERN",
    "WHERE_PATTERN",
    "AND_PATTERN",
    "OR_PATTERN",
    "IF_PATTERN",
    "PAGING_PATTERN",
    "INCLUDE_PATTERN",
    "OFFSET_FETCH_PATTERN",
    "FETCH_VARIABLE_PATTERN",
    "FETCH_ROWS_PATTERN",
    "VARIABLE_PATTERN",
    "INLINE_TAG_PATTERN",
    "block_tag_of",
    "extract_match_value",
]
