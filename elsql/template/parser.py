"""
Парсер шаблонов elsql с рекурсивным спуском.

Преобразует последовательность строк в дерево фрагментов. Вложенность
блоков задаётся только отступами: строка принадлежит блоку, если её отступ
строго больше отступа строки с тегом блока.

Грамматика (по строкам):
file      → name*
name      → "@NAME(id)" block
block     → (where | and | or | if | paging | content)+     ; с большим отступом
where     → "@WHERE" block
and       → "@AND(:var[ = value])" block
or        → "@OR(:var[ = value])" block
if        → "@IF(:var[ = value])" block
paging    → "@PAGING(:offset, :fetch)" block
content   → (text | "@INCLUDE(...)" | "@LIKE ... [@ENDLIKE]" | "@OFFSETFETCH[...]" | "@FETCH[...]")*
"""

from __future__ import annotations

import logging
from re import Pattern
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from . import tags
from .lines import Line, read_lines, split_text
from .nodes import (
    AndFragment,
    Fragment,
    IfFragment,
    IncludeFragment,
    LikeFragment,
    NameFragment,
    OffsetFetchFragment,
    OrFragment,
    PagingFragment,
    TextFragment,
    WhereFragment,
    format_tree,
)
from .tags import Tag
from ..errors import ElSqlFormatError

logger = logging.getLogger(__name__)

# Отступ корневой области: меньше любого реального отступа
ROOT_INDENT = -1

DEFAULT_OFFSET_VARIABLE = "paging_offset"
DEFAULT_FETCH_VARIABLE = "paging_fetch"


class ElSqlParser:
    """
    Рекурсивный парсер для файлов elsql.

    Парсер одноразовый: хранит курсор по строкам и таблицу уже
    зарегистрированных имён. Результат разбора неизменяем.
    """

    def __init__(self, raw_lines: Iterable[str], *, strict: bool = False):
        """
        Args:
            raw_lines: Сырые строки файла
            strict: Запрещает повторное определение @NAME с тем же именем
        """
        self._raw_lines = list(raw_lines)
        self._strict = strict
        self._lines: List[Line] = []
        self._position = 0
        self._named: Dict[str, NameFragment] = {}

    def parse(self) -> Dict[str, NameFragment]:
        """
        Разбирает файл и возвращает именованные фрагменты в порядке объявления.

        Raises:
            ElSqlFormatError: При любой ошибке формата
        """
        self._lines = read_lines(self._raw_lines)
        self._position = 0
        self._named = {}

        self._parse_block(ROOT_INDENT)

        logger.debug(f"Parsed {len(self._raw_lines)} lines -> {len(self._named)} named fragments")
        if logger.isEnabledFor(logging.DEBUG):
            for fragment in self._named.values():
                logger.debug(f"Fragment tree:\n{format_tree(fragment)}")
        return dict(self._named)

    # ======= Блочные конструкции =======

    def _parse_block(self, parent_indent: int) -> List[Fragment]:
        """
        Разбирает строки с отступом больше parent_indent.

        Первая строка с отступом <= parent_indent закрывает блок и
        остаётся непрочитанной для вызывающего уровня.
        """
        children: List[Fragment] = []

        while not self._is_at_end():
            line = self._current_line()
            if line.indent <= parent_indent:
                break
            self._advance()

            trimmed = line.trimmed
            tag = tags.block_tag_of(trimmed)

            if tag is Tag.NAME:
                if parent_indent != ROOT_INDENT:
                    raise ElSqlFormatError("@NAME is only permitted at root level", line.number, line.text)
                self._register(self._parse_name(line), line)
                continue

            if parent_indent == ROOT_INDENT:
                raise ElSqlFormatError(
                    "Invalid fragment found at root level, only @NAME is permitted",
                    line.number, line.text,
                )

            if tag is not None:
                children.append(self._block_parsers[tag](self, line))
            else:
                children.extend(self._parse_content(line))

        return children

    def _parse_children(self, tag: Tag, line: Line) -> Tuple[Fragment, ...]:
        """Разбирает тело блочного тега; пустое тело - ошибка."""
        children = self._parse_block(line.indent)
        if not children:
            raise ElSqlFormatError(
                f"{tag.value} found with no subsequent indented lines", line.number, line.text
            )
        return tuple(children)

    def _parse_name(self, line: Line) -> NameFragment:
        match = tags.NAME_PATTERN.fullmatch(line.trimmed)
        if match is None:
            raise _invalid_format(Tag.NAME, line)
        return NameFragment(name=match.group(1), children=self._parse_children(Tag.NAME, line))

    def _parse_where(self, line: Line) -> WhereFragment:
        if tags.WHERE_PATTERN.fullmatch(line.trimmed) is None:
            raise _invalid_format(Tag.WHERE, line)
        return WhereFragment(children=self._parse_children(Tag.WHERE, line))

    def _parse_paging(self, line: Line) -> PagingFragment:
        match = tags.PAGING_PATTERN.fullmatch(line.trimmed)
        if match is None:
            raise _invalid_format(Tag.PAGING, line)
        return PagingFragment(
            offset_variable=match.group(1),
            fetch_variable=match.group(2),
            children=self._parse_children(Tag.PAGING, line),
        )

    def _parse_and(self, line: Line) -> AndFragment:
        variable, match_value = self._parse_condition(tags.AND_PATTERN, Tag.AND, line)
        return AndFragment(variable=variable, match_value=match_value, children=self._parse_children(Tag.AND, line))

    def _parse_or(self, line: Line) -> OrFragment:
        variable, match_value = self._parse_condition(tags.OR_PATTERN, Tag.OR, line)
        return OrFragment(variable=variable, match_value=match_value, children=self._parse_children(Tag.OR, line))

    def _parse_if(self, line: Line) -> IfFragment:
        variable, match_value = self._parse_condition(tags.IF_PATTERN, Tag.IF, line)
        return IfFragment(variable=variable, match_value=match_value, children=self._parse_children(Tag.IF, line))

    def _parse_condition(self, pattern: Pattern[str], tag: Tag, line: Line) -> Tuple[str, Optional[str]]:
        """Разбирает аргументы условного тега: (:var[ = value])."""
        match = pattern.fullmatch(line.trimmed)
        if match is None:
            raise _invalid_format(tag, line)
        return match.group(1)[1:], tags.extract_match_value(match.group(2))

    _block_parsers: Dict[Tag, Callable[[ElSqlParser, Line], Fragment]] = {
        Tag.WHERE: _parse_where,
        Tag.PAGING: _parse_paging,
        Tag.AND: _parse_and,
        Tag.OR: _parse_or,
        Tag.IF: _parse_if,
    }

    # ======= Строчные теги =======

    def _parse_content(self, line: Line) -> List[Fragment]:
        """
        Разбирает строку с текстом и строчными тегами.

        Обрабатывается ближайший к началу строки тег; текст перед ним
        сохраняется как есть, остаток строки разбирается рекурсивно.
        """
        trimmed = line.trimmed
        if not trimmed:
            return []

        match = tags.INLINE_TAG_PATTERN.search(trimmed)
        if match is None:
            if trimmed.startswith("@"):
                raise ElSqlFormatError("Unknown tag at start of line", line.number, line.text)
            return [TextFragment.of_line(trimmed)]

        result: List[Fragment] = []
        if match.start() > 0:
            result.append(TextFragment(text=trimmed[:match.start()]))

        tag = Tag(match.group(0))
        fragment, remainder = self._inline_parsers[tag](self, trimmed[match.start():], line)
        result.append(fragment)
        return result + self._parse_content(line.with_text(remainder))

    def _parse_include(self, tail: str, line: Line) -> Tuple[Fragment, str]:
        match = tags.INCLUDE_PATTERN.fullmatch(tail)
        if match is None:
            raise _invalid_format(Tag.INCLUDE, line)
        return IncludeFragment(target=match.group(1)), match.group(2)

    def _parse_like(self, tail: str, line: Line) -> Tuple[Fragment, str]:
        body = tail[len(Tag.LIKE.value):]
        remainder = ""
        end = body.find(Tag.ENDLIKE.value)
        if end >= 0:
            body, remainder = body[:end], body[end + len(Tag.ENDLIKE.value):]

        match = tags.VARIABLE_PATTERN.search(body)
        if match is None:
            raise _invalid_format(Tag.LIKE, line)

        like = LikeFragment(variable=match.group(1), children=(TextFragment.of_line(body),))
        return like, remainder

    def _parse_offset_fetch(self, tail: str, line: Line) -> Tuple[Fragment, str]:
        if not tail.startswith(Tag.OFFSETFETCH.value + "("):
            fragment = OffsetFetchFragment(
                offset_variable=DEFAULT_OFFSET_VARIABLE,
                fetch_variable=DEFAULT_FETCH_VARIABLE,
            )
            return fragment, tail[len(Tag.OFFSETFETCH.value):]

        match = tags.OFFSET_FETCH_PATTERN.fullmatch(tail)
        if match is None:
            raise _invalid_format(Tag.OFFSETFETCH, line)
        return OffsetFetchFragment(offset_variable=match.group(1), fetch_variable=match.group(2)), match.group(3)

    def _parse_fetch(self, tail: str, line: Line) -> Tuple[Fragment, str]:
        if not tail.startswith(Tag.FETCH.value + "("):
            return OffsetFetchFragment(fetch_variable=DEFAULT_FETCH_VARIABLE), tail[len(Tag.FETCH.value):]

        match = tags.FETCH_VARIABLE_PATTERN.fullmatch(tail)
        if match is not None:
            return OffsetFetchFragment(fetch_variable=match.group(1)), match.group(2)

        match = tags.FETCH_ROWS_PATTERN.fullmatch(tail)
        if match is not None:
            return OffsetFetchFragment(fetch_rows=int(match.group(1))), match.group(2)

        raise _invalid_format(Tag.FETCH, line)

    _inline_parsers: Dict[Tag, Callable[[ElSqlParser, str, Line], Tuple[Fragment, str]]] = {
        Tag.INCLUDE: _parse_include,
        Tag.LIKE: _parse_like,
        Tag.OFFSETFETCH: _parse_offset_fetch,
        Tag.FETCH: _parse_fetch,
    }

    # ======= Вспомогательные методы =======

    def _register(self, fragment: NameFragment, line: Line) -> None:
        """Регистрирует именованный фрагмент; позднее определение заменяет раннее."""
        if fragment.name in self._named:
            if self._strict:
                raise ElSqlFormatError(f"Duplicate @NAME({fragment.name})", line.number, line.text)
            logger.debug(f"Fragment '{fragment.name}' redefined, later definition wins")
            del self._named[fragment.name]
        self._named[fragment.name] = fragment

    def _current_line(self) -> Line:
        return self._lines[self._position]

    def _advance(self) -> Line:
        line = self._lines[self._position]
        self._position += 1
        return line

    def _is_at_end(self) -> bool:
        return self._position >= len(self._lines)


def _invalid_format(tag: Tag, line: Line) -> ElSqlFormatError:
    return ElSqlFormatError(f"{tag.value} found with invalid format", line.number, line.text)


def parse_lines(raw_lines: Iterable[str], *, strict: bool = False) -> Dict[str, NameFragment]:
    """
    Удобная функция для разбора строк файла.

    Args:
        raw_lines: Сырые строки файла
        strict: Запрещает повторные @NAME

    Returns:
        Именованные фрагменты в порядке объявления

    Raises:
        ElSqlFormatError: При ошибке формата
    """
    return ElSqlParser(raw_lines, strict=strict).parse()


def parse_text(text: str, *, strict: bool = False) -> Dict[str, NameFragment]:
    """Разбирает текст файла целиком."""
    return parse_lines(split_text(text), strict=strict)


__all__ = [
    "ElSqlParser",
    "ROOT_INDENT",
    "DEFAULT_OFFSET_VARIABLE",
    "DEFAULT_FETCH_VARIABLE",
    "parse_lines",
    "parse_text",
]
