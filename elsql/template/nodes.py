"""
Узлы дерева фрагментов SQL.

Определяет закрытую иерархию неизменяемых классов узлов, которые строит
парсер и обходит рендерер. Дочерние узлы хранятся в кортежах, поэтому
готовое дерево можно безопасно разделять между потоками.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class Fragment:
    """Базовый класс для всех узлов дерева фрагментов."""
    pass


@dataclass(frozen=True)
class TextFragment(Fragment):
    """
    Литеральный текст SQL.

    Выводится как есть; ссылки вида :var внутри текста не трогаются,
    их подставляет драйвер базы данных.
    """
    text: str

    @classmethod
    def of_line(cls, text: str) -> TextFragment:
        """
        Текст, завершающий строку шаблона.

        Обрезается и дополняется ровно одним пробелом, пустая строка
        остаётся пустой.
        """
        trimmed = text.strip()
        return cls(text=f"{trimmed} " if trimmed else "")


@dataclass(frozen=True)
class ContainerFragment(Fragment):
    """Упорядоченный список дочерних фрагментов."""
    children: Tuple[Fragment, ...] = ()


@dataclass(frozen=True)
class NameFragment(ContainerFragment):
    """Именованный шаблон верхнего уровня: @NAME(name)."""
    name: str = ""


@dataclass(frozen=True)
class WhereFragment(ContainerFragment):
    """
    Блок @WHERE.

    Первый сработавший дочерний @AND/@OR выводится без связки.
    """
    pass


@dataclass(frozen=True)
class ConditionalFragment(ContainerFragment):
    """
    Общий предок условных блоков @AND, @OR и @IF.

    variable хранится без ведущего двоеточия.
    """
    variable: str = ""
    match_value: Optional[str] = None


@dataclass(frozen=True)
class AndFragment(ConditionalFragment):
    """@AND(:var[ = value])"""
    connector = "AND"


@dataclass(frozen=True)
class OrFragment(ConditionalFragment):
    """@OR(:var[ = value])"""
    connector = "OR"


@dataclass(frozen=True)
class IfFragment(ConditionalFragment):
    """@IF(:var[ = value])"""
    pass


@dataclass(frozen=True)
class LikeFragment(ContainerFragment):
    """
    @LIKE ... [@ENDLIKE]

    Переключает LIKE и = в зависимости от наличия символов подстановки
    в значении переменной.
    """
    variable: str = ""


@dataclass(frozen=True)
class IncludeFragment(Fragment):
    """
    @INCLUDE(target)

    target - имя фрагмента или переменная с двоеточием.
    """
    target: str

    @property
    def is_variable(self) -> bool:
        return self.target.startswith(":")

    @property
    def variable(self) -> str:
        return self.target[1:] if self.is_variable else self.target


@dataclass(frozen=True)
class PagingFragment(ContainerFragment):
    """@PAGING(:offset, :fetch) - подзапрос с постраничной выборкой."""
    offset_variable: str = ""
    fetch_variable: str = ""


@dataclass(frozen=True)
class OffsetFetchFragment(Fragment):
    """
    @OFFSETFETCH и @FETCH.

    Без offset_variable - только FETCH. fetch_rows задаёт фиксированное
    число строк для @FETCH(N) вместо переменной.
    """
    offset_variable: Optional[str] = None
    fetch_variable: Optional[str] = None
    fetch_rows: Optional[int] = field(default=None)


def iter_fragments(root: Fragment) -> Iterator[Fragment]:
    """Обход дерева в глубину, начиная с самого узла."""
    yield root
    if isinstance(root, ContainerFragment):
        for child in root.children:
            yield from iter_fragments(child)


def collect_includes(root: Fragment) -> List[str]:
    """Имена фрагментов, на которые ссылаются @INCLUDE(name) внутри дерева."""
    return [
        node.target
        for node in iter_fragments(root)
        if isinstance(node, IncludeFragment) and not node.is_variable
    ]


def format_tree(root: Fragment, indent: int = 0) -> str:
    """Отладочное представление дерева."""
    pad = "  " * indent
    if isinstance(root, ContainerFragment):
        label = type(root).__name__
        attrs = {k: v for k, v in vars(root).items() if k != "children" and v not in (None, "")}
        if attrs:
            label += "(" + ", ".join(f"{k}={v!r}" for k, v in attrs.items()) + ")"
        lines = [pad + label]
        lines.extend(format_tree(child, indent + 1) for child in root.children)
        return "\n".join(lines)
    return pad + repr(root)


__all__ = [
    "Fragment",
    "TextFragment",
    "ContainerFragment",
    "NameFragment",
    "WhereFragment",
    "ConditionalFragment",
    "AndFragment",
    "OrFragment",
    "IfFragment",
    "LikeFragment",
    "IncludeFragment",
    "PagingFragment",
    "OffsetFetchFragment",
    "iter_fragments",
    "collect_includes",
    "format_tree",
]
