"""
Рендерер дерева фрагментов в текст SQL.

Обходит неизменяемое дерево, построенное парсером, и собирает вывод
в локальный буфер. Одно и то же дерево можно рендерить параллельно
с разными параметрами и диалектами.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from .evaluator import ConditionEvaluator
from .nodes import (
    AndFragment,
    ConditionalFragment,
    ContainerFragment,
    Fragment,
    IncludeFragment,
    LikeFragment,
    NameFragment,
    OffsetFetchFragment,
    OrFragment,
    PagingFragment,
    TextFragment,
    WhereFragment,
)
from ..dialects.base import DialectConfig
from ..errors import (
    ElSqlRenderError,
    FragmentNotFoundError,
    InvalidParameterError,
    RawIncludeForbiddenError,
    VariableNotFoundError,
)
from ..params import ParameterSource, to_sql_string

logger = logging.getLogger(__name__)


class _RenderState:
    """Состояние одного вызова render: параметры и вычислитель условий."""

    def __init__(self, params: ParameterSource, root: str):
        self.params = params
        self.evaluator = ConditionEvaluator(params)
        # Цепочка активных @INCLUDE для обнаружения циклов
        self.include_stack: List[str] = [root]


class FragmentRenderer:
    """
    Рендерер именованных фрагментов для заданного диалекта.

    Состояние рендерера не меняется после создания, все данные
    вызова живут в _RenderState.
    """

    def __init__(
        self,
        fragments: Mapping[str, NameFragment],
        dialect: DialectConfig,
        *,
        allow_raw_include: bool = True,
    ):
        """
        Args:
            fragments: Реестр именованных фрагментов (для @INCLUDE)
            dialect: Конфигурация диалекта
            allow_raw_include: Разрешает @INCLUDE(:var) со вставкой строки как есть
        """
        self.fragments = fragments
        self.dialect = dialect
        self.allow_raw_include = allow_raw_include

    def render(self, name: str, params: ParameterSource) -> str:
        """
        Рендерит именованный фрагмент.

        Args:
            name: Имя фрагмента из @NAME
            params: Источник параметров

        Returns:
            Готовый текст SQL

        Raises:
            FragmentNotFoundError: Если имя не зарегистрировано
        """
        fragment = self._lookup(name)
        state = _RenderState(params, name)
        sql = self._render_node(fragment, state)
        logger.debug(f"Rendered '{name}' for dialect '{self.dialect.name}'")
        return sql

    # ======= Диспетчеризация =======

    def _render_node(self, node: Fragment, state: _RenderState) -> str:
        # Точный тип важнее родительского: AndFragment раньше ContainerFragment
        for cls in type(node).__mro__:
            handler = self._handlers.get(cls)
            if handler is not None:
                return handler(self, node, state)
        raise TypeError(f"Unsupported fragment type: {type(node).__name__}")

    def _render_children(self, node: ContainerFragment, state: _RenderState) -> str:
        buf: List[str] = []
        for child in node.children:
            buf.append(self._render_node(child, state))
        return "".join(buf)

    # ======= Обработчики узлов =======

    def _render_text(self, node: TextFragment, state: _RenderState) -> str:
        return node.text

    def _render_container(self, node: ContainerFragment, state: _RenderState) -> str:
        return self._render_children(node, state)

    def _render_conditional(self, node: ConditionalFragment, state: _RenderState) -> str:
        if not state.evaluator.is_match(node.variable, node.match_value):
            return ""
        return self._render_children(node, state)

    def _render_where(self, node: WhereFragment, state: _RenderState) -> str:
        """
        @WHERE: связка первого непустого @AND/@OR опускается.

        Сработавшее условие с пустым телом ничего не добавляет. Если ни
        один дочерний узел ничего не дал, блок пуст целиком.
        """
        buf: List[str] = []
        for child in node.children:
            if isinstance(child, (AndFragment, OrFragment)):
                if not state.evaluator.is_match(child.variable, child.match_value):
                    continue
                body = self._render_children(child, state)
                if not body:
                    continue
                if buf:
                    buf.append(f"{child.connector} ")
                buf.append(body)
            else:
                text = self._render_node(child, state)
                if text:
                    buf.append(text)

        if not buf:
            return ""
        return "WHERE " + "".join(buf)

    def _render_like(self, node: LikeFragment, state: _RenderState) -> str:
        value = to_sql_string(state.params.get_value(node.variable)) if state.params.has_value(node.variable) else ""
        body = self._render_children(node, state)
        if self.dialect.is_like_wildcard(value):
            return "LIKE " + body + self.dialect.like_suffix
        return "= " + body

    def _render_include(self, node: IncludeFragment, state: _RenderState) -> str:
        if node.is_variable:
            return self._render_raw_include(node.variable, state)
        if node.target in state.include_stack:
            chain = " -> ".join(state.include_stack + [node.target])
            raise ElSqlRenderError(f"Recursive @INCLUDE: {chain}")
        fragment = self._lookup(node.target)
        state.include_stack.append(node.target)
        try:
            return self._render_node(fragment, state)
        finally:
            state.include_stack.pop()

    def _render_raw_include(self, variable: str, state: _RenderState) -> str:
        """
        Вставляет строковое значение переменной в SQL без экранирования.

        Значение попадает в запрос как есть, поэтому вызывающий код
        отвечает за его происхождение.
        """
        if not state.params.has_value(variable):
            raise VariableNotFoundError(variable)
        if not self.allow_raw_include:
            raise RawIncludeForbiddenError(variable)
        # Пробел после значения, как после любой строки шаблона
        return to_sql_string(state.params.get_value(variable)) + " "

    def _render_offset_fetch(self, node: OffsetFetchFragment, state: _RenderState) -> str:
        offset = self._paging_value(node.offset_variable, state)
        if node.fetch_rows is not None:
            fetch: Optional[int] = node.fetch_rows
        else:
            fetch = self._paging_value(node.fetch_variable, state)
        return self.dialect.paging_clause(offset, fetch)

    def _render_paging(self, node: PagingFragment, state: _RenderState) -> str:
        select = self._render_children(node, state)
        offset = self._paging_value(node.offset_variable, state)
        fetch = self._paging_value(node.fetch_variable, state)
        return self.dialect.add_paging(select, offset, fetch)

    _handlers: Dict[Type[Fragment], Callable[[FragmentRenderer, Any, _RenderState], str]] = {
        TextFragment: _render_text,
        WhereFragment: _render_where,
        ConditionalFragment: _render_conditional,
        LikeFragment: _render_like,
        PagingFragment: _render_paging,
        ContainerFragment: _render_container,
        IncludeFragment: _render_include,
        OffsetFetchFragment: _render_offset_fetch,
    }

    # ======= Вспомогательные методы =======

    def _lookup(self, name: str) -> NameFragment:
        fragment = self.fragments.get(name)
        if fragment is None:
            raise FragmentNotFoundError(name)
        return fragment

    @staticmethod
    def _paging_value(variable: Optional[str], state: _RenderState) -> Optional[int]:
        """
        Целое значение переменной постраничной выборки.

        Отсутствующая переменная или None дают None.

        Raises:
            InvalidParameterError: Если значение не приводится к целому
        """
        if not variable or not state.params.has_value(variable):
            return None
        value = state.params.get_value(variable)
        if value is None:
            return None
        if isinstance(value, bool):
            raise InvalidParameterError(variable, value)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise InvalidParameterError(variable, value) from None


__all__ = ["FragmentRenderer"]
