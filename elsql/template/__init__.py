"""
Движок шаблонов elsql: разбор строк в дерево фрагментов и рендеринг.
"""

from .evaluator import ConditionEvaluator
from .lines import Line, read_lines, split_text
from .nodes import (
    AndFragment,
    ConditionalFragment,
    ContainerFragment,
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
    collect_includes,
    format_tree,
    iter_fragments,
)
from .parser import ElSqlParser, parse_lines, parse_text
from .renderer import FragmentRenderer
from .tags import Tag

__all__ = [
    "ConditionEvaluator",
    "Line",
    "read_lines",
    "split_text",
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
    "ElSqlParser",
    "parse_lines",
    "parse_text",
    "FragmentRenderer",
    "Tag",
]
