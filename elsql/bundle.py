"""
Набор разобранных фрагментов, привязанный к диалекту.

Бандл - основная точка входа для прикладного кода: разбирает один
или несколько файлов шаблонов и рендерит фрагменты по имени.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .dialects.base import DialectConfig
from .dialects.builtin import DEFAULT
from .errors import ElSqlLoadError, FragmentNotFoundError
from .loader import ELSQL_SUFFIX, read_lines_from
from .params import as_parameter_source
from .template.nodes import NameFragment, collect_includes
from .template.parser import parse_lines
from .template.renderer import FragmentRenderer

logger = logging.getLogger(__name__)


class ElSqlBundle:
    """
    Неизменяемый набор именованных фрагментов и конфигурация диалекта.

    Экземпляры безопасно использовать из нескольких потоков: смена
    диалекта создаёт новый бандл с теми же деревьями.
    """

    def __init__(
        self,
        fragments: Mapping[str, NameFragment],
        config: DialectConfig = DEFAULT,
        *,
        allow_raw_include: bool = True,
    ):
        self._fragments: Mapping[str, NameFragment] = MappingProxyType(dict(fragments))
        self._config = config
        self._allow_raw_include = allow_raw_include
        self._renderer = FragmentRenderer(
            self._fragments, config, allow_raw_include=allow_raw_include
        )

    # ======= Фабрики =======

    @classmethod
    def parse(
        cls,
        lines: Iterable[str],
        config: DialectConfig = DEFAULT,
        *,
        strict: bool = False,
    ) -> ElSqlBundle:
        """Разбирает один файл, заданный строками."""
        return cls(parse_lines(lines, strict=strict), config)

    @classmethod
    def parse_files(
        cls,
        files: Iterable[Sequence[str]],
        config: DialectConfig = DEFAULT,
        *,
        strict: bool = False,
    ) -> ElSqlBundle:
        """
        Разбирает несколько файлов по порядку.

        Фрагмент из более позднего файла заменяет одноимённый из раннего.
        """
        merged: Dict[str, NameFragment] = {}
        for lines in files:
            for name, fragment in parse_lines(lines, strict=strict).items():
                if name in merged:
                    logger.debug(f"Fragment '{name}' overridden by a later file")
                merged[name] = fragment
        bundle = cls(merged, config)
        for name, targets in bundle.unresolved_includes().items():
            logger.debug(f"Fragment '{name}' includes unknown fragments: {', '.join(targets)}")
        return bundle

    @classmethod
    def of(cls, config: DialectConfig, base_path: Path, *, strict: bool = False) -> ElSqlBundle:
        """
        Загружает <base>.elsql и необязательный <base>-<dialect>.elsql.

        Args:
            config: Диалект; его имя выбирает файл переопределений
            base_path: Путь к основному файлу, с расширением или без

        Raises:
            ElSqlLoadError: Если основной файл не найден
        """
        base_path = Path(base_path)
        if base_path.suffix == ELSQL_SUFFIX:
            base_path = base_path.with_suffix("")

        base_file = base_path.with_name(base_path.name + ELSQL_SUFFIX)
        if not base_file.is_file():
            raise ElSqlLoadError(f"Template file not found: {base_file}")

        paths = [base_file]
        override = base_path.with_name(f"{base_path.name}-{config.name}{ELSQL_SUFFIX}")
        if override.is_file():
            logger.debug(f"Using dialect override file {override}")
            paths.append(override)

        return cls.from_paths(paths, config, strict=strict)

    @classmethod
    def from_paths(
        cls,
        paths: Iterable[Path],
        config: DialectConfig = DEFAULT,
        *,
        strict: bool = False,
    ) -> ElSqlBundle:
        """Разбирает перечисленные файлы по порядку."""
        return cls.parse_files((read_lines_from(Path(p)) for p in paths), config, strict=strict)

    # ======= Доступ =======

    @property
    def config(self) -> DialectConfig:
        return self._config

    def with_config(self, config: DialectConfig) -> ElSqlBundle:
        """Новый бандл с теми же фрагментами и другим диалектом."""
        return ElSqlBundle(self._fragments, config, allow_raw_include=self._allow_raw_include)

    def names(self) -> List[str]:
        """Имена фрагментов в порядке объявления."""
        return list(self._fragments)

    def get_fragment(self, name: str) -> NameFragment:
        fragment = self._fragments.get(name)
        if fragment is None:
            raise FragmentNotFoundError(name)
        return fragment

    def unresolved_includes(self) -> Dict[str, List[str]]:
        """
        @INCLUDE(name), ссылающиеся на незарегистрированные фрагменты.

        Такие ссылки не мешают разбору, но рендер фрагмента с ними
        завершится FragmentNotFoundError.

        Returns:
            Имя фрагмента -> отсутствующие цели в порядке появления
        """
        result: Dict[str, List[str]] = {}
        for name, fragment in self._fragments.items():
            missing = [t for t in collect_includes(fragment) if t not in self._fragments]
            if missing:
                result[name] = missing
        return result

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def get_sql(self, name: str, params: Optional[Any] = None) -> str:
        """
        Рендерит фрагмент по имени.

        Args:
            name: Имя фрагмента
            params: None, словарь или ParameterSource

        Raises:
            FragmentNotFoundError: Если имя не найдено
        """
        return self._renderer.render(name, as_parameter_source(params))

    def __repr__(self) -> str:
        return f"ElSqlBundle(config={self._config.name!r}, names={self.names()!r})"


__all__ = ["ElSqlBundle"]
