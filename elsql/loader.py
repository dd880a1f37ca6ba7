"""
Чтение файлов .elsql с диска.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import pathspec

from .errors import ElSqlLoadError

logger = logging.getLogger(__name__)

ELSQL_SUFFIX = ".elsql"


def read_lines_from(path: Path) -> List[str]:
    """
    Читает файл шаблонов как список строк без терминаторов.

    BOM в начале файла допускается.

    Raises:
        ElSqlLoadError: Если файл не найден или не читается
    """
    if not path.is_file():
        raise ElSqlLoadError(f"Template file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ElSqlLoadError(f"Cannot read template file {path}: {e}") from e
    return text.splitlines()


def build_exclude_spec(patterns: Sequence[str]) -> Optional[pathspec.PathSpec]:
    """PathSpec из git-wildmatch шаблонов исключения, None если шаблонов нет."""
    lines = [p.strip() for p in patterns if p.strip()]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


def discover_files(root: Path, exclude: Sequence[str] = ()) -> List[Path]:
    """
    Рекурсивно находит файлы *.elsql под root.

    Пути сортируются по относительному POSIX-пути, исключения задаются
    в синтаксисе .gitignore относительно root.
    """
    root = root.resolve()
    spec = build_exclude_spec(exclude)
    found: List[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        if spec is not None:
            # Отсекаем исключённые каталоги до спуска в них
            dirnames[:] = [
                d for d in dirnames
                if not spec.match_file(f"{d}/" if rel_dir == "." else f"{rel_dir}/{d}/")
            ]
        for fn in filenames:
            if not fn.endswith(ELSQL_SUFFIX):
                continue
            rel = fn if rel_dir == "." else f"{rel_dir}/{fn}"
            if spec is not None and spec.match_file(rel):
                continue
            found.append(Path(dirpath) / fn)

    found.sort(key=lambda p: p.relative_to(root).as_posix())
    logger.debug(f"Discovered {len(found)} {ELSQL_SUFFIX} files under {root}")
    return found


def resolve_inputs(paths: Iterable[Path], exclude: Sequence[str] = ()) -> List[Path]:
    """
    Разворачивает список входов: файлы остаются как есть,
    каталоги заменяются найденными в них *.elsql.

    Raises:
        ElSqlLoadError: Если путь не существует
    """
    result: List[Path] = []
    for path in paths:
        if path.is_dir():
            result.extend(discover_files(path, exclude))
        elif path.is_file():
            result.append(path)
        else:
            raise ElSqlLoadError(f"Input not found: {path}")
    return result


__all__ = [
    "ELSQL_SUFFIX",
    "read_lines_from",
    "build_exclude_spec",
    "discover_files",
    "resolve_inputs",
]
