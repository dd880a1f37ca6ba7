from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .bundle import ElSqlBundle
from .dialects import available, get, load_dialects
from .errors import ElSqlError
from .jsonic import dumps as jdumps
from .loader import resolve_inputs
from .params import MapParameterSource, load_parameters
from .report_schema import DialectInfo, DialectsReport, NamesReport
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="elsql",
        description="ElSql: SQL templates with @-tags and database dialects",
        add_help=True,
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="подробный лог в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_inputs(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "inputs",
            nargs="+",
            type=Path,
            metavar="INPUT",
            help="файлы .elsql или каталоги (каталоги просматриваются рекурсивно)",
        )
        sp.add_argument(
            "--exclude",
            action="append",
            default=[],
            metavar="PATTERN",
            help="шаблон исключения в синтаксисе .gitignore (можно указать несколько)",
        )

    def add_dialects_file(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--dialects-file",
            type=Path,
            metavar="YAML",
            help="YAML с дополнительными диалектами",
        )

    sp_render = sub.add_parser("render", help="Отрендерить фрагмент в SQL")
    sp_render.add_argument("name", help="имя фрагмента из @NAME")
    add_inputs(sp_render)
    add_dialects_file(sp_render)
    sp_render.add_argument("--dialect", default="default", help="имя диалекта")
    sp_render.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="значение параметра (можно указать несколько)",
    )
    sp_render.add_argument("--params-file", type=Path, metavar="YAML", help="YAML с параметрами")

    sp_list = sub.add_parser("list", help="JSON-список имён фрагментов")
    add_inputs(sp_list)

    sp_dialects = sub.add_parser("dialects", help="JSON-список доступных диалектов")
    add_dialects_file(sp_dialects)

    return p


def _parse_param(raw: str) -> tuple[str, Any]:
    """
    Разбирает KEY=VALUE. Значения true/false становятся булевыми,
    остальные остаются строками.
    """
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ValueError(f"Invalid --param '{raw}', expected KEY=VALUE")
    if value == "true":
        return key, True
    if value == "false":
        return key, False
    return key, value


def _params(ns: argparse.Namespace) -> MapParameterSource:
    params = load_parameters(ns.params_file) if ns.params_file else MapParameterSource()
    values: Dict[str, Any] = dict(_parse_param(raw) for raw in ns.param)
    return params.add_values(values)


def _bundle(ns: argparse.Namespace) -> ElSqlBundle:
    config = get(getattr(ns, "dialect", "default"))
    return ElSqlBundle.from_paths(resolve_inputs(ns.inputs, ns.exclude), config)


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)

    if ns.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        if getattr(ns, "dialects_file", None):
            load_dialects(ns.dialects_file)

        if ns.cmd == "render":
            sql = _bundle(ns).get_sql(ns.name, _params(ns))
            sys.stdout.write(sql.rstrip() + "\n")
            return 0

        if ns.cmd == "list":
            report = NamesReport(names=_bundle(ns).names())
            sys.stdout.write(jdumps(report.model_dump(mode="json")) + "\n")
            return 0

        if ns.cmd == "dialects":
            infos = []
            for name in available():
                dialect = get(name)
                infos.append(DialectInfo(name=name, like_suffix=dialect.like_suffix, kind=type(dialect).__name__))
            sys.stdout.write(jdumps(DialectsReport(dialects=infos).model_dump(mode="json")) + "\n")
            return 0

    except ElSqlError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
