from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import CONFIG_FILE, ExpansionConfig, find_config, load_config
from .context import ExpansionContext
from .errors import AbbrexUserError
from .expander import expand
from .filters import list_filters, resolve_filters
from .jsonic import dumps as jdumps
from .report import build_report
from .tree_loader import load_tree
from .version import tool_version

logger = logging.getLogger("abbrex")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="abbrex",
        description="Abbreviation tree expander",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("-v", "--verbose", action="store_true", help="отладочный вывод в stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_expand = sub.add_parser("expand", help="Раскрыть дерево аббревиатур из YAML описания")
    sp_expand.add_argument("tree", type=Path, help="YAML файл с описанием дерева")
    sp_expand.add_argument(
        "--config",
        type=Path,
        help=f"файл конфигурации (по умолчанию ищется {CONFIG_FILE} рядом с деревом и выше)",
    )
    sp_expand.add_argument(
        "--filter",
        action="append",
        metavar="SUFFIX",
        help="фильтр по суффиксу (s, e, t, c); можно указать несколько, порядок сохраняется",
    )
    sp_expand.add_argument("--segments-limit", type=int, help="максимальное число переменных шаблона")
    sp_expand.add_argument(
        "--insert-surrounded",
        action="store_true",
        help="передавать окружаемый текст вглубь дерева (insert_surrounded_at_end)",
    )
    sp_expand.add_argument(
        "--single-line-host",
        action="store_true",
        help="документ-приёмник принимает только одну строку",
    )
    sp_expand.add_argument("--json", action="store_true", help="вывести JSON-отчёт вместо текста")

    sub.add_parser("filters", help="Список доступных фильтров (JSON)")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("ABBREX_DEBUG") else logging.WARNING
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _load_config(ns: argparse.Namespace) -> ExpansionConfig:
    if ns.config is not None:
        return load_config(ns.config)
    found = find_config(ns.tree.resolve().parent)
    return load_config(found) if found is not None else ExpansionConfig()


def _context(cfg: ExpansionConfig, ns: argparse.Namespace) -> ExpansionContext:
    ctx = ExpansionContext(
        dialect=cfg.dialect,
        code_style=cfg.code_style,
        file_type=cfg.file_type,
        short_boolean_notation=cfg.short_boolean_notation,
        block_tags=cfg.block_tags,
    )
    if ns.single_line_host:
        ctx = replace(ctx, editor_is_single_line_host=True)
    return ctx


def _run_expand(ns: argparse.Namespace) -> int:
    cfg = _load_config(ns)
    filter_names: List[str] = ns.filter if ns.filter else list(cfg.filters)
    filters = resolve_filters(filter_names)
    segments_limit = ns.segments_limit if ns.segments_limit is not None else cfg.segments_limit

    root = load_tree(ns.tree)
    document = expand(
        root,
        _context(cfg, ns),
        filters=filters,
        insert_surrounded_text=ns.insert_surrounded,
        segments_limit=segments_limit,
    )

    if ns.json:
        report = build_report(document, tool_version(), filter_names)
        sys.stdout.write(jdumps(report.model_dump(mode="json", by_alias=True)))
    else:
        sys.stdout.write(document.text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "expand":
            return _run_expand(ns)

        if ns.cmd == "filters":
            sys.stdout.write(jdumps({"filters": list_filters()}))
            return 0

    except AbbrexUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
