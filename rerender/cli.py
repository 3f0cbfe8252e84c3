from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from jinja2 import TemplateError, TemplateSyntaxError

from .engine import list_plugins, list_tags, run_render
from .errors import RerenderUserError
from .jsonic import dumps as jdumps
from .types import RunOptions
from .variables import parse_vars
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="rerender",
        description="Render Jinja2 templates with the double-render {% render %} block tag",
        add_help=True,
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_root(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--root",
            default=".",
            help="project root with rerender.yaml and the templates directory (default: cwd)",
        )

    sp_render = sub.add_parser("render", help="Render a template to stdout or a file")
    sp_render.add_argument("target", help="template name under the templates directory, or - for stdin")
    add_root(sp_render)
    sp_render.add_argument(
        "--data",
        action="append",
        metavar="FILE",
        help="YAML/JSON data file merged into the context (can be repeated)",
    )
    sp_render.add_argument(
        "--var",
        action="append",
        metavar="KEY=VALUE",
        help="string variable for the context (can be repeated)",
    )
    sp_render.add_argument("--out", metavar="FILE", help="write the result to FILE instead of stdout")
    sp_render.add_argument(
        "--check-json",
        action="store_true",
        help="fail unless the rendered output is valid JSON",
    )

    sp_list = sub.add_parser("list", help="Lists of entities (JSON)")
    sp_list.add_argument("what", choices=["plugins", "tags"], help="what to list")
    add_root(sp_list)

    return p


def _setup_logging(verbose: bool) -> None:
    log = logging.getLogger("rerender")
    debug = verbose or bool(os.environ.get("RERENDER_DEBUG"))
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    if not log.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        log.addHandler(h)


def _opts(ns: argparse.Namespace) -> RunOptions:
    return RunOptions(
        data_files=list(ns.data or []),
        variables=parse_vars(ns.var),
        check_json=bool(ns.check_json),
    )


def _format_template_error(e: TemplateError) -> str:
    if isinstance(e, TemplateSyntaxError):
        name = e.filename or e.name or "<string>"
        return f"{name}:{e.lineno}: {e.message}"
    return str(e)


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        root = Path(ns.root).resolve()

        if ns.cmd == "render":
            text = run_render(root, ns.target, _opts(ns))
            if ns.out:
                Path(ns.out).write_text(text, encoding="utf-8")
            else:
                sys.stdout.write(text)
            return 0

        if ns.cmd == "list":
            data: Dict[str, Any]
            if ns.what == "plugins":
                data = {"plugins": list_plugins(root)}
            elif ns.what == "tags":
                data = {"tags": list_tags(root)}
            else:
                raise ValueError(f"Unknown list target: {ns.what}")
            sys.stdout.write(jdumps(data))
            return 0

    except RerenderUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except TemplateError as e:
        sys.stderr.write(_format_template_error(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
