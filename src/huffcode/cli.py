"""huffcode CLI.

This is the stable CLI entrypoint (console-script: ``huffcode``).

Notes:
  - --version is supported at top-level.
  - encode supports --json (machine-readable report on stdout, errors on stderr).
  - flags override the values of a --report spec.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from huffcode.baseline import BASELINES, baseline_bits
from huffcode.core.builder import STRATEGIES
from huffcode.engine import encode
from huffcode.errors import EXIT_GENERIC, EXIT_USAGE, HuffcodeError, MissingResource, UsageError
from huffcode.render import render_json, render_text
from huffcode.report_spec import (
    FORMATS,
    ReportSpecError,
    ReportSpecV1,
    load_report_spec,
    parse_precision,
    parse_sections,
)

ERROR_SCHEMA_ID = "huffcode.error.v1"


def _pkg_version() -> str:
    try:
        from importlib.metadata import PackageNotFoundError, version

        try:
            return version("huffcode")
        except PackageNotFoundError:
            # script invoked from source, metadata missing
            return "0+unknown"
    except Exception:
        return "0+unknown"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _print_error_json(err_type: str, message: str, exit_code: int) -> None:
    """Emit stable JSON on stderr for errors when --json is used."""
    obj = {
        "schema": ERROR_SCHEMA_ID,
        "ok": False,
        "version": _pkg_version(),
        "error": {"type": err_type, "message": message, "exit_code": int(exit_code)},
    }
    print(json.dumps(obj, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _read_input(input_arg: str | None, text: str | None) -> str:
    if text is not None:
        if input_arg is not None:
            raise UsageError("encode: usa INPUT oppure --text, non entrambi")
        return text
    if input_arg is None or input_arg == "-":
        return sys.stdin.read()
    p = Path(input_arg).expanduser()
    if not p.is_file():
        raise MissingResource(f"encode: file non trovato: {p}")
    return p.read_text(encoding="utf-8")


def _resolve_spec(ns: argparse.Namespace) -> ReportSpecV1:
    spec = load_report_spec(ns.report) if ns.report is not None else ReportSpecV1()
    if ns.json:
        spec = replace(spec, format="json")
    elif ns.format is not None:
        spec = replace(spec, format=ns.format)
    if ns.sections is not None:
        spec = replace(spec, sections=parse_sections(ns.sections))
    if ns.precision is not None:
        spec = replace(spec, precision=parse_precision(ns.precision))
    if ns.strategy is not None:
        spec = replace(spec, strategy=ns.strategy)
    if ns.baseline is not None:
        spec = replace(spec, baseline=ns.baseline)
    return spec


def _cmd_encode(ns: argparse.Namespace) -> int:
    spec = _resolve_spec(ns)
    text = _read_input(ns.input, ns.text)

    result = encode(text, strategy=spec.strategy, precision=spec.precision)  # type: ignore[arg-type]
    baseline = {spec.baseline: baseline_bits(text, spec.baseline)} if spec.baseline else None

    if spec.format == "json":
        print(render_json(result, spec.sections, baseline=baseline))
    else:
        print(render_text(result, spec.sections, precision=spec.precision, baseline=baseline), end="")
    return 0


def _cmd_report_validate(spec_arg: str) -> int:
    # load is the validation
    load_report_spec(spec_arg)
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="huffcode", description="Huffman code tables, trees and compression stats"
    )
    p.add_argument("--version", action="version", version=f"huffcode {_pkg_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Build the Huffman code table of a text")
    p_e.add_argument(
        "input", nargs="?", default=None, help="UTF-8 text file ('-' or omitted: stdin)"
    )
    p_e.add_argument("--text", default=None, help="Encode this literal text instead of a file")
    p_e.add_argument(
        "--report",
        default=None,
        help="Report spec (JSON). Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_e.add_argument("--format", choices=list(FORMATS), default=None, help="Output format")
    p_e.add_argument(
        "--sections", default=None, help="Comma-separated sections (codes,stats,tree)"
    )
    p_e.add_argument("--precision", type=int, default=None, help="Decimals for the ratio (0..6)")
    p_e.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default=None,
        help="Pool strategy (sort: reference stable sort, heap: same tree in O(n log n))",
    )
    p_e.add_argument(
        "--baseline",
        choices=list(BASELINES),
        default=None,
        help="Also report the size of the text under a general-purpose compressor",
    )
    p_e.add_argument(
        "--json", action="store_true", help="JSON report on stdout, JSON errors on stderr"
    )
    _add_common_args(p_e)

    p_v = sub.add_parser("report-validate", help="Validate a report spec (v1)")
    p_v.add_argument("spec", help="Report spec JSON (@file.json or inline JSON)")
    _add_common_args(p_v)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)
    as_json = bool(getattr(ns, "json", False))

    try:
        if ns.cmd == "encode":
            return _cmd_encode(ns)
        if ns.cmd == "report-validate":
            return _cmd_report_validate(str(ns.spec))
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except ReportSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        if as_json:
            _print_error_json(type(e).__name__, str(e), EXIT_USAGE)
        else:
            print(f"[huffcode] {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffcodeError as e:
        if getattr(ns, "debug", False):
            raise
        code = int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
        if as_json:
            _print_error_json(type(e).__name__, str(e), code)
        else:
            print(f"[huffcode] {e}", file=sys.stderr)
        return code
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        if as_json:
            _print_error_json(type(e).__name__, str(e), EXIT_GENERIC)
        else:
            print(f"[huffcode] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
