"""Report spec (v1) for huffcode.

Goal: make encode reports reproducible (CLI, scripts, CI).

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from huffcode.baseline import BASELINES
from huffcode.core.builder import STRATEGIES
from huffcode.render import SECTIONS

SPEC_ID_V1 = "huffcode.report.v1"
FORMATS: tuple[str, ...] = ("text", "json")
MAX_PRECISION = 6


class ReportSpecError(ValueError):
    pass


def _load_json_arg(spec_arg: str) -> dict[str, Any]:
    s = spec_arg.strip()
    if not s:
        raise ReportSpecError("report: argomento vuoto")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise ReportSpecError(f"report: file non trovato: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except Exception as e:
            raise ReportSpecError(f"report: JSON non valido in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise ReportSpecError(f"report: il JSON in {p} deve essere un oggetto")
        return obj

    try:
        obj = json.loads(s)
    except Exception as e:
        raise ReportSpecError(f"report: JSON inline non valido: {e}") from e
    if not isinstance(obj, dict):
        raise ReportSpecError("report: il JSON inline deve essere un oggetto")
    return obj


def _optional_choice(obj: dict[str, Any], key: str, choices: tuple[str, ...], default: str) -> str:
    v = obj.get(key, default)
    if not isinstance(v, str) or v.strip().lower() not in choices:
        raise ReportSpecError(f"report: campo '{key}' deve essere uno di: {', '.join(choices)}")
    return v.strip().lower()


def parse_sections(v: object) -> tuple[str, ...]:
    """Accept a list of names or a 'codes,stats' string; order follows SECTIONS."""
    if isinstance(v, str):
        items = [x.strip().lower() for x in v.split(",") if x.strip()]
    elif isinstance(v, list) and all(isinstance(x, str) for x in v):
        items = [x.strip().lower() for x in v]
    else:
        raise ReportSpecError("report: 'sections' deve essere una lista di stringhe")
    if not items:
        raise ReportSpecError("report: 'sections' vuoto")
    unknown = sorted(set(items) - set(SECTIONS))
    if unknown:
        raise ReportSpecError(f"report: sezioni non supportate: {', '.join(unknown)}")
    return tuple(s for s in SECTIONS if s in items)


def parse_precision(v: object) -> int:
    if isinstance(v, bool) or not isinstance(v, int) or not (0 <= v <= MAX_PRECISION):
        raise ReportSpecError(f"report: 'precision' deve essere un intero 0..{MAX_PRECISION}")
    return v


@dataclass(frozen=True)
class ReportSpecV1:
    """How an encode result is computed and shown."""

    name: str = "default"
    format: str = "text"
    sections: tuple[str, ...] = SECTIONS
    precision: int = 2
    strategy: str = "sort"
    baseline: str | None = None


def load_report_spec(spec_arg: str) -> ReportSpecV1:
    """Load and validate a report spec.

    spec_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(spec_arg)

    allowed = {"spec", "name", "format", "sections", "precision", "strategy", "baseline"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise ReportSpecError(f"report: chiavi non supportate: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise ReportSpecError(f"report: spec non supportata: {spec_id!r} (attesa {SPEC_ID_V1!r})")

    name = obj.get("name", "default")
    if not isinstance(name, str) or not name.strip():
        raise ReportSpecError("report: campo 'name' deve essere stringa")

    baseline = obj.get("baseline")
    if baseline is not None:
        baseline = _optional_choice(obj, "baseline", BASELINES, "")

    return ReportSpecV1(
        name=name.strip(),
        format=_optional_choice(obj, "format", FORMATS, "text"),
        sections=parse_sections(obj["sections"]) if "sections" in obj else SECTIONS,
        precision=parse_precision(obj.get("precision", 2)),
        strategy=_optional_choice(obj, "strategy", STRATEGIES, "sort"),
        baseline=baseline,
    )
