#!/usr/bin/env python3
"""General smoke test for the huffcode engine.

Goal:
- deterministic, repeatable random texts (seeded)
- check prefix-freedom, coverage, round-trip walks and sort/heap agreement
- produce a JSON report
- fail fast (non-zero exit) on any mismatch

Usage examples:
  python tools/smoke_general.py --iters 200
  python tools/smoke_general.py --iters 50 --seed 123 --unicode
"""

from __future__ import annotations

import argparse
import json
import random
import string
import sys
from pathlib import Path
from typing import Any


def _rand_text(rng: random.Random, *, unicode: bool) -> str:
    alphabet = string.ascii_letters + string.digits + " _-.,;:/@\n"
    if unicode:
        alphabet += "àèéìòùΩλ€→"
    # skewed weights make frequency ties and deep trees both likely
    k = rng.randint(1, len(alphabet))
    chars = rng.sample(alphabet, k)
    weights = [rng.choice([1, 1, 2, 3, 5, 8, 13]) for _ in chars]
    n = rng.randint(0, 400)
    return "".join(rng.choices(chars, weights=weights, k=n))


def _check_one(text: str) -> list[str]:
    from huffcode.core.tree import walk_code
    from huffcode.engine import encode

    problems: list[str] = []
    ref = encode(text, strategy="sort")
    alt = encode(text, strategy="heap")

    if ref.tree != alt.tree or ref.codes != alt.codes:
        problems.append("sort/heap mismatch")
    if set(ref.codes) != set(text):
        problems.append("coverage")

    codes = sorted(ref.codes.values())
    for a, b in zip(codes, codes[1:]):
        if b.startswith(a):
            problems.append(f"prefix {a!r} < {b!r}")

    if ref.tree is not None:
        for sym, code in ref.codes.items():
            if walk_code(ref.tree, code).symbol != sym:
                problems.append(f"walk {sym!r}")
    if ref.weighted_path_length() != ref.stats.encoded_bits:
        problems.append("weighted path length != encoded bits")
    return problems


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="huffcode engine smoke test")
    ap.add_argument("--iters", type=int, default=100)
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--unicode", action="store_true", help="Include non-ASCII symbols")
    ap.add_argument("--report", type=Path, default=None, help="Write the JSON report here")
    ns = ap.parse_args(argv)

    repo = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo / "src"))

    rng = random.Random(ns.seed)
    failures: list[dict[str, Any]] = []
    for i in range(ns.iters):
        text = _rand_text(rng, unicode=ns.unicode)
        problems = _check_one(text)
        if problems:
            failures.append({"iter": i, "text": text, "problems": problems})

    report = {"iters": ns.iters, "seed": ns.seed, "unicode": ns.unicode, "failures": failures}
    out = json.dumps(report, ensure_ascii=False, indent=2, sort_keys=True)
    if ns.report is not None:
        ns.report.write_text(out + "\n", encoding="utf-8")
    print(out)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
