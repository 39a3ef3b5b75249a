"""Plain-text and JSON views of an EncodeResult.

Determinism note:
Both renderers are pure functions of the result. The JSON form is emitted
with sorted keys and no timestamps/paths, so two runs on the same text give
byte-identical output (covered by tests/test_cli_smoke.py).
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from huffcode.core.tree import Leaf, TreeNode, leaf_frequencies
from huffcode.engine import EncodeResult

SECTIONS: tuple[str, ...] = ("codes", "stats", "tree")
ENCODE_SCHEMA_ID = "huffcode.encode.v1"


def display_symbol(sym: str) -> str:
    if sym == " ":
        return "' '"
    if sym.isprintable():
        return sym
    return repr(sym)


def code_rows(result: EncodeResult) -> list[tuple[str, str, int | None]]:
    """Rows (symbol, code, frequency), shortest codes first, then by symbol."""
    freqs = leaf_frequencies(result.tree)
    order = sorted(result.codes, key=lambda s: (len(result.codes[s]), s))
    return [(sym, result.codes[sym], freqs.get(sym)) for sym in order]


def tree_text(node: TreeNode | None, indent: str = "", prefix: str = "") -> str:
    if node is None:
        return ""
    if isinstance(node, Leaf):
        return f"{indent}{prefix}Leaf: {display_symbol(node.symbol)} (Freq: {node.freq})\n"
    child_indent = indent + "  "
    return (
        f"{indent}{prefix}Node (Freq: {node.freq})\n"
        + tree_text(node.left, child_indent, "0: ")
        + tree_text(node.right, child_indent, "1: ")
    )


def tree_to_dict(node: TreeNode | None) -> dict[str, Any] | None:
    """Hierarchical {name, char, freq, children} form for tree-drawing consumers."""
    if node is None:
        return None
    if isinstance(node, Leaf):
        return {
            "name": f"{display_symbol(node.symbol)} ({node.freq})",
            "char": node.symbol,
            "freq": node.freq,
        }
    return {
        "name": f"({node.freq})",
        "char": None,
        "freq": node.freq,
        "children": [tree_to_dict(node.left), tree_to_dict(node.right)],
    }


def _format_ratio(ratio: float, precision: int) -> str:
    return f"{ratio:.{precision}f}"


def _codes_table(result: EncodeResult) -> list[str]:
    rows = code_rows(result)
    header = ("Character", "Huffman Code", "Frequency")
    cells = [(display_symbol(s), c, "-" if f is None else str(f)) for s, c, f in rows]
    widths = [max(len(r[i]) for r in [header, *cells]) for i in range(3)]

    def fmt(r: tuple[str, str, str]) -> str:
        return "  ".join(r[i].ljust(widths[i]) for i in range(3)).rstrip()

    return [fmt(header), fmt(tuple("-" * w for w in widths)), *[fmt(r) for r in cells]]


def render_text(
    result: EncodeResult,
    sections: Iterable[str] = SECTIONS,
    *,
    precision: int = 2,
    baseline: dict[str, int] | None = None,
) -> str:
    wanted = set(sections)
    st = result.stats
    lines: list[str] = []

    if "codes" in wanted:
        lines.append("Character Codes:")
        if result.codes:
            lines.extend(_codes_table(result))
        else:
            lines.append("Enter some text first.")
        lines.append("")

    if "stats" in wanted:
        lines.append("Compression Stats:")
        if st.original_bits > 0:
            lines.append(f"Original Length: {st.original_length} characters")
            lines.append(
                f"Original Size: ≈ {st.original_bits} bits (assuming 8 bits/char)"
            )
            lines.append(f"Encoded Size: {st.encoded_bits} bits")
            lines.append(f"Compression Ratio: {_format_ratio(st.ratio, precision)}% reduction")
            for codec_id, bits in sorted((baseline or {}).items()):
                lines.append(f"Baseline ({codec_id}): {bits} bits")
        else:
            lines.append("Enter text to see stats.")
        lines.append("")

    if "tree" in wanted:
        lines.append("Huffman Tree:")
        if result.tree is None:
            lines.append("No tree to display (input might be empty).")
        else:
            lines.append(tree_text(result.tree).rstrip("\n"))
        lines.append("")

    return "\n".join(lines)


def build_json_report(
    result: EncodeResult,
    sections: Iterable[str] = SECTIONS,
    *,
    baseline: dict[str, int] | None = None,
) -> dict[str, Any]:
    wanted = set(sections)
    obj: dict[str, Any] = {"schema": ENCODE_SCHEMA_ID}
    if "codes" in wanted:
        obj["codes"] = dict(result.codes)
        obj["frequencies"] = dict(result.frequencies)
        obj["rows"] = [
            {"char": s, "code": c, "freq": f} for s, c, f in code_rows(result)
        ]
    if "stats" in wanted:
        obj["stats"] = result.stats.as_dict()
        if baseline:
            obj["baseline"] = dict(baseline)
    if "tree" in wanted:
        obj["tree"] = tree_to_dict(result.tree)
    return obj


def render_json(
    result: EncodeResult,
    sections: Iterable[str] = SECTIONS,
    *,
    baseline: dict[str, int] | None = None,
) -> str:
    return json.dumps(
        build_json_report(result, sections, baseline=baseline),
        ensure_ascii=False,
        sort_keys=True,
    )
