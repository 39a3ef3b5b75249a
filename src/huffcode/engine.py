"""Huffman encode pipeline: text -> frequencies -> tree -> codes + stats.

The engine never packs a bitstream; it only measures code lengths.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from huffcode.core.builder import CodeTable, Strategy, build
from huffcode.core.frequency import FrequencyTable, analyze
from huffcode.core.stats import Stats, compute_stats
from huffcode.core.tree import TreeNode


@dataclass(frozen=True)
class EncodeResult:
    codes: CodeTable = field(default_factory=dict)
    tree: TreeNode | None = None
    stats: Stats = field(default_factory=Stats)
    frequencies: FrequencyTable = field(default_factory=dict)

    def weighted_path_length(self) -> int:
        """sum(freq * len(code)); equals stats.encoded_bits."""
        return sum(f * len(self.codes[sym]) for sym, f in self.frequencies.items())


def encode(text: str, *, strategy: Strategy = "sort", precision: int | None = 2) -> EncodeResult:
    if not text:
        return EncodeResult()

    freq = analyze(text)
    root, codes = build(freq, strategy)
    stats = compute_stats(text, codes, precision=precision)
    return EncodeResult(codes=codes, tree=root, stats=stats, frequencies=freq)
