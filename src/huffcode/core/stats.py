from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from huffcode.errors import InvariantViolation

BITS_PER_SYMBOL = 8  # dimensione "originale" assunta per ogni carattere


@dataclass(frozen=True)
class Stats:
    original_length: int = 0
    original_bits: int = 0
    encoded_bits: int = 0
    ratio: float = 0.0  # percentuale di riduzione

    def as_dict(self) -> dict[str, int | float]:
        return {
            "original_length": self.original_length,
            "original_bits": self.original_bits,
            "encoded_bits": self.encoded_bits,
            "ratio": self.ratio,
        }


def compression_ratio(original_bits: int, encoded_bits: int, precision: int | None = 2) -> float:
    """(1 - encoded/original) * 100, 0 when there is nothing to compress."""
    if original_bits <= 0:
        return 0.0
    ratio = (1 - encoded_bits / original_bits) * 100
    if precision is None:
        return ratio
    return round(ratio, precision)


def compute_stats(
    text: Sequence[str], codes: Mapping[str, str], *, precision: int | None = 2
) -> Stats:
    n = len(text)
    original_bits = n * BITS_PER_SYMBOL

    encoded_bits = 0
    for sym in text:
        code = codes.get(sym)
        if code is None:
            raise InvariantViolation(f"simbolo {sym!r} assente dalla tabella dei codici")
        encoded_bits += len(code)

    return Stats(
        original_length=n,
        original_bits=original_bits,
        encoded_bits=encoded_bits,
        ratio=compression_ratio(original_bits, encoded_bits, precision),
    )
