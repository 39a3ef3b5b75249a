from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

FrequencyTable = dict[str, int]


def analyze(text: Iterable[str]) -> FrequencyTable:
    """
    text -> {symbol: count}

    Keys follow first-appearance order: the builder seeds its pool in this
    order, so it decides the tree shape on frequency ties.
    """
    return dict(Counter(text))
