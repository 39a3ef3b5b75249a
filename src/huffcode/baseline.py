from __future__ import annotations

import zlib
from dataclasses import dataclass

from huffcode.errors import MissingResource, UsageError

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None

BASELINES: tuple[str, ...] = ("zlib", "zstd")


@dataclass
class BaselineZstd:
    """
    General-purpose byte compressor used only as a size reference.

    "tight" trims the zstd frame overhead:
      - no content size in the frame
      - no checksum
    """

    level: int = 19
    tight: bool = True

    def _require(self) -> None:
        if zstd is None:
            raise MissingResource(
                "Modulo 'zstandard' non disponibile. Installa con: python3 -m pip install zstandard"
            )

    def compress(self, data: bytes) -> bytes:
        self._require()
        if self.tight:
            c = zstd.ZstdCompressor(
                level=int(self.level),
                write_content_size=False,
                write_checksum=False,
            )
        else:
            c = zstd.ZstdCompressor(level=int(self.level))
        return c.compress(data)


class BaselineZlib:
    """zlib/DEFLATE size reference (no external deps)."""

    def __init__(self, level: int = 9):
        if not (0 <= level <= 9):
            raise ValueError(f"zlib level must be 0..9, got {level}")
        self.level = level

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(bytes(data), self.level)


def _baseline_for(codec_id: str) -> BaselineZlib | BaselineZstd:
    cid = codec_id.strip().lower()
    if cid == "zlib":
        return BaselineZlib()
    if cid == "zstd":
        return BaselineZstd()
    raise UsageError(f"baseline non supportata: {codec_id!r} (attese: {', '.join(BASELINES)})")


def baseline_bits(text: str, codec_id: str) -> int:
    """Bit size of the UTF-8 text once compressed by `codec_id`; 0 for empty text."""
    comp = _baseline_for(codec_id)
    if not text:
        return 0
    return len(comp.compress(text.encode("utf-8"))) * 8
