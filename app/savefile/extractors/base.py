"""
Shared building blocks for the per-generation extractors.

Offsets are best guesses gathered from several ROM revisions, so every field is
probed at a short ordered list of candidate locations. Reads outside the buffer
are skipped, never raised.
"""
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

import structlog

from constants import MAX_PLAYTIME_HOURS
from savefile.result import DetectedFormat, ExtractionOutcome, ExtractionResult

logger = structlog.get_logger('savefile')

TraceSink = Callable[..., None]


def _no_trace(event, **fields):
    return None


def popcount(value: int) -> int:
    return bin(value & 0xFF).count("1")


def clamp(value, low, high):
    return max(low, min(value, high))


def read_byte(data: bytes, offset: int) -> Optional[int]:
    if 0 <= offset < len(data):
        return data[offset]
    return None


def read_u16le(data: bytes, offset: int) -> Optional[int]:
    if 0 <= offset and offset + 2 <= len(data):
        return data[offset] | (data[offset + 1] << 8)
    return None


def count_run_bits(data: bytes, offset: int, length: int) -> Optional[int]:
    """Number of set bits in data[offset:offset + length], None when out of bounds"""
    if offset < 0 or offset + length > len(data):
        return None
    return sum(popcount(b) for b in data[offset:offset + length])


def first_plausible_badges(data: bytes, offsets: Iterable[int], cap: int, trace: TraceSink = _no_trace) -> int:
    """
    Badge count from the first candidate byte with a plausible bit count.

    Candidates are ordered most common ROM revision first, so the first byte
    whose popcount lands in (0, cap] wins.
    """
    for offset in offsets:
        value = read_byte(data, offset)
        if value is None:
            trace("badge_probe", offset=offset, skipped=True)
            continue
        bits = popcount(value)
        trace("badge_probe", offset=offset, value=value, bits=bits)
        if 0 < bits <= cap:
            return bits
    return 0


def max_plausible_dex(data: bytes, offsets: Iterable[int], run_length: int, ceiling: int,
                      trace: TraceSink = _no_trace) -> int:
    """
    Highest owned-species count across candidate dex bitfields.

    The dex is cumulative, so the largest count that does not exceed the
    species ceiling is taken as the most complete reading.
    """
    best = 0
    for offset in offsets:
        count = count_run_bits(data, offset, run_length)
        if count is None:
            trace("dex_probe", offset=offset, skipped=True)
            continue
        trace("dex_probe", offset=offset, count=count)
        if best < count <= ceiling:
            best = count
    return best


def completion_percent(count: int, total: int) -> int:
    if total <= 0:
        return 0
    # Round half up on integers
    return clamp((200 * count + total) // (2 * total), 0, 100)


def clamp_playtime(hours: Optional[int]) -> int:
    if hours is None:
        return 0
    return clamp(hours, 0, MAX_PLAYTIME_HOURS)


class GenerationExtractor(ABC):
    """
    One save layout strategy.

    Subclasses implement ``_extract`` with their own offset tables. ``extract``
    is the fail-soft boundary: anything raised inside ``_extract`` is turned into
    a degraded outcome carrying the zeroed default result.
    """

    detected_format: DetectedFormat = DetectedFormat.UNKNOWN
    fallback_label: str = "Pokemon"
    badge_cap: int = 8
    species_total: int = 0

    def extract(self, data, trace: Optional[TraceSink] = None) -> ExtractionOutcome:
        sink = trace or _no_trace
        try:
            result = self._extract(bytes(data or b""), sink)
        except Exception as e:
            logger.warning(
                "Save file extraction failed, using defaults",
                extractor=type(self).__name__,
                error=str(e),
            )
            return ExtractionOutcome.fallback(self.fallback_label, error=str(e))
        return ExtractionOutcome.success(result)

    @abstractmethod
    def _extract(self, data: bytes, trace: TraceSink) -> ExtractionResult:
        raise NotImplementedError
