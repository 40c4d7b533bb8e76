"""
Save file parser - size based format detection + per-generation extraction
"""
from dataclasses import dataclass
from typing import Dict, Optional

import structlog

from savefile.classifier import classify
from savefile.extractors import DSExtractor, GBAExtractor, Gen1Extractor, Gen2Extractor, GenerationExtractor
from savefile.extractors.base import TraceSink
from savefile.result import DetectedFormat, ExtractionOutcome, ExtractionResult

logger = structlog.get_logger('savefile')


@dataclass(frozen=True)
class ParseReport:
    outcome: ExtractionOutcome
    detected_format: DetectedFormat
    size: int

    @property
    def result(self) -> ExtractionResult:
        return self.outcome.result

    def to_dict(self):
        data = self.result.to_dict()
        data["size"] = self.size
        data["degraded"] = self.outcome.degraded
        return data


class SaveFileParser:
    """Classifies a blob by size and dispatches it to the matching extractor"""

    def __init__(self, extractors: Optional[Dict[DetectedFormat, GenerationExtractor]] = None):
        self.extractors = {
            DetectedFormat.GAME_BOY: Gen1Extractor(),
            DetectedFormat.GAME_BOY_COLOR: Gen2Extractor(),
            DetectedFormat.GAME_BOY_ADVANCE: GBAExtractor(),
            DetectedFormat.NINTENDO_DS: DSExtractor(),
        }
        if extractors:
            self.extractors.update(extractors)

    def register(self, detected_format: DetectedFormat, extractor: GenerationExtractor):
        self.extractors[detected_format] = extractor

    def parse(self, data, trace: Optional[TraceSink] = None) -> ParseReport:
        data = data or b""
        size = len(data)
        detected_format = classify(size)
        extractor = self.extractors[detected_format]

        outcome = extractor.extract(data, trace=trace)
        # Stamp the detected format, degraded outcomes included
        outcome = ExtractionOutcome(
            result=outcome.result.with_format(detected_format),
            degraded=outcome.degraded,
            error=outcome.error,
        )

        logger.info(
            "Save file parsed",
            size=size,
            format=detected_format.label,
            badges=outcome.result.badges,
            dex_completion=outcome.result.dex_completion_percent,
            degraded=outcome.degraded,
        )
        return ParseReport(outcome=outcome, detected_format=detected_format, size=size)


_default_parser = SaveFileParser()


def parse_save_file(data, trace: Optional[TraceSink] = None) -> ExtractionResult:
    """Parse a raw save blob into a normalized ExtractionResult"""
    return _default_parser.parse(data, trace=trace).result


def structlog_trace(event, **fields):
    """Trace sink that forwards extractor probes to the debug log"""
    logger.debug(f"probe {event}", **fields)
