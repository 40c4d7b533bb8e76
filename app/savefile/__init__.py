"""
Save file package

Heuristic reader for battery/flash save files:
- classifier.py: file size -> DetectedFormat
- extractors/: one offset-probing strategy per generation
- parser.py: orchestration, returns an ExtractionResult

Usage:
    from savefile import parse_save_file
    result = parse_save_file(blob)
"""

from .result import DetectedFormat, ExtractionOutcome, ExtractionResult
from .classifier import classify
from .parser import ParseReport, SaveFileParser, parse_save_file

__all__ = [
    "DetectedFormat",
    "ExtractionOutcome",
    "ExtractionResult",
    "ParseReport",
    "SaveFileParser",
    "classify",
    "parse_save_file",
]
