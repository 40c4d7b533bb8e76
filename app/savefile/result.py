"""
Save file parsing results.

Every extraction produces an ``ExtractionOutcome``. The outcome is always
usable: when an extractor cannot make sense of the bytes it still hands back
a zeroed ``ExtractionResult`` and flags itself as ``degraded``. A wrong guess
is preferable to blocking an upload.
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class DetectedFormat(str, Enum):
    """Hardware generation guessed from the save file size"""
    GAME_BOY = "Game Boy (8KB)"
    GAME_BOY_COLOR = "Game Boy Color (32KB)"
    GAME_BOY_ADVANCE = "Game Boy Advance (128KB)"
    NINTENDO_DS = "Nintendo DS (512KB)"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExtractionResult:
    estimated_game_label: str = "Pokemon"
    badges: int = 0
    dex_completion_percent: int = 0
    playtime_hours: int = 0
    format: DetectedFormat = DetectedFormat.UNKNOWN

    def with_format(self, detected_format: DetectedFormat) -> "ExtractionResult":
        return replace(self, format=detected_format)

    def to_dict(self) -> dict:
        return {
            "format": self.format.label,
            "estimated_game": self.estimated_game_label,
            "badges": self.badges,
            "dex_completion": self.dex_completion_percent,
            "playtime_hours": self.playtime_hours,
        }


@dataclass(frozen=True)
class ExtractionOutcome:
    result: ExtractionResult = field(default_factory=ExtractionResult)
    degraded: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        # Extraction never fails from the caller's point of view
        return True

    @classmethod
    def success(cls, result: ExtractionResult) -> "ExtractionOutcome":
        return cls(result=result)

    @classmethod
    def fallback(cls, label: str, error: Optional[str] = None) -> "ExtractionOutcome":
        return cls(result=ExtractionResult(estimated_game_label=label), degraded=True, error=error)
