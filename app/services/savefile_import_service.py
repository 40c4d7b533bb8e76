"""
Save file upload orchestration: parse, validate against the selected game,
auto-populate, log.
"""

import structlog

from db import log_activity, to_json_dict
from exceptions import GameMismatchException, NotFoundException, ValidationException
from metrics import savefile_degraded_total, savefile_uploads_total
from repositories.game_content_repository import GameContentRepository
from repositories.games_repository import GamesRepository
from savefile.parser import SaveFileParser, structlog_trace
from services.auto_population_service import AutoPopulationEngine
from services.catalog_matcher import matches_game
from settings import get_savefile_settings
from utils import now_utc

logger = structlog.get_logger('savefile_import')

MISMATCH_WARNING = "Warning: Detected game may not match the selected game"


def progress_record_to_dict(progress):
    return to_json_dict(progress) if progress is not None else None


class SaveFileImportService:
    """Imports one save file into the progress of a user for a chosen game"""

    def __init__(self, settings=None, parser=None):
        self.settings = settings or get_savefile_settings()
        self.parser = parser or SaveFileParser()
        self.engine = AutoPopulationEngine(self.settings)

    def import_save_file(self, user_id, game_id, filename, data):
        if not filename:
            raise ValidationException("No file uploaded")

        game = GamesRepository.get_by_id(game_id)
        if game is None:
            raise NotFoundException("Game not found")

        trace = structlog_trace if self.settings.get("debug_trace") else None
        report = self.parser.parse(data, trace=trace)
        result = report.result
        format_label = report.detected_format.label

        if report.outcome.degraded:
            savefile_degraded_total.labels(format=format_label).inc()

        game_matches = matches_game(result.estimated_game_label, report.detected_format, game)
        if not game_matches and self.settings.get("strict_game_match"):
            savefile_uploads_total.labels(format=format_label, status="rejected").inc()
            raise GameMismatchException(result.estimated_game_label, game.name)

        catalog = GameContentRepository.get_by_game(game.id)
        summary = self.engine.apply(result, game, user_id, catalog=catalog, save_file_path=filename)

        log_activity(
            "savefile_imported",
            game_id=game.id,
            user_id=user_id,
            file=filename,
            format=format_label,
            detected_game=result.estimated_game_label,
            badges=result.badges,
            dex_completion=result.dex_completion_percent,
            degraded=report.outcome.degraded,
        )
        savefile_uploads_total.labels(format=format_label, status="imported").inc()
        logger.info(
            "Save file imported",
            user_id=user_id,
            game_id=game.id,
            file=filename,
            game_matches=game_matches,
        )

        progress = {
            "game_id": game.id,
            "user_id": user_id,
            "imported": True,
            "timestamp": now_utc().isoformat(),
        }
        progress.update(report.to_dict())

        return {
            "message": "Save file uploaded and analyzed successfully",
            "file": filename,
            "target_game": game.name,
            "detected_game": result.estimated_game_label,
            "format": format_label,
            "game_matches": game_matches,
            "validation_warning": None if game_matches else MISMATCH_WARNING,
            "progress": progress,
            "progress_record": progress_record_to_dict(summary.progress),
            "auto_populated": summary.to_dict(dex_progress=result.dex_completion_percent),
        }
