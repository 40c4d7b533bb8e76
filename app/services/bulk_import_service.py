"""
Bulk import: many save files, game picked automatically for each one
"""

import structlog

from db import log_activity
from metrics import bulk_import_files_total
from repositories.games_repository import GamesRepository
from savefile.parser import SaveFileParser
from services.catalog_matcher import CatalogMatcher
from services.savefile_import_service import SaveFileImportService
from settings import get_savefile_settings
from utils import allowed_save_file

logger = structlog.get_logger('bulk_import')


def _failure(filename, error, details=None):
    record = {"file": filename, "success": False, "error": error}
    if details:
        record["details"] = details
    return record


class BulkImportService:
    def __init__(self, settings=None, parser=None):
        self.settings = settings or get_savefile_settings()
        self.parser = parser or SaveFileParser()
        self.importer = SaveFileImportService(settings=self.settings, parser=self.parser)

    def bulk_import(self, user_id, files):
        """
        Import ``(filename, bytes)`` pairs one after the other.

        A file that cannot be read, matched or imported becomes a failure
        record, the remaining files are still processed.
        """
        matcher = CatalogMatcher(GamesRepository.get_all())
        extensions = self.settings.get("allowed_extensions") or []
        results = []

        for filename, data in files:
            try:
                record = self._import_one(user_id, filename, data, matcher, extensions)
            except Exception as e:
                logger.warning("Bulk import file failed", file=filename, error=str(e))
                record = _failure(filename, getattr(e, "message", None) or str(e) or "Upload failed")

            bulk_import_files_total.labels(status="imported" if record["success"] else "failed").inc()
            results.append(record)

        imported = sum(1 for r in results if r["success"])
        failed = len(results) - imported

        log_activity("bulk_import_completed", user_id=user_id, imported=imported, failed=failed)
        logger.info("Bulk import finished", user_id=user_id, imported=imported, failed=failed)
        return {"results": results, "imported": imported, "failed": failed}

    def _import_one(self, user_id, filename, data, matcher, extensions):
        if not allowed_save_file(filename, extensions):
            return _failure(
                filename,
                "Unsupported file type",
                f"Allowed extensions: {', '.join(extensions)}",
            )

        report = self.parser.parse(data)
        result = report.result
        format_label = report.detected_format.label

        game = matcher.match(result.estimated_game_label, report.detected_format)
        if game is None:
            return _failure(
                filename,
                "Could not identify the game from save file",
                f"Detected: {result.estimated_game_label} ({format_label})",
            )

        self.importer.import_save_file(user_id, game.id, filename, data)
        return {
            "file": filename,
            "success": True,
            "game_id": game.id,
            "game_name": game.name,
            "platform": game.platform,
            "message": f"Imported for {game.name}",
            "details": {
                "detected_game": result.estimated_game_label,
                "format": format_label,
                "badges": result.badges,
                "dex_completion": result.dex_completion_percent,
            },
        }
