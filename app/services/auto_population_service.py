"""Auto-population of tracker state from an extracted save file.

Turns the numbers read from a save (badges, dex completion) into checklist
and caught-pokemon rows for one (user, game). Every write is an
insert-or-update on the natural key of the row, so running the same import
twice leaves the same rows behind, and completed items are never reset.

A failing row is rolled back, logged and skipped. It never fails the upload.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from constants import (
    CONTENT_TYPE_GYM,
    CONTENT_TYPE_POKEMON_CATCH,
    DEFAULT_SETTINGS,
    ROSTER_MODE_GENERATION,
)
from metrics import autopopulate_writes_total
from pokemon_data import REFERENCE_ROSTER_SIZE, pokemon_name
from repositories.content_tracker_repository import ContentTrackerRepository
from repositories.game_content_repository import GameContentRepository
from repositories.user_pokemon_repository import UserPokemonRepository
from repositories.user_progress_repository import UserProgressRepository
from savefile.extractors import SPECIES_TOTALS
from savefile.result import ExtractionResult

logger = structlog.get_logger('auto_population')


@dataclass
class AutoPopulationSummary:
    progress: Optional[object] = None
    gyms_completed: int = 0
    dex_milestone_completed: bool = False
    creatures_recorded: int = 0
    failures: List[dict] = field(default_factory=list)

    def to_dict(self, dex_progress=0):
        return {
            "gyms_completed": self.gyms_completed,
            "dex_progress": dex_progress,
            "dex_milestone_completed": self.dex_milestone_completed,
            "creatures_recorded": self.creatures_recorded,
            "failures": len(self.failures),
        }


class AutoPopulationEngine:
    """Reconciles an ExtractionResult with the tracker rows of a user"""

    def __init__(self, settings=None):
        settings = settings or DEFAULT_SETTINGS["savefile"]
        self.dex_threshold = settings.get("dex_milestone_threshold", 10)
        self.roster_mode = settings.get("roster_mode")

    def roster_size(self, result: ExtractionResult) -> int:
        """
        Number of species the dex percentage is applied to.

        The reference mode always uses the 151 Kanto species, whatever the
        generation of the save.
        """
        if self.roster_mode == ROSTER_MODE_GENERATION:
            return SPECIES_TOTALS.get(result.format, REFERENCE_ROSTER_SIZE)
        return REFERENCE_ROSTER_SIZE

    def apply(self, result: ExtractionResult, game, user_id, catalog=None, save_file_path=None):
        summary = AutoPopulationSummary()
        summary.progress = UserProgressRepository.mark_save_file_imported(user_id, game.id, save_file_path)

        if catalog is None:
            catalog = GameContentRepository.get_by_game(game.id)
        catalog = sorted(catalog, key=lambda item: (item.order_num, item.id))

        self._complete_gyms(result, game, user_id, catalog, summary)
        self._complete_dex_milestone(result, game, user_id, catalog, summary)
        self._record_pokemon(result, game, user_id, summary)

        logger.info(
            "Auto-population finished",
            user_id=user_id,
            game_id=game.id,
            gyms_completed=summary.gyms_completed,
            dex_milestone=summary.dex_milestone_completed,
            creatures=summary.creatures_recorded,
            failures=len(summary.failures),
        )
        return summary

    def _complete_gyms(self, result, game, user_id, catalog, summary):
        gyms = [item for item in catalog if item.content_type == CONTENT_TYPE_GYM]
        for gym in gyms[:min(result.badges, len(gyms))]:
            if self._upsert_tracker(user_id, game.id, gym, "gym", summary):
                summary.gyms_completed += 1

    def _complete_dex_milestone(self, result, game, user_id, catalog, summary):
        if result.dex_completion_percent < self.dex_threshold:
            return
        milestones = [item for item in catalog if item.content_type == CONTENT_TYPE_POKEMON_CATCH]
        if milestones and self._upsert_tracker(user_id, game.id, milestones[0], "dex", summary):
            summary.dex_milestone_completed = True

    def _record_pokemon(self, result, game, user_id, summary):
        if result.dex_completion_percent <= 0:
            return
        caught_count = result.dex_completion_percent * self.roster_size(result) // 100
        for dex_number in range(1, caught_count + 1):
            try:
                UserPokemonRepository.upsert(
                    user_id,
                    game.id,
                    dex_number,
                    pokemon_name(dex_number),
                    origin_game_id=game.id,
                    origin_game_name=game.name,
                )
            except SQLAlchemyError as e:
                self._record_failure(summary, "pokemon", dex_number, e)
                continue
            autopopulate_writes_total.labels(kind="pokemon", status="success").inc()
            summary.creatures_recorded += 1

    def _upsert_tracker(self, user_id, game_id, item, kind, summary):
        try:
            ContentTrackerRepository.upsert_completed(user_id, game_id, item.id)
        except SQLAlchemyError as e:
            self._record_failure(summary, kind, item.id, e)
            return False
        autopopulate_writes_total.labels(kind=kind, status="success").inc()
        return True

    @staticmethod
    def _record_failure(summary, kind, key, error):
        logger.warning("Auto-population write skipped", kind=kind, key=key, error=str(error))
        autopopulate_writes_total.labels(kind=kind, status="error").inc()
        summary.failures.append({"kind": kind, "key": key, "error": str(error)})
