"""
Tests for auto-population of tracker rows from extraction results
"""
import pytest
from unittest.mock import patch
from sqlalchemy.exc import SQLAlchemyError

from constants import CONTENT_TYPE_GYM, CONTENT_TYPE_POKEMON_CATCH
from savefile.result import DetectedFormat, ExtractionResult
from services.auto_population_service import AutoPopulationEngine

USER = "trainer-1"


def gen1_result(badges=0, dex=0):
    return ExtractionResult(
        estimated_game_label="Pokemon Red/Blue/Yellow",
        badges=badges,
        dex_completion_percent=dex,
        format=DetectedFormat.GAME_BOY,
    )


def completed_content_ids(game_id):
    from repositories.content_tracker_repository import ContentTrackerRepository
    return {t.content_id for t in ContentTrackerRepository.get_by_user_and_game(USER, game_id) if t.is_completed}


def gyms_of(game):
    return [item for item in game.content if item.content_type == CONTENT_TYPE_GYM]


def dex_milestone_of(game):
    return [item for item in game.content if item.content_type == CONTENT_TYPE_POKEMON_CATCH][0]


class TestProgressRecord:
    """User progress upsert"""

    def test_creates_in_progress_record(self, red):
        summary = AutoPopulationEngine().apply(gen1_result(), red, USER, save_file_path="red.sav")

        assert summary.progress.status == "in_progress"
        assert summary.progress.save_file_imported is True
        assert summary.progress.save_file_path == "red.sav"
        assert summary.progress.started_at is not None

    def test_existing_status_is_kept(self, red):
        from repositories.user_progress_repository import UserProgressRepository
        UserProgressRepository.create(user_id=USER, game_id=red.id, status="paused")

        summary = AutoPopulationEngine().apply(gen1_result(badges=2), red, USER)

        assert summary.progress.status == "paused"
        assert summary.progress.save_file_imported is True
        assert len(UserProgressRepository.get_by_user(USER)) == 1


class TestGyms:
    """Badges complete gyms in catalog order"""

    def test_first_gyms_completed(self, red):
        summary = AutoPopulationEngine().apply(gen1_result(badges=3), red, USER)

        assert summary.gyms_completed == 3
        assert completed_content_ids(red.id) == {g.id for g in gyms_of(red)[:3]}

    def test_more_badges_than_gyms(self, red):
        from repositories.game_content_repository import GameContentRepository
        catalog = GameContentRepository.get_by_game(red.id)[:2]

        summary = AutoPopulationEngine().apply(gen1_result(badges=8), red, USER, catalog=catalog)

        assert summary.gyms_completed == 2

    def test_gym_completion_is_monotonic(self, red):
        engine = AutoPopulationEngine()
        engine.apply(gen1_result(badges=5), red, USER)
        engine.apply(gen1_result(badges=3), red, USER)

        assert completed_content_ids(red.id) == {g.id for g in gyms_of(red)[:5]}

    def test_completion_date_is_kept(self, red):
        from repositories.content_tracker_repository import ContentTrackerRepository
        engine = AutoPopulationEngine()
        first_gym = gyms_of(red)[0]

        engine.apply(gen1_result(badges=1), red, USER)
        completed_at = ContentTrackerRepository.get_entry(USER, red.id, first_gym.id).completed_at
        engine.apply(gen1_result(badges=1), red, USER)

        assert ContentTrackerRepository.get_entry(USER, red.id, first_gym.id).completed_at == completed_at

    def test_manually_unchecked_gym_is_completed_again(self, red):
        from repositories.content_tracker_repository import ContentTrackerRepository
        engine = AutoPopulationEngine()
        first_gym = gyms_of(red)[0]

        engine.apply(gen1_result(badges=1), red, USER)
        entry = ContentTrackerRepository.get_entry(USER, red.id, first_gym.id)
        ContentTrackerRepository.set_completed(entry.id, False)
        engine.apply(gen1_result(badges=1), red, USER)

        entry = ContentTrackerRepository.get_entry(USER, red.id, first_gym.id)
        assert entry.is_completed
        assert entry.completed_at is not None


class TestDexMilestone:
    """Dex milestone threshold"""

    def test_below_threshold(self, red):
        summary = AutoPopulationEngine().apply(gen1_result(dex=9), red, USER)
        assert not summary.dex_milestone_completed
        assert dex_milestone_of(red).id not in completed_content_ids(red.id)

    def test_at_threshold(self, red):
        summary = AutoPopulationEngine().apply(gen1_result(dex=10), red, USER)
        assert summary.dex_milestone_completed
        assert dex_milestone_of(red).id in completed_content_ids(red.id)

    def test_configurable_threshold(self, red):
        engine = AutoPopulationEngine({"dex_milestone_threshold": 5, "roster_mode": "reference"})
        assert engine.apply(gen1_result(dex=5), red, USER).dex_milestone_completed


class TestCreatures:
    """Caught pokemon records derived from dex completion"""

    def test_twenty_percent_gives_thirty_records(self, red):
        from repositories.user_pokemon_repository import UserPokemonRepository

        summary = AutoPopulationEngine().apply(gen1_result(dex=20), red, USER)

        entries = UserPokemonRepository.get_by_user_and_game(USER, red.id)
        assert summary.creatures_recorded == 30
        assert len(entries) == 30
        assert {e.pokemon_id for e in entries} == set(range(1, 31))
        assert all(e.origin_game_id == red.id and e.origin_game_name == "Pokemon Red" for e in entries)
        assert UserPokemonRepository.get_entry(USER, red.id, 1).pokemon_name == "Bulbasaur"
        assert UserPokemonRepository.get_entry(USER, red.id, 25).pokemon_name == "Pikachu"

    def test_rerun_adds_no_rows(self, red):
        from repositories.user_pokemon_repository import UserPokemonRepository
        from repositories.content_tracker_repository import ContentTrackerRepository
        engine = AutoPopulationEngine()

        engine.apply(gen1_result(badges=4, dex=20), red, USER)
        engine.apply(gen1_result(badges=4, dex=20), red, USER)

        assert UserPokemonRepository.count_by_user_and_game(USER, red.id) == 30
        assert ContentTrackerRepository.count_by_user_and_game(USER, red.id) == 5

    def test_zero_percent_writes_nothing(self, red):
        from repositories.user_pokemon_repository import UserPokemonRepository
        summary = AutoPopulationEngine().apply(gen1_result(), red, USER)
        assert summary.creatures_recorded == 0
        assert UserPokemonRepository.count_by_user_and_game(USER, red.id) == 0

    def test_reference_roster_ignores_generation(self, catalog):
        emerald = catalog["Pokemon Emerald"]
        result = ExtractionResult(dex_completion_percent=50, format=DetectedFormat.GAME_BOY_ADVANCE)

        summary = AutoPopulationEngine().apply(result, emerald, USER)

        assert summary.creatures_recorded == 75

    def test_generation_roster(self, catalog):
        from repositories.user_pokemon_repository import UserPokemonRepository
        emerald = catalog["Pokemon Emerald"]
        result = ExtractionResult(dex_completion_percent=50, format=DetectedFormat.GAME_BOY_ADVANCE)
        engine = AutoPopulationEngine({"dex_milestone_threshold": 10, "roster_mode": "generation"})

        summary = engine.apply(result, emerald, USER)

        assert summary.creatures_recorded == 193
        assert UserPokemonRepository.get_entry(USER, emerald.id, 193).pokemon_name == "Pokemon #193"


class TestFailureIsolation:
    """A failing row never aborts the run"""

    def test_failing_creature_row_is_skipped(self, red):
        from repositories.user_pokemon_repository import UserPokemonRepository
        original_upsert = UserPokemonRepository.upsert

        def flaky_upsert(user_id, game_id, pokemon_id, *args, **kwargs):
            if pokemon_id == 2:
                raise SQLAlchemyError("constraint violation")
            return original_upsert(user_id, game_id, pokemon_id, *args, **kwargs)

        with patch.object(UserPokemonRepository, "upsert", side_effect=flaky_upsert):
            summary = AutoPopulationEngine().apply(gen1_result(badges=2, dex=20), red, USER)

        assert summary.creatures_recorded == 29
        assert summary.failures == [{"kind": "pokemon", "key": 2, "error": "constraint violation"}]
        assert summary.gyms_completed == 2
        assert UserPokemonRepository.count_by_user_and_game(USER, red.id) == 29

    def test_failing_gym_row_is_skipped(self, red):
        from repositories.content_tracker_repository import ContentTrackerRepository

        with patch.object(ContentTrackerRepository, "upsert_completed", side_effect=SQLAlchemyError("locked")):
            summary = AutoPopulationEngine().apply(gen1_result(badges=3, dex=10), red, USER)

        assert summary.gyms_completed == 0
        assert not summary.dex_milestone_completed
        assert [f["kind"] for f in summary.failures] == ["gym", "gym", "gym", "dex"]
        assert summary.creatures_recorded == 15

    @pytest.mark.parametrize("badges", [0, 8])
    def test_summary_to_dict(self, red, badges):
        summary = AutoPopulationEngine().apply(gen1_result(badges=badges), red, USER)
        data = summary.to_dict(dex_progress=0)
        assert data["gyms_completed"] == badges
        assert data["failures"] == 0
