"""
Progress Routes - per-user game status and checklist tracking
"""

from flask import Blueprint, request, jsonify
from db import to_json_dict, log_activity
from api_responses import success_response, handle_api_errors, not_found_response
from constants import PROGRESS_STATUSES, STATUS_NOT_STARTED
from exceptions import NotFoundException, ValidationException
from repositories.content_tracker_repository import ContentTrackerRepository
from repositories.games_repository import GamesRepository
from repositories.user_progress_repository import UserProgressRepository
from utils import ensure_utc, now_utc

progress_bp = Blueprint("progress", __name__, url_prefix="/api")


def _validated_status(status, default=STATUS_NOT_STARTED):
    status = status or default
    if status not in PROGRESS_STATUSES:
        raise ValidationException(
            f"Invalid status '{status}'", details={"allowed": PROGRESS_STATUSES}
        )
    return status


def _require_game(game_id):
    game = GamesRepository.get_by_id(game_id)
    if not game:
        raise NotFoundException("Game not found")
    return game


@progress_bp.route("/progress/user/<user_id>", methods=["GET"])
@handle_api_errors
def get_user_progress_api(user_id):
    """Progress records of a user, newest first"""
    return jsonify([to_json_dict(p) for p in UserProgressRepository.get_by_user(user_id)])


@progress_bp.route("/progress/user/<user_id>/all", methods=["DELETE"])
@handle_api_errors
def clear_user_progress_api(user_id):
    """Delete every checklist entry and progress record of a user"""
    trackers = ContentTrackerRepository.delete_by_user(user_id)
    records = UserProgressRepository.delete_by_user(user_id)
    log_activity("progress_cleared", user_id=user_id, trackers=trackers, records=records)
    return success_response(message="All progress deleted successfully")


@progress_bp.route("/progress", methods=["POST"])
@handle_api_errors
def create_progress_api():
    data = request.get_json(silent=True) or {}
    user_id = data.get("userId")
    game_id = data.get("gameId")
    if not user_id or not game_id:
        raise ValidationException("Missing required fields", details={"required": ["userId", "gameId"]})

    _require_game(game_id)
    status = _validated_status(data.get("status"))
    if UserProgressRepository.get_by_user_and_game(user_id, game_id):
        raise ValidationException("Progress already exists for this game")

    progress = UserProgressRepository.create(user_id=user_id, game_id=game_id, status=status)
    return jsonify(to_json_dict(progress)), 201


@progress_bp.route("/progress/user/<user_id>/game/<int:game_id>", methods=["POST"])
@handle_api_errors
def upsert_progress_api(user_id, game_id):
    """Create the progress record of a game, or update its status"""
    data = request.get_json(silent=True) or {}
    _require_game(game_id)
    status = _validated_status(data.get("status"))
    completed_at = ensure_utc(data.get("completed_at"))

    progress = UserProgressRepository.get_by_user_and_game(user_id, game_id)
    if progress:
        progress = UserProgressRepository.update(progress.id, status=status, completed_at=completed_at)
    else:
        progress = UserProgressRepository.create(
            user_id=user_id,
            game_id=game_id,
            status=status,
            started_at=ensure_utc(data.get("started_at")) or now_utc(),
            completed_at=completed_at,
        )
    return jsonify(to_json_dict(progress)), 201


@progress_bp.route("/progress/<user_id>/game/<int:game_id>", methods=["GET"])
@handle_api_errors
def get_content_tracker_api(user_id, game_id):
    return jsonify([to_json_dict(t) for t in ContentTrackerRepository.get_by_user_and_game(user_id, game_id)])


@progress_bp.route("/content/<int:tracker_id>", methods=["PUT"])
@handle_api_errors
def update_content_api(tracker_id):
    """Check or uncheck a checklist entry"""
    data = request.get_json(silent=True) or {}
    if "is_completed" not in data:
        raise ValidationException("Missing required field: is_completed")

    tracker = ContentTrackerRepository.set_completed(tracker_id, data["is_completed"])
    if not tracker:
        return not_found_response("Content", tracker_id)
    return jsonify(to_json_dict(tracker))


@progress_bp.route("/progress/<user_id>/<int:game_id>/manual-stats", methods=["POST"])
@handle_api_errors
def manual_stats_api(user_id, game_id):
    """
    Stats typed in by hand when no save file is available.
    Only flags the progress record as imported, the numbers are echoed back.
    """
    data = request.get_json(silent=True) or {}
    _require_game(game_id)
    progress = UserProgressRepository.mark_save_file_imported(user_id, game_id)

    return success_response(
        data={
            "hoursPlayed": data.get("hoursPlayed"),
            "pokemonCaught": data.get("pokemonCaught"),
            "pokedexCompletion": data.get("pokedexCompletion"),
            "badges": data.get("badges"),
            "progress_record": to_json_dict(progress),
        },
        message="Stats saved",
    )
