"""
Games Routes - read-only game catalog
"""

from flask import Blueprint, jsonify
from db import to_json_dict
from api_responses import handle_api_errors, not_found_response
from repositories.games_repository import GamesRepository
from repositories.game_content_repository import GameContentRepository

games_bp = Blueprint("games", __name__, url_prefix="/api")


@games_bp.route("/games", methods=["GET"])
@handle_api_errors
def list_games_api():
    """All games, oldest release first"""
    return jsonify([to_json_dict(game) for game in GamesRepository.get_all()])


@games_bp.route("/games/<int:game_id>", methods=["GET"])
@handle_api_errors
def get_game_api(game_id):
    game = GamesRepository.get_by_id(game_id)
    if not game:
        return not_found_response("Game", game_id)
    return jsonify(to_json_dict(game))


@games_bp.route("/games/<int:game_id>/content", methods=["GET"])
@handle_api_errors
def get_game_content_api(game_id):
    """Checklist items of a game, in play order"""
    return jsonify([to_json_dict(item) for item in GameContentRepository.get_by_game(game_id)])
