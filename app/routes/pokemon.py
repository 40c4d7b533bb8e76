"""
Pokemon Routes - caught pokemon records and their origin games
"""

from flask import Blueprint, request, jsonify
from db import to_json_dict
from api_responses import success_response, handle_api_errors, validation_error_response
from exceptions import NotFoundException
from repositories.games_repository import GamesRepository
from repositories.user_pokemon_repository import UserPokemonRepository

pokemon_bp = Blueprint("pokemon", __name__, url_prefix="/api")

REQUIRED_CAUGHT_FIELDS = ["userId", "gameId", "pokemonId", "pokemonName"]


@pokemon_bp.route("/pokemon/caught", methods=["POST"])
@handle_api_errors
def add_caught_pokemon_api():
    """Record a caught pokemon, or refresh the origin of an existing record"""
    data = request.get_json(silent=True) or {}
    for field in REQUIRED_CAUGHT_FIELDS:
        if not data.get(field):
            return validation_error_response(field, "Missing required fields")

    game_id = int(data["gameId"])
    if not GamesRepository.get_by_id(game_id):
        raise NotFoundException("Game not found")

    entry = UserPokemonRepository.upsert(
        data["userId"],
        game_id,
        int(data["pokemonId"]),
        data["pokemonName"],
        origin_game_id=data.get("originGameId") or None,
        origin_game_name=data.get("originGameName") or None,
    )
    return jsonify(to_json_dict(entry))


@pokemon_bp.route("/pokemon/stats/<user_id>", methods=["GET"])
@handle_api_errors
def pokemon_stats_api(user_id):
    return jsonify(
        {
            "stats": UserPokemonRepository.stats_by_origin(user_id),
            "totals": UserPokemonRepository.totals(user_id),
        }
    )


@pokemon_bp.route("/pokemon/<user_id>/game/<int:game_id>", methods=["GET"])
@handle_api_errors
def game_pokemon_api(user_id, game_id):
    entries = UserPokemonRepository.get_by_user_and_game(user_id, game_id)
    return jsonify(
        [
            {
                "pokemon_id": e.pokemon_id,
                "pokemon_name": e.pokemon_name,
                "origin_game_name": e.origin_game_name,
                "origin_game_id": e.origin_game_id,
                "caught_at": to_json_dict(e)["caught_at"],
            }
            for e in entries
        ]
    )


@pokemon_bp.route("/pokemon/<user_id>/game/<int:game_id>", methods=["DELETE"])
@handle_api_errors
def delete_game_pokemon_api(user_id, game_id):
    deleted = UserPokemonRepository.delete_by_user_and_game(user_id, game_id)
    return success_response(data={"deleted": deleted}, message="Pokemon deleted")
