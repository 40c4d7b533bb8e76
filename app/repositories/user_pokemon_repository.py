"""
Repository for UserPokemon database operations
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from db import db, upsert_insert
from models.user_pokemon import UserPokemon
from utils import now_utc


class UserPokemonRepository:
    """Repository for UserPokemon database operations"""

    @staticmethod
    def get_by_user_and_game(user_id, game_id):
        """Get caught pokemon of a user in a game, by name"""
        return (
            UserPokemon.query.filter_by(user_id=user_id, game_id=game_id)
            .order_by(UserPokemon.pokemon_name.asc())
            .all()
        )

    @staticmethod
    def get_entry(user_id, game_id, pokemon_id):
        return UserPokemon.query.filter_by(user_id=user_id, game_id=game_id, pokemon_id=pokemon_id).first()

    @staticmethod
    def upsert(user_id, game_id, pokemon_id, pokemon_name, origin_game_id=None, origin_game_name=None):
        """
        Record a caught pokemon.

        The first write fixes the identity of the row, later writes only
        refresh the origin fields.
        """
        now = now_utc()
        stmt = upsert_insert(UserPokemon).values(
            user_id=user_id,
            game_id=game_id,
            pokemon_id=pokemon_id,
            pokemon_name=pokemon_name,
            origin_game_id=origin_game_id,
            origin_game_name=origin_game_name,
            caught_at=now,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "game_id", "pokemon_id"],
            set_={
                "origin_game_id": stmt.excluded.origin_game_id,
                "origin_game_name": stmt.excluded.origin_game_name,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        try:
            db.session.execute(stmt)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e
        return UserPokemonRepository.get_entry(user_id, game_id, pokemon_id)

    @staticmethod
    def delete_by_user_and_game(user_id, game_id):
        deleted = UserPokemon.query.filter_by(user_id=user_id, game_id=game_id).delete()
        db.session.commit()
        return deleted

    @staticmethod
    def count_by_user_and_game(user_id, game_id):
        return UserPokemon.query.filter_by(user_id=user_id, game_id=game_id).count()

    @staticmethod
    def stats_by_origin(user_id):
        """Counts of caught pokemon grouped by origin game"""
        rows = (
            db.session.query(
                UserPokemon.origin_game_name,
                func.count(UserPokemon.id).label("count"),
            )
            .filter(UserPokemon.user_id == user_id)
            .group_by(UserPokemon.origin_game_name)
            .order_by(func.count(UserPokemon.id).desc())
            .all()
        )

        stats = []
        for origin_game_name, count in rows:
            names = (
                db.session.query(UserPokemon.pokemon_name)
                .filter(UserPokemon.user_id == user_id, UserPokemon.origin_game_name == origin_game_name)
                .distinct()
                .order_by(UserPokemon.pokemon_name.asc())
                .all()
            )
            stats.append({
                "origin_game_name": origin_game_name,
                "count": count,
                "pokemon_list": [n[0] for n in names],
            })
        return stats

    @staticmethod
    def totals(user_id):
        row = (
            db.session.query(
                func.count(func.distinct(UserPokemon.pokemon_id)).label("total_unique_caught"),
                func.count(UserPokemon.id).label("total_entries"),
                func.count(func.distinct(UserPokemon.game_id)).label("games_with_pokemon"),
                func.count(func.distinct(UserPokemon.origin_game_id)).label("origin_games"),
            )
            .filter(UserPokemon.user_id == user_id)
            .first()
        )
        return {
            "total_unique_caught": row.total_unique_caught or 0,
            "total_entries": row.total_entries or 0,
            "games_with_pokemon": row.games_with_pokemon or 0,
            "origin_games": row.origin_games or 0,
        }
