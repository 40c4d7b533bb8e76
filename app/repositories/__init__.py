"""
Repositories package

Each repository encapsulates database operations for a model:
- games_repository.py
- game_content_repository.py
- user_progress_repository.py
- content_tracker_repository.py
- user_pokemon_repository.py

Usage:
    from repositories.games_repository import GamesRepository
    games = GamesRepository.get_all()
"""
