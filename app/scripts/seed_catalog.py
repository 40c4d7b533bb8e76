import os
import sys

# Add the app directory to the path so we can import modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging

from constants import CONTENT_TYPE_ELITE_FOUR, CONTENT_TYPE_GYM, CONTENT_TYPE_POKEMON_CATCH

logger = logging.getLogger("main")

KANTO_GYMS = [
    ("Pewter City Gym", "Brock, Boulder Badge"),
    ("Cerulean City Gym", "Misty, Cascade Badge"),
    ("Vermilion City Gym", "Lt. Surge, Thunder Badge"),
    ("Celadon City Gym", "Erika, Rainbow Badge"),
    ("Fuchsia City Gym", "Koga, Soul Badge"),
    ("Saffron City Gym", "Sabrina, Marsh Badge"),
    ("Cinnabar Island Gym", "Blaine, Volcano Badge"),
    ("Viridian City Gym", "Giovanni, Earth Badge"),
]

JOHTO_GYMS = [
    ("Violet City Gym", "Falkner, Zephyr Badge"),
    ("Azalea Town Gym", "Bugsy, Hive Badge"),
    ("Goldenrod City Gym", "Whitney, Plain Badge"),
    ("Ecruteak City Gym", "Morty, Fog Badge"),
    ("Cianwood City Gym", "Chuck, Storm Badge"),
    ("Olivine City Gym", "Jasmine, Mineral Badge"),
    ("Mahogany Town Gym", "Pryce, Glacier Badge"),
    ("Blackthorn City Gym", "Clair, Rising Badge"),
]

HOENN_GYMS = [
    ("Rustboro City Gym", "Roxanne, Stone Badge"),
    ("Dewford Town Gym", "Brawly, Knuckle Badge"),
    ("Mauville City Gym", "Wattson, Dynamo Badge"),
    ("Lavaridge Town Gym", "Flannery, Heat Badge"),
    ("Petalburg City Gym", "Norman, Balance Badge"),
    ("Fortree City Gym", "Winona, Feather Badge"),
    ("Mossdeep City Gym", "Tate & Liza, Mind Badge"),
    ("Sootopolis City Gym", "Wallace or Juan, Rain Badge"),
]

SINNOH_GYMS = [
    ("Oreburgh City Gym", "Roark, Coal Badge"),
    ("Eterna City Gym", "Gardenia, Forest Badge"),
    ("Veilstone City Gym", "Maylene, Cobble Badge"),
    ("Pastoria City Gym", "Crasher Wake, Fen Badge"),
    ("Hearthome City Gym", "Fantina, Relic Badge"),
    ("Canalave City Gym", "Byron, Mine Badge"),
    ("Snowpoint City Gym", "Candice, Icicle Badge"),
    ("Sunyshore City Gym", "Volkner, Beacon Badge"),
]

UNOVA_GYMS = [
    ("Striaton City Gym", "Cilan, Chili or Cress, Trio Badge"),
    ("Nacrene City Gym", "Lenora, Basic Badge"),
    ("Castelia City Gym", "Burgh, Insect Badge"),
    ("Nimbasa City Gym", "Elesa, Bolt Badge"),
    ("Driftveil City Gym", "Clay, Quake Badge"),
    ("Mistralton City Gym", "Skyla, Jet Badge"),
    ("Icirrus City Gym", "Brycen, Freeze Badge"),
    ("Opelucid City Gym", "Drayden or Iris, Legend Badge"),
]

# name, platform, generation, release_year, hours, gyms
GAMES = [
    ("Pokemon Red", "Game Boy", 1, 1996, 30, KANTO_GYMS),
    ("Pokemon Blue", "Game Boy", 1, 1996, 30, KANTO_GYMS),
    ("Pokemon Yellow", "Game Boy", 1, 1998, 32, KANTO_GYMS),
    ("Pokemon Gold", "Game Boy Color", 2, 1999, 40, JOHTO_GYMS + KANTO_GYMS),
    ("Pokemon Silver", "Game Boy Color", 2, 1999, 40, JOHTO_GYMS + KANTO_GYMS),
    ("Pokemon Crystal", "Game Boy Color", 2, 2000, 42, JOHTO_GYMS + KANTO_GYMS),
    ("Pokemon Ruby", "Game Boy Advance", 3, 2002, 35, HOENN_GYMS),
    ("Pokemon Sapphire", "Game Boy Advance", 3, 2002, 35, HOENN_GYMS),
    ("Pokemon FireRed", "Game Boy Advance", 3, 2004, 33, KANTO_GYMS),
    ("Pokemon LeafGreen", "Game Boy Advance", 3, 2004, 33, KANTO_GYMS),
    ("Pokemon Emerald", "Game Boy Advance", 3, 2004, 38, HOENN_GYMS),
    ("Pokemon Diamond", "Nintendo DS", 4, 2006, 40, SINNOH_GYMS),
    ("Pokemon Pearl", "Nintendo DS", 4, 2006, 40, SINNOH_GYMS),
    ("Pokemon Platinum", "Nintendo DS", 4, 2008, 45, SINNOH_GYMS),
    ("Pokemon Black", "Nintendo DS", 5, 2010, 40, UNOVA_GYMS),
    ("Pokemon White", "Nintendo DS", 5, 2010, 40, UNOVA_GYMS),
]


def seed_catalog():
    """
    Insert the default games with their checklist (gyms, regional dex, Elite Four).
    Games already present (same name) are left untouched. Needs an app context.
    """
    from repositories.games_repository import GamesRepository
    from repositories.game_content_repository import GameContentRepository

    created = 0
    for name, platform, generation, release_year, hours, gyms in GAMES:
        if GamesRepository.get_by_name(name):
            continue

        game = GamesRepository.create(
            name=name,
            platform=platform,
            generation=generation,
            region="International",
            release_year=release_year,
            completion_time_hours=hours,
        )
        order_num = 1
        for gym_name, description in gyms:
            GameContentRepository.create(
                game_id=game.id,
                content_type=CONTENT_TYPE_GYM,
                name=gym_name,
                description=description,
                order_num=order_num,
            )
            order_num += 1

        GameContentRepository.create(
            game_id=game.id,
            content_type=CONTENT_TYPE_POKEMON_CATCH,
            name="Regional Pokedex",
            description="Register Pokemon in the regional Pokedex",
            order_num=order_num,
        )
        GameContentRepository.create(
            game_id=game.id,
            content_type=CONTENT_TYPE_ELITE_FOUR,
            name="Elite Four",
            description="Defeat the Elite Four and the Champion",
            order_num=order_num + 1,
        )
        created += 1

    logger.info(f"Catalog seeded: {created} new games")
    return created


if __name__ == "__main__":
    from app import create_app

    app = create_app()
    with app.app_context():
        print(f"Seeded {seed_catalog()} games")
