"""
Extractors package

One strategy per hardware generation. Offset tables are independent per
generation and are kept in their own modules:
- gen1.py: Game Boy (Red/Blue/Yellow)
- gen2.py: Game Boy Color (Gold/Silver/Crystal)
- gba.py: Game Boy Advance (Ruby/Sapphire/Emerald/FireRed/LeafGreen)
- ds.py: Nintendo DS (Diamond/Pearl/Platinum/Black/White)
"""

from .base import GenerationExtractor
from .gen1 import Gen1Extractor
from .gen2 import Gen2Extractor
from .gba import GBAExtractor
from .ds import DSExtractor

__all__ = [
    "GenerationExtractor",
    "Gen1Extractor",
    "Gen2Extractor",
    "GBAExtractor",
    "DSExtractor",
    "SPECIES_TOTALS",
]

# Species count per detected format, used to size creature rosters
SPECIES_TOTALS = {
    cls.detected_format: cls.species_total
    for cls in (Gen1Extractor, Gen2Extractor, GBAExtractor, DSExtractor)
}
