"""
Format classification from raw file size.

Emulators and flash carts pad save files with headers/footers, so sizes are
matched with a 5% tolerance. A size that fits no band is still assigned to
the closest canonical size: extraction is always attempted.
"""
from savefile.result import DetectedFormat

SIZE_TOLERANCE = 0.05

# Ordered smallest first, ties in the nearest-size fallback go to the smaller size
CANONICAL_SIZES = [
    (8192, DetectedFormat.GAME_BOY),
    (32768, DetectedFormat.GAME_BOY_COLOR),
    (131072, DetectedFormat.GAME_BOY_ADVANCE),
    (524288, DetectedFormat.NINTENDO_DS),
]


def is_close_to(value, target, tolerance=SIZE_TOLERANCE):
    return abs(value - target) <= target * tolerance


def classify(length: int) -> DetectedFormat:
    """Map a byte length to one of the four known save formats"""
    length = max(int(length or 0), 0)

    for size, detected_format in CANONICAL_SIZES:
        if is_close_to(length, size):
            return detected_format

    closest_size, detected_format = CANONICAL_SIZES[0]
    for size, candidate in CANONICAL_SIZES[1:]:
        if abs(size - length) < abs(closest_size - length):
            closest_size, detected_format = size, candidate
    return detected_format


def canonical_size(detected_format: DetectedFormat):
    for size, candidate in CANONICAL_SIZES:
        if candidate == detected_format:
            return size
    return None
