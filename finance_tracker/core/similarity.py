"""
Label similarity based on Levenshtein edit distance.
"""
from rapidfuzz.distance import Levenshtein

SIMILARITY_HIGH = 95.0
SIMILARITY_MEDIUM = 90.0
SIMILARITY_LOW = 85.0
SIMILARITY_EXACT = 100.0


def label_similarity(first: str, second: str) -> float:
    """
    Similarity percentage (0-100) between two normalized labels.

    Two empty labels are identical.
    """
    longest = max(len(first), len(second))
    if longest == 0:
        return SIMILARITY_EXACT

    distance = Levenshtein.distance(first, second)
    return max(0.0, (1 - distance / longest) * 100)


def is_fuzzy_match(similarity: float) -> bool:
    """Similar enough to suggest, but not an exact match"""
    return SIMILARITY_LOW <= similarity < SIMILARITY_EXACT
