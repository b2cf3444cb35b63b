# clonedetect/similarity.py
from rapidfuzz.distance import Levenshtein

from clonedetect.config import SIMILARITY_THRESHOLD
from clonedetect.models import MatchResult, ReferenceSet


def similarity(a: str, b: str) -> float:
    """Levenshtein similarity of two strings as a percentage in [0, 100]."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    # integer numerator keeps exact ratios such as 80.0 exact
    return (max_len - Levenshtein.distance(a, b)) * 100 / max_len


def _upper_bound(a, b):
    # edit distance is at least the length difference
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100.0
    return (max_len - abs(len(a) - len(b))) * 100 / max_len


def match(suspect: str, reference: ReferenceSet) -> MatchResult:
    if suspect in reference:
        return MatchResult(suspect, suspect, 100.0, exact=True)

    best, best_score = None, 0.0
    for candidate in reference:
        if _upper_bound(suspect, candidate) <= best_score:
            continue
        score = similarity(suspect, candidate)
        if score > best_score:
            best, best_score = candidate, score
    return MatchResult(suspect, best, best_score)


def is_clone(score: float, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return score > threshold
