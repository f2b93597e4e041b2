"""
Typo suggestions based on Levenshtein edit distance.
"""

from collections.abc import Iterable


def levenshtein(a: str, b: str) -> int:
    """
    Number of single-character insertions, deletions or substitutions
    needed to turn a into b. Works on code points.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,         # deletion
                    current[j - 1] + 1,      # insertion
                    previous[j - 1] + cost,  # substitution
                )
            )
        previous = current
    return previous[-1]


def find_best_match(target: str, candidates: Iterable[str], max_distance: int) -> str | None:
    """
    Find the candidate closest to target.

    Args:
        target: The misspelled word
        candidates: Known words, in preference order
        max_distance: Largest edit distance still considered a match

    Returns:
        The closest candidate within max_distance (first one wins on ties),
        or None
    """
    best: str | None = None
    best_distance = max_distance + 1

    for candidate in candidates:
        distance = levenshtein(target, candidate)
        if distance < best_distance:
            best = candidate
            best_distance = distance

    return best
