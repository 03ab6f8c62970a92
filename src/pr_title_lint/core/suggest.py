"""Closest-match suggestions by edit distance."""
from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein


def closest_match(candidate: str, references: Sequence[str]) -> str:
    """
    Return the reference with the smallest Levenshtein distance to candidate.

    Ties resolve to the reference that comes first in ``references``.

    Raises:
        ValueError: If references is empty
    """
    if not references:
        raise ValueError("No reference strings to match against")

    return min(references, key=lambda ref: Levenshtein.distance(candidate, ref))
