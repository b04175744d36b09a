# catalog/services/string_similarity.py
# Responsibility: Fuzzy closeness between two strings (Sorensen-Dice over character bigrams).

from collections import Counter
import re

_WHITESPACE_RE = re.compile(r"\s+")


def _bigrams(text: str) -> Counter:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def string_similarity(first: str, second: str) -> float:
    """
    Returns the Dice coefficient of the character bigrams of both strings.
    Whitespace is ignored. The result is in [0, 1]; 1 means identical.
    """
    first = _WHITESPACE_RE.sub("", first or "")
    second = _WHITESPACE_RE.sub("", second or "")

    if first == second:
        return 1.0 if first else 0.0
    if len(first) < 2 or len(second) < 2:
        return 0.0

    first_bigrams = _bigrams(first)
    second_bigrams = _bigrams(second)
    overlap = sum((first_bigrams & second_bigrams).values())

    return (2.0 * overlap) / (len(first) + len(second) - 2)
