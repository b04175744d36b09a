# catalog/services/category_scorer.py
# Responsibility: Ranks category paths against a tokenized query (exact -> partial -> fuzzy).

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set

from catalog.config.settings import settings
from catalog.services.query_normalizer import QueryNormalizer
from catalog.services.string_similarity import string_similarity

CATEGORY_SEPARATOR = ">"


@dataclass
class PreparedCategory:
    """Comparable views of one category path."""
    segments: List[str]
    token_bag: Set[str] = field(default_factory=set)
    flat_text: str = ""

    @classmethod
    def from_path(cls, category: str) -> "PreparedCategory":
        segments = [part.strip().lower() for part in (category or "").split(CATEGORY_SEPARATOR)]
        segments = [part for part in segments if part]

        token_bag: Set[str] = set()
        for segment in segments:
            token_bag.update(QueryNormalizer.tokenize(segment))

        return cls(segments=segments, token_bag=token_bag, flat_text=" ".join(segments))


@dataclass
class CategoryMatch:
    category: str
    imageurl: Optional[str] = None
    comment: Optional[str] = None
    score: float = 0.0
    exact_matches: int = 0
    partial_matches: int = 0
    similarity: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "imageurl": self.imageurl,
            "comment": self.comment,
            "score": self.score,
            "exact_matches": self.exact_matches,
            "partial_matches": self.partial_matches,
            "similarity": self.similarity,
        }


class CategoryScorer:
    """
    Scores and sorts category rows for a search query.

    A query token found as a whole word in any segment is an exact match,
    a longer token found anywhere in the flattened path is a partial match,
    and the whole query's bigram similarity to the path is added as a bonus.
    Categories without any exact or partial match are not returned.
    """

    def __init__(
        self,
        exact_weight: float = settings.SEARCH.EXACT_WEIGHT,
        partial_weight: float = settings.SEARCH.PARTIAL_WEIGHT,
        similarity_weight: float = settings.SEARCH.SIMILARITY_WEIGHT,
        min_partial_length: int = settings.SEARCH.MIN_PARTIAL_LENGTH,
    ):
        self.exact_weight = exact_weight
        self.partial_weight = partial_weight
        self.similarity_weight = similarity_weight
        self.min_partial_length = min_partial_length

    def score(self, tokens: List[str], raw_query: str, category: str) -> CategoryMatch:
        """
        Computes the match counters and total score of a single category.

        Args:
            tokens (List[str]): Normalized query tokens.
            raw_query (str): The query as typed; used for the similarity bonus.
            category (str): Category path as stored.

        Returns:
            CategoryMatch: Unfiltered scoring result.
        """
        prepared = PreparedCategory.from_path(category)
        match = CategoryMatch(category=category)

        for token in tokens:
            if token in prepared.token_bag:
                match.score += self.exact_weight
                match.exact_matches += 1
            elif len(token) >= self.min_partial_length and token in prepared.flat_text:
                match.score += self.partial_weight
                match.partial_matches += 1

        match.similarity = string_similarity((raw_query or "").lower().strip(), prepared.flat_text)
        match.score += self.similarity_weight * match.similarity
        return match

    def rank(self, tokens: List[str], raw_query: str, rows: Iterable[Dict[str, Any]]) -> List[CategoryMatch]:
        """
        Scores every distinct category row, drops non-matching ones and sorts the rest.

        Args:
            tokens (List[str]): Normalized query tokens. Empty means "no query".
            raw_query (str): The query as typed.
            rows (Iterable[dict]): Rows with 'category' and optional 'imageurl'/'comment'.

        Returns:
            List[CategoryMatch]: Best match first.
        """
        if not tokens:
            return []

        seen: Set[str] = set()
        matches: List[CategoryMatch] = []

        for row in rows:
            category = row.get("category")
            if not category or category in seen:
                continue
            seen.add(category)

            match = self.score(tokens, raw_query, category)
            if match.score <= 0 or (match.exact_matches == 0 and match.partial_matches == 0):
                continue

            match.imageurl = row.get("imageurl")
            match.comment = row.get("comment")
            matches.append(match)

        # Stable ordering: category name settles ties left by the ranking keys
        matches.sort(key=lambda m: m.category)
        matches.sort(key=lambda m: (m.exact_matches, m.score, m.similarity), reverse=True)
        return matches
