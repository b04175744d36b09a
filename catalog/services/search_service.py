# catalog/services/search_service.py
# Responsibility: Orchestrates category search (Normalization -> Cache -> DB -> Scoring).

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from catalog.services.category_scorer import CategoryScorer
from catalog.services.inventory_repository import InventoryRepository
from catalog.services.query_normalizer import QueryNormalizer
from catalog.services.redis_cache import RedisCacheManager

logger = logging.getLogger(__name__)


class SearchService:
    """
    Main service class for ranked category search.
    """

    def __init__(
        self,
        repository: Optional[InventoryRepository] = None,
        cache_manager: Optional[RedisCacheManager] = None,
        scorer: Optional[CategoryScorer] = None,
    ):
        self.repository = repository or InventoryRepository()
        self.cache_manager = cache_manager or RedisCacheManager()
        self.scorer = scorer or CategoryScorer()

    def search_categories(self, raw_query: Optional[str]) -> List[Dict[str, Any]]:
        """
        Executes a category search.

        A query that normalizes to no tokens is "no query" and returns an empty list
        without touching storage. Storage errors propagate to the caller.
        """
        # 1. Normalization
        tokens = QueryNormalizer.tokenize(raw_query or "")
        if not tokens:
            return []

        cache_key = (raw_query or "").lower().strip()

        # 2. Cache Lookup
        # The generation is read before the rows, so a write committed while this
        # search runs files the result under an outdated generation.
        generation = self.cache_manager.current_generation()
        if generation is not None:
            cached = self.cache_manager.get_cached_result(cache_key, generation)
            if cached is not None:
                return cached

        # 3. Database Fetch (distinct categories only)
        rows = self.repository.fetch_distinct_categories()

        # 4. Scoring & Ranking
        matches = self.scorer.rank(tokens, raw_query, rows)
        results = [match.to_dict() for match in matches]
        logger.debug("[Search] %r -> %d of %d categories", raw_query, len(results), len(rows))

        # 5. Cache Storage
        if generation is not None:
            self.cache_manager.set_cached_result(cache_key, generation, results)

        return results


@lru_cache()
def get_search_service() -> SearchService:
    """Dependency injection provider for SearchService."""
    return SearchService()
