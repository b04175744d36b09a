# catalog/services/inventory_service.py
# Responsibility: Catalog write operations (CRUD, CSV import, category cleanup) and cache invalidation.

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from catalog.services.category_sanitizer import CategorySanitizer
from catalog.services.csv_importer import CSVImporter
from catalog.services.inventory_repository import InventoryRepository
from catalog.services.redis_cache import RedisCacheManager

logger = logging.getLogger(__name__)


class InventoryService:
    """
    Write-side service for the catalog.
    Any successful write drops cached search results, since rankings depend on the full category set.
    """

    def __init__(
        self,
        repository: Optional[InventoryRepository] = None,
        cache_manager: Optional[RedisCacheManager] = None,
    ):
        self.repository = repository or InventoryRepository()
        self.cache_manager = cache_manager or RedisCacheManager()

    def list_items(self) -> List[Dict[str, Any]]:
        return self.repository.list_items()

    def get_item(self, item_id: int) -> Optional[Dict[str, Any]]:
        return self.repository.get_item(item_id)

    def create_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        created = self.repository.create_item(item)
        self.cache_manager.invalidate_all()
        return created

    def update_item(self, item_id: int, item: Dict[str, Any]) -> bool:
        updated = self.repository.update_item(item_id, item)
        if updated:
            self.cache_manager.invalidate_all()
        return updated

    def delete_item(self, item_id: int) -> bool:
        deleted = self.repository.delete_item(item_id)
        if deleted:
            self.cache_manager.invalidate_all()
        return deleted

    def import_csv(self, content: bytes) -> int:
        """
        Parses and inserts a CSV upload as one batch.
        Raises CSVImportError for unusable files; storage errors propagate.
        """
        items = CSVImporter.parse(content)
        added = self.repository.insert_many(items)
        logger.info("[Import] Added %d item(s) from CSV", added)
        self.cache_manager.invalidate_all()
        return added

    def sanitize_categories(self) -> int:
        """
        Runs the category cleanup over every row as one atomic batch.

        Returns:
            int: Number of rows modified. 0 on already-clean data.
        """
        cleaned = self.repository.rewrite_categories(CategorySanitizer.plan)
        logger.info("[Sanitizer] Cleaned %d item(s)", cleaned)
        if cleaned:
            self.cache_manager.invalidate_all()
        return cleaned


@lru_cache()
def get_inventory_service() -> InventoryService:
    """Dependency injection provider for InventoryService."""
    return InventoryService()
