# catalog/services/category_sanitizer.py
# Responsibility: Repairs stored category paths (empty segments, doubled tails, leaf name repeated in the path).

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from catalog.services.category_scorer import CATEGORY_SEPARATOR

logger = logging.getLogger(__name__)

JOINER = f" {CATEGORY_SEPARATOR} "


@dataclass(frozen=True)
class CategoryCorrection:
    id: int
    category: str
    name: str


def clean_category(category: str, name: str) -> str:
    """
    Returns the canonical form of a category path for an item.

    Rules, applied until none of them fires:
    - the last two segments are equal (case-insensitive) -> drop the last one
    - the last segment equals the item name (case-insensitive) -> drop it
    The first segment is never dropped, so a path cannot collapse to nothing.

    Example:
        clean_category("Phones > iPhone > iPhone", "iPhone") -> "Phones"
    """
    parts = [part.strip() for part in (category or "").split(CATEGORY_SEPARATOR)]
    parts = [part for part in parts if part]
    item_name = (name or "").strip().lower()

    while len(parts) > 1:
        last = parts[-1].lower()
        if last == parts[-2].lower() or (item_name and last == item_name):
            parts.pop()
        else:
            break

    return JOINER.join(parts)


class CategorySanitizer:
    """
    Plans the rewrites needed to bring every stored row into canonical form.
    Only rows whose category or trimmed name actually change are emitted,
    so re-running on clean data yields no corrections.
    """

    @staticmethod
    def plan(rows: Iterable[Dict[str, Any]]) -> List[CategoryCorrection]:
        corrections = []
        for row in rows:
            correction = CategorySanitizer.correct_row(row)
            if correction:
                corrections.append(correction)

        logger.info("[Sanitizer] %d row(s) need correction", len(corrections))
        return corrections

    @staticmethod
    def correct_row(row: Dict[str, Any]) -> Optional[CategoryCorrection]:
        stored_category = row.get("category")
        if not stored_category:
            return None

        stored_name = row.get("name")
        new_name = (stored_name or "").strip()
        new_category = clean_category(stored_category, new_name)

        if new_category == stored_category and new_name == stored_name:
            return None
        return CategoryCorrection(id=row["id"], category=new_category, name=new_name)
