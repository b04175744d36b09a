# catalog/services/inventory_repository.py
# Responsibility: Data access layer for the 'inventory' table.

import logging
from typing import Any, Callable, Dict, List, Optional

from psycopg2.extras import RealDictCursor

from catalog.services.category_sanitizer import CategoryCorrection
from catalog.services.db import DBTransaction

logger = logging.getLogger(__name__)

ITEM_COLUMNS = "id, name, category, imageurl, comment"

SCHEMA_SQL = """
    CREATE TABLE IF NOT EXISTS inventory (
        id SERIAL PRIMARY KEY,
        name TEXT NOT NULL,
        category TEXT NOT NULL,
        imageurl TEXT,
        comment TEXT
    )
"""


class InventoryRepository:
    """
    Storage collaborator for the catalog.
    Every public method runs in its own transaction; errors propagate to the caller
    after the transaction has been rolled back.
    """

    def ensure_schema(self) -> None:
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("[Repository] Schema ready")

    def fetch_distinct_categories(self) -> List[Dict[str, Any]]:
        """
        Returns each distinct category once, with the first non-null image and
        comment (in item id order) among the items sharing it.
        """
        sql = """
            SELECT
                category,
                (array_agg(imageurl ORDER BY id) FILTER (WHERE imageurl IS NOT NULL))[1] AS imageurl,
                (array_agg(comment ORDER BY id) FILTER (WHERE comment IS NOT NULL))[1] AS comment
            FROM inventory
            GROUP BY category
        """
        with DBTransaction() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(sql)
                return [dict(row) for row in cur.fetchall()]

    def rewrite_categories(self, planner: Callable[[List[Dict[str, Any]]], List[CategoryCorrection]]) -> int:
        """
        Reads every (id, category, name) row, asks the planner for corrections and
        writes them, all inside one transaction holding an EXCLUSIVE table lock.
        Concurrent readers see either the old or the new state, never a mix.

        Returns:
            int: Number of rows rewritten.
        """
        with DBTransaction() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute("LOCK TABLE inventory IN EXCLUSIVE MODE")
                rows = self._fetch_category_rows(cur)
                corrections = planner(rows)
                self._apply_corrections(cur, corrections)
        return len(corrections)

    def _fetch_category_rows(self, cur) -> List[Dict[str, Any]]:
        cur.execute("SELECT id, category, name FROM inventory ORDER BY id")
        return [dict(row) for row in cur.fetchall()]

    def _apply_corrections(self, cur, corrections: List[CategoryCorrection]) -> None:
        sql = "UPDATE inventory SET category = %s, name = %s WHERE id = %s"
        for correction in corrections:
            cur.execute(sql, (correction.category, correction.name, correction.id))
            if cur.rowcount != 1:
                raise RuntimeError(f"Row {correction.id} vanished during category rewrite")

    # --- CRUD ---

    def list_items(self) -> List[Dict[str, Any]]:
        with DBTransaction() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(f"SELECT {ITEM_COLUMNS} FROM inventory ORDER BY category, id")
                return [dict(row) for row in cur.fetchall()]

    def get_item(self, item_id: int) -> Optional[Dict[str, Any]]:
        with DBTransaction() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(f"SELECT {ITEM_COLUMNS} FROM inventory WHERE id = %s", (item_id,))
                row = cur.fetchone()
                return dict(row) if row else None

    def create_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        sql = f"""
            INSERT INTO inventory (name, category, imageurl, comment)
            VALUES (%s, %s, %s, %s)
            RETURNING {ITEM_COLUMNS}
        """
        with DBTransaction() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(sql, self._item_params(item))
                return dict(cur.fetchone())

    def update_item(self, item_id: int, item: Dict[str, Any]) -> bool:
        sql = """
            UPDATE inventory
            SET name = %s, category = %s, imageurl = %s, comment = %s
            WHERE id = %s
        """
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                cur.execute(sql, self._item_params(item) + (item_id,))
                return cur.rowcount == 1

    def delete_item(self, item_id: int) -> bool:
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM inventory WHERE id = %s", (item_id,))
                return cur.rowcount == 1

    def insert_many(self, items: List[Dict[str, Any]]) -> int:
        """Inserts a batch of items in a single transaction (all or nothing)."""
        if not items:
            return 0

        sql = "INSERT INTO inventory (name, category, imageurl, comment) VALUES (%s, %s, %s, %s)"
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                for item in items:
                    cur.execute(sql, self._item_params(item))
        return len(items)

    @staticmethod
    def _item_params(item: Dict[str, Any]) -> tuple:
        # Empty strings for optional fields are stored as NULL
        return (
            item["name"],
            item["category"],
            item.get("imageurl") or None,
            item.get("comment") or None,
        )
