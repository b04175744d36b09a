# catalog/services/db.py
# Responsibility: Provides centralized database connection management and transaction handling.

import logging

import psycopg2

from catalog.config.settings import settings

logger = logging.getLogger(__name__)


def get_raw_connection():
    """
    Creates and returns a raw psycopg2 connection.

    Returns:
        psycopg2.extensions.connection: A new database connection.
    """
    conn = psycopg2.connect(settings.DB.URL)
    conn.autocommit = False
    return conn

class DBTransaction:
    """
    Context manager for database transactions.
    Commits on success, rolls back on exception and always closes the connection.

    Usage:
        with DBTransaction() as conn:
            with conn.cursor() as cur:
                cur.execute(...)
    """
    def __init__(self):
        self.conn = None

    def __enter__(self):
        try:
            self.conn = get_raw_connection()
            return self.conn
        except Exception as e:
            logger.error("[DB] Connection failed: %s", e)
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            try:
                if exc_type:
                    self.conn.rollback()
                    logger.warning("[DB] Transaction rolled back due to error: %s", exc_val)
                else:
                    self.conn.commit()
            except Exception as e:
                logger.error("[DB] Transaction finalization failed: %s", e)
                # A failed commit must not look like success to the caller
                if not exc_type:
                    raise
            finally:
                self.conn.close()
        return False
