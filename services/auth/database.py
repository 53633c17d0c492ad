"""Auth Service — storage connectivity probe.

Credentials live in memory only; the sqlite file is opened to confirm the
storage path is usable and is reported by the health check.
"""

import logging
import sqlite3

logger = logging.getLogger(__name__)


def get_conn(database_path: str):
    return sqlite3.connect(database_path)


def check_connection(database_path: str) -> bool:
    try:
        conn = get_conn(database_path)
    except sqlite3.Error as e:
        logger.warning("Database unreachable at %s: %s", database_path, e)
        return False
    try:
        conn.execute("SELECT 1").fetchone()
        return True
    except sqlite3.Error as e:
        logger.warning("Database probe failed at %s: %s", database_path, e)
        return False
    finally:
        conn.close()
