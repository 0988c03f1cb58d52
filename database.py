"""
Database Manager for RetroCalc
Keeps the memory register in a small SQLite key/value table
"""
import logging
import sqlite3
from datetime import datetime
from typing import Optional

import config

logger = logging.getLogger(__name__)

MEMORY_KIND_KEY = "memory.kind"
MEMORY_VALUE_KEY = "memory.value"


class Database:
    def __init__(self, db_path=config.DB_PATH):
        self.db_path = db_path
        self.init_database()

    def get_connection(self):
        """Create and return a database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database tables"""
        conn = self.get_connection()
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS key_value (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        ''')

        conn.commit()
        conn.close()

    def set_value(self, key, value):
        """Insert or replace a single setting"""
        updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('''
            INSERT OR REPLACE INTO key_value (key, value, updated_at)
            VALUES (?, ?, ?)
        ''', (key, str(value), updated_at))
        conn.commit()
        conn.close()

    def get_value(self, key, default=None):
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('SELECT value FROM key_value WHERE key = ?', (key,))
        row = cursor.fetchone()
        conn.close()
        return row[0] if row else default

    def delete_value(self, key):
        conn = self.get_connection()
        cursor = conn.cursor()
        cursor.execute('DELETE FROM key_value WHERE key = ?', (key,))
        conn.commit()
        conn.close()

    def save_memory(self, record):
        """Persist the memory register: {"kind": ..., "value": float}"""
        conn = self.get_connection()
        cursor = conn.cursor()
        updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cursor.executemany('''
            INSERT OR REPLACE INTO key_value (key, value, updated_at)
            VALUES (?, ?, ?)
        ''', [
            (MEMORY_KIND_KEY, record["kind"], updated_at),
            (MEMORY_VALUE_KEY, repr(float(record["value"])), updated_at),
        ])
        conn.commit()
        conn.close()
        logger.info("Stored memory value (%s)", record["kind"])

    def load_memory(self) -> Optional[dict]:
        """Return the stored memory record, or None if nothing usable was saved"""
        kind = self.get_value(MEMORY_KIND_KEY)
        value = self.get_value(MEMORY_VALUE_KEY)
        if kind is None or value is None:
            return None
        try:
            return {"kind": kind, "value": float(value)}
        except ValueError:
            logger.warning("Stored memory value is not a number: %r", value)
            return None

    def clear_memory(self):
        """Forget the stored memory register"""
        self.delete_value(MEMORY_KIND_KEY)
        self.delete_value(MEMORY_VALUE_KEY)
