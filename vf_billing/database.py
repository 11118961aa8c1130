"""
Key-value storage
One SQLite table of JSON values, one slot per key
"""

import json
import sqlite3
from pathlib import Path

# Default database path
DEFAULT_DB_PATH = Path(__file__).parent.parent / 'vf_billing.db'

# Storage keys
FACULTY_KEY = 'faculty'
BILLS_KEY = 'bills'
RATE_KEY = 'ratePerHour'
ADMINS_KEY = 'admins'


def get_connection(db_path=None):
    """Open a database connection"""
    if db_path is None:
        db_path = DEFAULT_DB_PATH

    conn = sqlite3.connect(
        str(db_path),
        timeout=30.0,
        check_same_thread=False
    )
    conn.execute('PRAGMA journal_mode=WAL')
    conn.execute('PRAGMA synchronous=NORMAL')

    return conn


def init_database(db_path=None):
    """Create the storage table"""
    if db_path is not None:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    try:
        conn.execute('''
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        ''')
        conn.commit()
    finally:
        conn.close()


_UPSERT_SQL = '''
    INSERT INTO kv_store (key, value, updated_at)
    VALUES (?, ?, CURRENT_TIMESTAMP)
    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
'''


def get_value(key, default=None, db_path=None):
    """Read and decode the value stored under key"""
    conn = get_connection(db_path)
    try:
        row = conn.execute('SELECT value FROM kv_store WHERE key = ?', (key,)).fetchone()
    finally:
        conn.close()
    if row is None:
        return default
    return json.loads(row[0])


def set_value(key, value, db_path=None):
    """Overwrite the slot for key"""
    conn = get_connection(db_path)
    try:
        conn.execute(_UPSERT_SQL, (key, json.dumps(value, ensure_ascii=False)))
        conn.commit()
    finally:
        conn.close()


def update_values(defaults, update, db_path=None):
    """
    Read, modify and rewrite several slots under one write lock

    Concurrent writers wait on BEGIN IMMEDIATE, so no update is lost.
    Nothing is written if update raises.

    Args:
        defaults: {key: value used when the slot is empty}
        update: callable taking {key: current value}, returning {key: new value}

    Returns:
        dict: the values written
    """
    conn = get_connection(db_path)
    conn.isolation_level = None
    try:
        conn.execute('BEGIN IMMEDIATE')
        try:
            current = {}
            for key, default in defaults.items():
                row = conn.execute('SELECT value FROM kv_store WHERE key = ?', (key,)).fetchone()
                current[key] = default if row is None else json.loads(row[0])

            changed = update(current)
            for key, value in changed.items():
                conn.execute(_UPSERT_SQL, (key, json.dumps(value, ensure_ascii=False)))
        except Exception:
            conn.execute('ROLLBACK')
            raise
        conn.execute('COMMIT')
    finally:
        conn.close()
    return changed


def delete_value(key, db_path=None):
    """Remove a slot"""
    conn = get_connection(db_path)
    try:
        conn.execute('DELETE FROM kv_store WHERE key = ?', (key,))
        conn.commit()
    finally:
        conn.close()
