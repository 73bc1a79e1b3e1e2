import os
import sqlite3
from contextlib import contextmanager

from .config import get_config


class Database:

    @staticmethod
    def path():
        return get_config('VITRINE_DB', 'vitrine.db')

    @staticmethod
    def connect(path=None):
        """Open a connection with foreign keys enforced and dict-like rows."""
        conn = sqlite3.connect(path or Database.path())
        conn.row_factory = sqlite3.Row
        conn.execute('PRAGMA foreign_keys = ON')
        return conn

    @staticmethod
    @contextmanager
    def transaction(path=None):
        """
        Yield a connection whose work is committed as one unit.
        Any exception rolls the whole block back before propagating.
        """
        conn = Database.connect(path)
        try:
            with conn:
                yield conn
        finally:
            conn.close()


def init_db(path=None):
    """Create all Vitrine tables (idempotent)."""
    db_path = path or Database.path()
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    with Database.transaction(db_path) as conn:
        cursor = conn.cursor()

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS projects (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                category TEXT,
                description TEXT DEFAULT '',
                is_multi BOOLEAN DEFAULT 0,
                default_bg_color TEXT DEFAULT 'default',
                sort_order INTEGER DEFAULT 0,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS variations (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                project_id INTEGER NOT NULL,
                image TEXT NOT NULL,
                color_code TEXT DEFAULT '',
                image_scale REAL DEFAULT 1,
                position INTEGER DEFAULT 0,
                FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_projects_sort_order ON projects(sort_order)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_variations_project ON variations(project_id)')

    return db_path
