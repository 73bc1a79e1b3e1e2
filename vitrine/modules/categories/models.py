"""
Categories Models
=================

CRUD for the categories table. Names are unique.
"""

import sqlite3
import logging

from vitrine.core.database import Database

logger = logging.getLogger(__name__)


class DuplicateCategoryError(Exception):
    """A category with this name already exists."""


def get_all_categories():
    """All categories ordered by name"""
    with Database.transaction() as conn:
        rows = conn.execute('SELECT id, name, created_at FROM categories ORDER BY name ASC').fetchall()
    return [dict(row) for row in rows]


def create_category(name):
    """Insert a category and return it as a dict"""
    name = (name or '').strip()
    if not name:
        raise ValueError('Category name is required')

    try:
        with Database.transaction() as conn:
            cursor = conn.execute('INSERT INTO categories (name) VALUES (?)', (name,))
            row = conn.execute(
                'SELECT id, name, created_at FROM categories WHERE id = ?', (cursor.lastrowid,)
            ).fetchone()
    except sqlite3.IntegrityError as e:
        raise DuplicateCategoryError(name) from e

    logger.info(f"Created category {name!r}")
    return dict(row)


def delete_category(category_id):
    """Delete a category. Projects keep their category text."""
    with Database.transaction() as conn:
        cursor = conn.execute('DELETE FROM categories WHERE id = ?', (category_id,))
        return cursor.rowcount > 0
