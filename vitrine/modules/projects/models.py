"""
Projects Models
===============

Project and variation storage. Variations are owned by a project and are
replaced wholesale on every update; ordering across projects lives in
projects.sort_order.
"""

import logging
import math

from vitrine.core.database import Database

logger = logging.getLogger(__name__)

BG_COLORS = ('default', 'black', 'white')


class ReorderError(ValueError):
    """Submitted id list is not a permutation of the existing project ids."""


def _project_to_dict(row, variations=None):
    """Convert a DB row to the wire format used by the gallery and the admin panel"""
    return {
        'id': row['id'],
        'title': row['title'],
        'category': row['category'],
        'description': row['description'] or '',
        'isMulti': bool(row['is_multi']),
        'defaultBgColor': row['default_bg_color'] or 'default',
        'sort_order': row['sort_order'],
        'created_at': row['created_at'],
        'variations': variations if variations is not None else [],
    }


def _variation_to_dict(row):
    return {
        'id': row['id'],
        'projectId': row['project_id'],
        'image': row['image'],
        'colorCode': row['color_code'] or '',
        'imageScale': row['image_scale'],
    }


def normalize_project(data):
    """
    Validate and coerce a project payload.

    Returns a dict of column values plus a normalized 'variations' list.
    Raises ValueError with a user-facing message on bad input.
    """
    title = (data.get('title') or '').strip()
    if not title:
        raise ValueError('Title is required')

    bg_color = data.get('defaultBgColor') or 'default'
    if bg_color not in BG_COLORS:
        raise ValueError(f'defaultBgColor must be one of: {", ".join(BG_COLORS)}')

    variations = data.get('variations') or []
    if not isinstance(variations, list):
        raise ValueError('variations must be a list')

    return {
        'title': title,
        'category': data.get('category') or '',
        'description': data.get('description') or '',
        'is_multi': bool(data.get('isMulti')),
        'default_bg_color': bg_color,
        'variations': [normalize_variation(v) for v in variations],
    }


def normalize_variation(v):
    """Apply variation defaults: empty colorCode, imageScale of 1."""
    if not isinstance(v, dict):
        raise ValueError('Each variation must be an object')

    image = v.get('image')
    if not image or not isinstance(image, str):
        raise ValueError('Each variation needs an image')

    scale = v.get('imageScale')
    if scale is None:
        scale = 1
    try:
        scale = float(scale)
    except (TypeError, ValueError, OverflowError):
        raise ValueError('imageScale must be a number')
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError('imageScale must be a positive number')

    return {
        'image': image,
        'color_code': v.get('colorCode') or '',
        'image_scale': scale,
    }


def _insert_variations(conn, project_id, variations):
    """Insert variation rows in submitted order"""
    conn.executemany('''
        INSERT INTO variations (project_id, image, color_code, image_scale, position)
        VALUES (?, ?, ?, ?, ?)
    ''', [
        (project_id, v['image'], v['color_code'], v['image_scale'], position)
        for position, v in enumerate(variations)
    ])


def _variations_by_project(conn, project_ids=None):
    if project_ids is None:
        rows = conn.execute('SELECT * FROM variations ORDER BY position, id').fetchall()
    else:
        placeholders = ', '.join('?' for _ in project_ids)
        rows = conn.execute(
            f'SELECT * FROM variations WHERE project_id IN ({placeholders}) ORDER BY position, id',
            list(project_ids)
        ).fetchall()

    grouped = {}
    for row in rows:
        grouped.setdefault(row['project_id'], []).append(_variation_to_dict(row))
    return grouped


def get_all_projects():
    """All projects in display order, each with its variations"""
    with Database.transaction() as conn:
        projects = conn.execute('''
            SELECT * FROM projects
            ORDER BY sort_order ASC, created_at DESC, id DESC
        ''').fetchall()
        variations = _variations_by_project(conn)

    return [_project_to_dict(row, variations.get(row['id'], [])) for row in projects]


def get_project(project_id):
    """Single project with variations, or None"""
    with Database.transaction() as conn:
        row = conn.execute('SELECT * FROM projects WHERE id = ?', (project_id,)).fetchone()
        if not row:
            return None
        variations = _variations_by_project(conn, [project_id])

    return _project_to_dict(row, variations.get(project_id, []))


def create_project(data):
    """Insert a project and its variations. Returns the new id."""
    fields = normalize_project(data)

    with Database.transaction() as conn:
        # New projects go to the top of the list
        (lowest,) = conn.execute('SELECT MIN(sort_order) FROM projects').fetchone()
        sort_order = 0 if lowest is None else lowest - 1

        cursor = conn.execute('''
            INSERT INTO projects (title, category, description, is_multi, default_bg_color, sort_order)
            VALUES (?, ?, ?, ?, ?, ?)
        ''', (fields['title'], fields['category'], fields['description'],
              fields['is_multi'], fields['default_bg_color'], sort_order))
        project_id = cursor.lastrowid

        if fields['variations']:
            _insert_variations(conn, project_id, fields['variations'])

    logger.info(f"Created project {project_id} with {len(fields['variations'])} variation(s)")
    return project_id


def update_project(project_id, data):
    """
    Update a project in place and replace its full variation set.

    The row update, the variation delete and the re-insert commit together,
    so a failed insert leaves the previous variations untouched.
    Returns False if the project does not exist.
    """
    fields = normalize_project(data)

    with Database.transaction() as conn:
        cursor = conn.execute('''
            UPDATE projects
            SET title = ?, category = ?, description = ?, is_multi = ?,
                default_bg_color = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (fields['title'], fields['category'], fields['description'],
              fields['is_multi'], fields['default_bg_color'], project_id))
        if cursor.rowcount == 0:
            return False

        conn.execute('DELETE FROM variations WHERE project_id = ?', (project_id,))
        if fields['variations']:
            _insert_variations(conn, project_id, fields['variations'])

    logger.info(f"Updated project {project_id}, now {len(fields['variations'])} variation(s)")
    return True


def delete_project(project_id):
    """Delete a project and its variations. Returns False if it did not exist."""
    with Database.transaction() as conn:
        # Explicit even though the foreign key cascades
        conn.execute('DELETE FROM variations WHERE project_id = ?', (project_id,))
        cursor = conn.execute('DELETE FROM projects WHERE id = ?', (project_id,))
        deleted = cursor.rowcount > 0

    if deleted:
        logger.info(f"Deleted project {project_id}")
    return deleted


def _coerce_ids(ids):
    if not isinstance(ids, list):
        raise ReorderError('ids must be a list')
    coerced = []
    for value in ids:
        if isinstance(value, bool):
            raise ReorderError(f'Invalid project id: {value!r}')
        try:
            coerced.append(int(value))
        except (TypeError, ValueError):
            raise ReorderError(f'Invalid project id: {value!r}')
    return coerced


def reorder_projects(ids):
    """
    Apply a total order: sort_order = index for each id.

    The list must name every existing project exactly once. Anything else
    raises ReorderError and leaves the stored order unchanged.
    """
    ids = _coerce_ids(ids)

    seen = set()
    duplicates = []
    for project_id in ids:
        if project_id in seen and project_id not in duplicates:
            duplicates.append(project_id)
        seen.add(project_id)
    if duplicates:
        raise ReorderError(f'Duplicate project ids: {duplicates}')

    with Database.transaction() as conn:
        existing = {row['id'] for row in conn.execute('SELECT id FROM projects').fetchall()}

        unknown = sorted(seen - existing)
        if unknown:
            raise ReorderError(f'Unknown project ids: {unknown}')
        missing = sorted(existing - seen)
        if missing:
            raise ReorderError(f'Missing project ids: {missing}')

        conn.executemany(
            'UPDATE projects SET sort_order = ? WHERE id = ?',
            [(index, project_id) for index, project_id in enumerate(ids)]
        )

    logger.info(f"Reordered {len(ids)} project(s)")
    return True
