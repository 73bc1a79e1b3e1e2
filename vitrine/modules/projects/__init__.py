"""
Projects Module
===============

Portfolio project management.

Provides:
- Public project listing with nested variations
- Project creation, update (full variation replace) and deletion
- Drag-to-reorder support via a full id ordering
"""

from flask import Blueprint

projects_bp = Blueprint(
    'projects',
    __name__,
    url_prefix='/api/projects'
)

from . import routes

__all__ = ['projects_bp']
