"""
Categories Module
=================

Category list used by the admin editor. Projects store the category name as
plain text, so deleting a category leaves existing projects untouched.
"""

from flask import Blueprint

categories_bp = Blueprint(
    'categories',
    __name__,
    url_prefix='/api/categories'
)

from . import routes

__all__ = ['categories_bp']
