"""
Uploads Module
==============

Upload gateway and image cropping.

Provides:
- POST /api/upload: validated upload (type + size) to object storage
- POST /api/crop: rotate/flip/crop an image and store the result
"""

from flask import Blueprint

uploads_bp = Blueprint(
    'uploads',
    __name__,
    url_prefix='/api'
)

from . import routes

__all__ = ['uploads_bp']
