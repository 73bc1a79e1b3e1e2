"""
Vitrine Auth Module

Single shared-secret admin authentication:
- POST /api/login checks the password against ADMIN_PASSWORD
- The returned token is the password itself, sent back in the Authorization header
- admin_required guards every mutating route
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    url_prefix='/api'
)

from . import routes
from .utils import admin_required, is_authorized

__all__ = ['auth_bp', 'admin_required', 'is_authorized']
