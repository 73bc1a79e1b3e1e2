"""
Ops Module
==========

Health monitoring and the admin log feed.

Features:
- Public /health endpoint for uptime monitors (no auth)
- /api/logs recent entries from the persistent log (admin token)

Usage:
    from vitrine.modules.ops import ops_health_bp, ops_admin_bp

    app.register_blueprint(ops_health_bp)  # Registers at /health
    app.register_blueprint(ops_admin_bp)   # Registers at /api/logs
"""

from flask import Blueprint

# Public health endpoint (no auth, for uptime monitors)
ops_health_bp = Blueprint(
    'ops_health',
    __name__,
    url_prefix='/health'
)

ops_admin_bp = Blueprint(
    'ops_admin',
    __name__,
    url_prefix='/api/logs'
)

from . import routes

__all__ = ['ops_health_bp', 'ops_admin_bp']
