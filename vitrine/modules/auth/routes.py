"""
Auth Routes
===========

POST /api/login - exchange the admin password for a token
GET  /api/session - check whether a stored token is still valid
"""

import logging
from flask import request, jsonify

from vitrine.core import LoggingService
from . import auth_bp
from .utils import admin_required, check_password

logger = logging.getLogger(__name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login with the shared admin password"""
    data = request.get_json(silent=True) or {}
    password = data.get('password')

    if check_password(password):
        logger.info("Admin login succeeded")
        return jsonify({'success': True, 'token': password})

    LoggingService.log_security_event('Failed admin login')
    return jsonify({'error': 'Invalid password'}), 401


@auth_bp.route('/session', methods=['GET'])
@admin_required
def check_session():
    """Lets the admin panel validate a remembered token before showing the editor"""
    return jsonify({'success': True})
