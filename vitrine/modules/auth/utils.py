import hmac
from functools import wraps

from flask import request, jsonify

from vitrine.core.config import get_config


def check_password(candidate):
    """Constant-time compare against ADMIN_PASSWORD; an unset secret never matches."""
    secret = get_config('ADMIN_PASSWORD')
    if not secret or not candidate or not isinstance(candidate, str):
        return False
    return hmac.compare_digest(candidate.encode(), str(secret).encode())


def is_authorized():
    """True when the request's Authorization header carries the shared secret."""
    token = request.headers.get('Authorization', '')
    if token.startswith('Bearer '):
        token = token[len('Bearer '):]
    return check_password(token)


# Helper function to check if admin is authenticated
def admin_required(f):
    """Decorator to require the admin token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authorized():
            return jsonify({'error': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function
