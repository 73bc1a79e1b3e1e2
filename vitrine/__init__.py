"""
Vitrine - A Flask Portfolio CMS
===============================

Backend for a portfolio gallery with an admin panel:
- Projects with image/video variations and drag-to-reorder
- Categories
- Uploads to S3-compatible object storage and image cropping
- Health endpoint and persistent logging

Usage:
    from flask import Flask
    from vitrine import Vitrine

    app = Flask(__name__)
    Vitrine(app)
"""

__version__ = '0.1.0'

import os
import logging

from flask import Flask
from flask_cors import CORS

from .core.config import Config
from .core.database import init_db

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'auth': True,
    'projects': True,
    'categories': True,
    'uploads': True,
    'ops': True,
}

# Keys copied from Config into app.config unless the host app already set them
_CONFIG_KEYS = (
    'ADMIN_PASSWORD', 'UPLOAD_MAX_BYTES', 'ALLOWED_UPLOAD_TYPES',
    'STORAGE_TYPE', 'S3_BUCKET', 'S3_REGION', 'S3_ENDPOINT_URL',
    'S3_ACCESS_KEY', 'S3_SECRET_KEY', 'S3_PUBLIC_URL', 'UPLOADS_PREFIX',
    'CORS_ORIGINS',
)


class Vitrine:
    """Flask extension that wires config, database and feature blueprints onto an app."""

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)
        init_db(app.config['VITRINE_DB'])

        origins = [o.strip() for o in str(app.config.get('CORS_ORIGINS') or '').split(',') if o.strip()]
        CORS(app, resources={r'/api/*': {'origins': origins or '*'}})

        self._register_modules(app)
        app.extensions['vitrine'] = self
        logger.info(f"Vitrine initialised with modules: {', '.join(self._registered)}")

    def _apply_config(self, app):
        if Config.SECRET_KEY:
            app.config.setdefault('SECRET_KEY', Config.SECRET_KEY)
        for key in _CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))

        app.config.setdefault('DB_DIR', Config.DB_DIR)
        app.config.setdefault(
            'VITRINE_DB',
            os.getenv('VITRINE_DB') or os.path.join(app.config['DB_DIR'], 'vitrine.db')
        )

    def _setup_database_dir(self, app):
        db_dir = os.path.dirname(app.config['VITRINE_DB'])
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    @property
    def features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _register_modules(self, app):
        features = self.features

        if features.get('auth'):
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self._registered.append('auth')

        if features.get('projects'):
            from .modules.projects import projects_bp
            app.register_blueprint(projects_bp)
            self._registered.append('projects')

        if features.get('categories'):
            from .modules.categories import categories_bp
            app.register_blueprint(categories_bp)
            self._registered.append('categories')

        if features.get('uploads'):
            from .modules.uploads import uploads_bp
            app.register_blueprint(uploads_bp)
            self._registered.append('uploads')

        if features.get('ops'):
            from .modules.ops import ops_health_bp, ops_admin_bp
            app.register_blueprint(ops_health_bp)
            app.register_blueprint(ops_admin_bp)
            self._registered.append('ops')

    def get_registered_modules(self):
        return list(self._registered)


def create_app(overrides=None, config=None):
    """Build a standalone Flask app with every Vitrine module enabled."""
    app = Flask(__name__)
    if overrides:
        app.config.update(overrides)
    Vitrine(app, config)
    return app


__all__ = ['Vitrine', 'create_app']
