import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Vitrine.
    Host apps can override any of these through app.config or environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Shared admin secret - the login "token" is this value echoed back
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    VITRINE_DB = os.getenv('VITRINE_DB', os.path.join(DB_DIR, 'vitrine.db'))

    # Uploads
    UPLOAD_MAX_BYTES = int(os.getenv('UPLOAD_MAX_BYTES', str(50 * 1024 * 1024)))
    ALLOWED_UPLOAD_TYPES = (
        'image/jpeg', 'image/png', 'image/webp', 'image/gif', 'image/svg+xml',
        'video/mp4', 'video/webm',
    )

    # Storage: 'local' writes into the static folder, 'cloud' goes to an S3-compatible bucket
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'local')
    S3_BUCKET = os.getenv('S3_BUCKET', 'uploads')
    S3_REGION = os.getenv('S3_REGION')
    S3_ENDPOINT_URL = os.getenv('S3_ENDPOINT_URL')
    S3_ACCESS_KEY = os.getenv('S3_ACCESS_KEY')
    S3_SECRET_KEY = os.getenv('S3_SECRET_KEY')
    # Base for public object URLs, e.g. https://cdn.example.com
    S3_PUBLIC_URL = os.getenv('S3_PUBLIC_URL')
    UPLOADS_PREFIX = os.getenv('UPLOADS_PREFIX', 'uploads')

    # Comma separated list of origins allowed to call /api/*
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000,http://localhost:5173')

    # Port for local server
    PORT = int(os.getenv('PORT', '5000'))


def get_config(key, default=None):
    """Resolve a setting: Flask app config first, then Config, then the environment."""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
