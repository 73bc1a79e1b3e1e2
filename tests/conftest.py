"""
Shared fixtures for the Vitrine test suite.

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import io
import os
import shutil
import tempfile

import pytest
from flask import Flask
from PIL import Image

from vitrine import Vitrine

ADMIN_PASSWORD = "letmein"


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="vitrine-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


def make_app(tmp_db_dir, features=None, **overrides):
    app = Flask(__name__, static_folder=os.path.join(tmp_db_dir, "static"))
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
    app.config["DB_DIR"] = tmp_db_dir
    app.config["VITRINE_DB"] = os.path.join(tmp_db_dir, "vitrine.db")
    app.config["STORAGE_TYPE"] = "local"
    app.config.update(overrides)
    Vitrine(app, {"features": features or {}})
    return app


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with every Vitrine module registered on a throwaway database."""
    return make_app(tmp_db_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": ADMIN_PASSWORD}


def png_bytes(image):
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def split_image(width=10, height=10):
    """Left half red, right half blue."""
    image = Image.new("RGBA", (width, height), (0, 0, 255, 255))
    for x in range(width // 2):
        for y in range(height):
            image.putpixel((x, y), (255, 0, 0, 255))
    return image
