"""
Upload gateway tests. Storage is patched unless a test exercises it directly.
"""

import io
import os
import re
from unittest.mock import patch, MagicMock

import pytest

from conftest import make_app

UPLOAD_FILE = "vitrine.modules.uploads.routes.upload_file"


def _file(content=b"\x89PNG fake", name="photo.png", mimetype="image/png"):
    return {"image": (io.BytesIO(content), name, mimetype)}


def _post(client, headers, **kwargs):
    return client.post(
        "/api/upload", data=_file(**kwargs), headers=headers, content_type="multipart/form-data"
    )


@pytest.mark.parametrize("mimetype,name", [
    ("image/jpeg", "a.jpg"),
    ("image/png", "a.png"),
    ("image/webp", "a.webp"),
    ("image/gif", "a.gif"),
    ("image/svg+xml", "a.svg"),
    ("video/mp4", "a.mp4"),
    ("video/webm", "a.webm"),
])
def test_allowed_types_are_stored(client, auth_headers, mimetype, name):
    with patch(UPLOAD_FILE, return_value="https://cdn.example.com/uploads/x") as upload:
        response = _post(client, auth_headers, name=name, mimetype=mimetype)

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "url": "https://cdn.example.com/uploads/x"}
    upload.assert_called_once()
    assert upload.call_args.kwargs["content_type"] == mimetype


def test_random_name_keeps_extension(client, auth_headers):
    with patch(UPLOAD_FILE, return_value="u") as upload:
        _post(client, auth_headers, name="Holiday Photo.JPG", mimetype="image/jpeg")

    file_bytes, filename, subfolder = upload.call_args.args
    assert file_bytes == b"\x89PNG fake"
    assert re.fullmatch(r"[0-9a-f]{32}\.jpg", filename)
    assert subfolder == "uploads"


def test_missing_extension_defaults_to_png(client, auth_headers):
    with patch(UPLOAD_FILE, return_value="u") as upload:
        _post(client, auth_headers, name="blob", mimetype="image/png")

    assert upload.call_args.args[1].endswith(".png")


def test_names_do_not_collide(client, auth_headers):
    with patch(UPLOAD_FILE, return_value="u") as upload:
        _post(client, auth_headers)
        _post(client, auth_headers)

    first, second = (call.args[1] for call in upload.call_args_list)
    assert first != second


@pytest.mark.parametrize("mimetype,name", [
    ("text/plain", "notes.txt"),
    ("application/pdf", "cv.pdf"),
    ("video/quicktime", "clip.mov"),
    ("application/octet-stream", "photo.png"),
])
def test_disallowed_type_rejected_before_storage(client, auth_headers, mimetype, name):
    with patch(UPLOAD_FILE) as upload:
        response = _post(client, auth_headers, name=name, mimetype=mimetype)

    assert response.status_code == 400
    assert "Unsupported file type" in response.get_json()["error"]
    upload.assert_not_called()


def test_oversized_file_rejected_before_storage(tmp_db_dir, auth_headers):
    app = make_app(tmp_db_dir, UPLOAD_MAX_BYTES=1024)
    client = app.test_client()

    with patch(UPLOAD_FILE, return_value="u") as upload:
        response = _post(client, auth_headers, content=b"x" * 1025)
        ok = _post(client, auth_headers, content=b"x" * 1024)

    assert response.status_code == 400
    assert "too large" in response.get_json()["error"]
    assert ok.status_code == 200
    upload.assert_called_once()


def test_missing_file_field(client, auth_headers):
    with patch(UPLOAD_FILE) as upload:
        response = client.post("/api/upload", data={}, headers=auth_headers,
                               content_type="multipart/form-data")
    assert response.status_code == 400
    upload.assert_not_called()


def test_empty_filename(client, auth_headers):
    with patch(UPLOAD_FILE) as upload:
        response = _post(client, auth_headers, name="")
    assert response.status_code == 400
    upload.assert_not_called()


def test_unauthenticated_upload_never_reaches_storage(client):
    with patch(UPLOAD_FILE) as upload:
        response = _post(client, {})
    assert response.status_code == 401
    upload.assert_not_called()


def test_storage_failure_returns_500(client, auth_headers):
    with patch(UPLOAD_FILE, side_effect=RuntimeError("bucket down")):
        response = _post(client, auth_headers)

    assert response.status_code == 500
    assert "error" in response.get_json()


# ---------------------------------------------------------------------------
# Storage backends
# ---------------------------------------------------------------------------

def test_local_storage_writes_to_static_folder(app, client, auth_headers):
    response = _post(client, auth_headers, content=b"local bytes")
    assert response.status_code == 200

    url = response.get_json()["url"]
    assert url.startswith("/static/uploads/")
    path = os.path.join(app.static_folder, "uploads", url.rsplit("/", 1)[-1])
    with open(path, "rb") as f:
        assert f.read() == b"local bytes"


def test_cloud_storage_puts_public_object(tmp_db_dir, auth_headers):
    app = make_app(
        tmp_db_dir,
        STORAGE_TYPE="cloud",
        S3_BUCKET="portfolio",
        S3_PUBLIC_URL="https://cdn.example.com/",
        UPLOADS_PREFIX="uploads",
    )
    client = app.test_client()
    s3 = MagicMock()

    with patch("boto3.client", return_value=s3) as make_client:
        response = _post(client, auth_headers, name="clip.webm", mimetype="video/webm")

    assert response.status_code == 200
    make_client.assert_called_once()
    assert make_client.call_args.args == ("s3",)

    kwargs = s3.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "portfolio"
    assert re.fullmatch(r"uploads/[0-9a-f]{32}\.webm", kwargs["Key"])
    assert kwargs["ACL"] == "public-read"
    assert kwargs["ContentType"] == "video/webm"
    assert response.get_json()["url"] == f"https://cdn.example.com/{kwargs['Key']}"


def test_public_url_variants(tmp_db_dir):
    from vitrine.core.storage import public_url

    app = make_app(tmp_db_dir, S3_BUCKET="b", S3_PUBLIC_URL=None,
                   S3_ENDPOINT_URL="https://minio.local:9000", S3_REGION="eu-west-1")
    with app.app_context():
        assert public_url("uploads/a.png") == "https://minio.local:9000/b/uploads/a.png"
        app.config["S3_ENDPOINT_URL"] = None
        assert public_url("uploads/a.png") == "https://b.s3.eu-west-1.amazonaws.com/uploads/a.png"
