"""
Storage Utility
===============

Shared file upload with cloud (S3-compatible bucket) / local branching.
"""

import os
from flask import current_app

from .config import get_config


CONTENT_TYPES = {
    'jpg': 'image/jpeg', 'jpeg': 'image/jpeg',
    'png': 'image/png', 'gif': 'image/gif', 'webp': 'image/webp',
    'svg': 'image/svg+xml', 'mp4': 'video/mp4', 'webm': 'video/webm',
}


def is_cloud_storage():
    """Check if uploads go to the object store"""
    return get_config('STORAGE_TYPE', 'local') == 'cloud'


def guess_content_type(filename):
    """Guess content type from extension"""
    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''
    return CONTENT_TYPES.get(ext, 'application/octet-stream')


def upload_file(file_bytes, filename, subfolder='uploads', content_type=None):
    """Upload file to cloud storage or local filesystem.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Target filename (e.g. "abc123.jpg").
        subfolder: Subfolder used for local storage (e.g. "uploads").
        content_type: MIME type; guessed from the extension when omitted.

    Returns:
        Public URL (cloud) or local path like "/static/uploads/abc.jpg" (local).
    """
    content_type = content_type or guess_content_type(filename)
    if is_cloud_storage():
        return _upload_to_bucket(file_bytes, filename, content_type)
    return _save_locally(file_bytes, filename, subfolder)


def _get_client():
    """Build a boto3 S3 client from the configured credentials."""
    import boto3
    return boto3.client(
        's3',
        region_name=get_config('S3_REGION'),
        endpoint_url=get_config('S3_ENDPOINT_URL'),
        aws_access_key_id=get_config('S3_ACCESS_KEY'),
        aws_secret_access_key=get_config('S3_SECRET_KEY'),
    )


def _object_key(filename):
    prefix = get_config('UPLOADS_PREFIX', 'uploads')
    return f"{prefix}/{filename}" if prefix else filename


def public_url(object_key):
    """Public URL for an object key in the configured bucket."""
    bucket = get_config('S3_BUCKET', 'uploads')
    base = get_config('S3_PUBLIC_URL')
    if base:
        return f"{base.rstrip('/')}/{object_key}"
    endpoint = get_config('S3_ENDPOINT_URL')
    if endpoint:
        return f"{endpoint.rstrip('/')}/{bucket}/{object_key}"
    region = get_config('S3_REGION') or 'us-east-1'
    return f"https://{bucket}.s3.{region}.amazonaws.com/{object_key}"


def _upload_to_bucket(file_bytes, filename, content_type):
    """Upload to the bucket via boto3."""
    object_key = _object_key(filename)

    client = _get_client()
    client.put_object(
        Bucket=get_config('S3_BUCKET', 'uploads'),
        Key=object_key,
        Body=file_bytes,
        ACL='public-read',
        ContentType=content_type,
        CacheControl='max-age=3600',
    )

    return public_url(object_key)


def _save_locally(file_bytes, filename, subfolder):
    """Save to local static folder."""
    upload_dir = os.path.join(current_app.static_folder, subfolder)
    os.makedirs(upload_dir, exist_ok=True)
    filepath = os.path.join(upload_dir, filename)
    with open(filepath, 'wb') as f:
        f.write(file_bytes)
    return f"/static/{subfolder}/{filename}"


def read_local_file(file_url):
    """Read bytes of a file previously saved under /static/."""
    rel_path = file_url[len('/static/'):]
    full_path = os.path.normpath(os.path.join(current_app.static_folder, rel_path))
    if not full_path.startswith(os.path.normpath(current_app.static_folder) + os.sep):
        raise ValueError('Path escapes the static folder')
    with open(full_path, 'rb') as f:
        return f.read()

