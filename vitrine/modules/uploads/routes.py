"""
Uploads Routes
==============

POST /api/upload - multipart field "image"; returns {success, url}
POST /api/crop   - crop an uploaded or referenced image and store the result
"""

import math
import os
import uuid
import logging

import requests
from flask import request, jsonify
from werkzeug.utils import secure_filename

from vitrine.core import db_log, get_config
from vitrine.core.storage import upload_file, read_local_file
from vitrine.modules.auth import admin_required
from . import uploads_bp
from .cropper import crop_image

logger = logging.getLogger(__name__)


def _max_bytes():
    return int(get_config('UPLOAD_MAX_BYTES', 50 * 1024 * 1024))


def _allowed_types():
    return tuple(get_config('ALLOWED_UPLOAD_TYPES', ()))


def read_validated_upload(file, allowed_types=None):
    """
    Check type and size of an incoming FileStorage before anything is stored.

    Returns the file bytes. Raises ValueError with a user-facing message.
    """
    if file is None or file.filename == '':
        raise ValueError('No file selected')

    allowed_types = allowed_types or _allowed_types()
    if file.mimetype not in allowed_types:
        raise ValueError('Unsupported file type. Only images and mp4/webm videos are allowed.')

    limit = _max_bytes()
    file_bytes = file.stream.read(limit + 1)
    if len(file_bytes) > limit:
        raise ValueError(f'File is too large (max {limit // (1024 * 1024)}MB)')
    return file_bytes


def make_filename(original_name, default_ext='.png'):
    """Random collision-resistant name that keeps the original extension"""
    ext = os.path.splitext(secure_filename(original_name or ''))[1].lower() or default_ext
    return f"{uuid.uuid4().hex}{ext}"


@uploads_bp.route('/upload', methods=['POST'])
@admin_required
def upload():
    """Store one file and return its public URL"""
    if 'image' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['image']
    try:
        file_bytes = read_validated_upload(file)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        filename = make_filename(file.filename)
        url = upload_file(file_bytes, filename, 'uploads', content_type=file.mimetype)
        db_log('info', 'uploads', f'Uploaded {filename}', {'size': len(file_bytes), 'type': file.mimetype})
        return jsonify({'success': True, 'url': url})
    except Exception as e:
        logger.error(f"Error uploading file: {e}")
        db_log('error', 'uploads', 'Upload failed', {'error': str(e)})
        return jsonify({'error': 'An error occurred while uploading the file.'}), 500


# ===== Crop =====

CROPPABLE_TYPES = ('image/jpeg', 'image/png', 'image/webp', 'image/gif')


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _crop_params(data):
    """Read crop geometry from JSON or form data"""
    flip = data.get('flip')
    if isinstance(flip, dict):
        flip_h, flip_v = flip.get('horizontal'), flip.get('vertical')
    else:
        flip_h, flip_v = data.get('flipHorizontal'), data.get('flipVertical')

    try:
        params = {
            'x': float(data.get('x', 0)),
            'y': float(data.get('y', 0)),
            'width': float(data.get('width', 0)),
            'height': float(data.get('height', 0)),
            'rotation': float(data.get('rotation', 0) or 0),
            'flip_horizontal': _as_bool(flip_h),
            'flip_vertical': _as_bool(flip_v),
        }
    except (TypeError, ValueError, OverflowError):
        raise ValueError('Invalid crop parameters')

    if not all(math.isfinite(params[k]) for k in ('x', 'y', 'width', 'height', 'rotation')):
        raise ValueError('Invalid crop parameters')
    return params


def _fetch_source(url):
    """Load the source image from the static folder or over HTTP"""
    if not url:
        raise ValueError('No image provided')
    if url.startswith('/static/'):
        return read_local_file(url)
    if not url.startswith(('http://', 'https://')):
        raise ValueError('Unsupported image URL')

    resp = requests.get(url, timeout=30)
    resp.raise_for_status()
    if len(resp.content) > _max_bytes():
        raise ValueError('Source image is too large')
    return resp.content


@uploads_bp.route('/crop', methods=['POST'])
@admin_required
def crop():
    """Crop an image and upload the result as PNG"""
    try:
        if 'image' in request.files:
            source = read_validated_upload(request.files['image'], CROPPABLE_TYPES)
            params = _crop_params(request.form)
        else:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'error': 'No data provided'}), 400
            params = _crop_params(data)
            source = _fetch_source(data.get('url'))

        cropped = crop_image(source, **params)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except (requests.RequestException, OSError) as e:
        logger.error(f"Error loading crop source: {e}")
        return jsonify({'error': 'Could not load source image'}), 400

    try:
        url = upload_file(cropped, make_filename('crop.png'), 'uploads', content_type='image/png')
        return jsonify({'success': True, 'url': url})
    except Exception as e:
        logger.error(f"Error storing cropped image: {e}")
        db_log('error', 'uploads', 'Crop upload failed', {'error': str(e)})
        return jsonify({'error': 'An error occurred while uploading the file.'}), 500
