"""
Categories Routes
=================

GET    /api/categories        - list (public)
POST   /api/categories        - create, unique name (admin)
DELETE /api/categories/<id>   - delete, no cascade (admin)
"""

import logging
from flask import request, jsonify

from vitrine.core import db_log
from vitrine.modules.auth import admin_required
from . import categories_bp
from .models import DuplicateCategoryError, get_all_categories, create_category, delete_category

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = 'This category already exists.'


@categories_bp.route('', methods=['GET'])
def list_categories():
    try:
        return jsonify(get_all_categories())
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        return jsonify({'error': 'Failed to fetch categories'}), 500


@categories_bp.route('', methods=['POST'])
@admin_required
def create_category_route():
    data = request.get_json(silent=True) or {}

    try:
        category = create_category(data.get('name'))
        return jsonify(category)
    except DuplicateCategoryError:
        return jsonify({'error': DUPLICATE_MESSAGE}), 400
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        db_log('error', 'categories', 'Failed to create category', {'error': str(e)})
        return jsonify({'error': 'Failed to create category'}), 500


@categories_bp.route('/<int:category_id>', methods=['DELETE'])
@admin_required
def delete_category_route(category_id):
    try:
        if delete_category(category_id):
            return jsonify({'success': True})
        return jsonify({'error': 'Category not found'}), 404
    except Exception as e:
        logger.error(f"Error deleting category {category_id}: {e}")
        db_log('error', 'categories', f'Failed to delete category {category_id}', {'error': str(e)})
        return jsonify({'error': 'Failed to delete category'}), 500
