"""
Projects Routes
===============

GET    /api/projects            - public listing, ordered, with variations
GET    /api/projects/<id>       - single project
POST   /api/projects            - create (admin)
PUT    /api/projects/<id>       - update, replacing all variations (admin)
DELETE /api/projects/<id>       - delete with variations (admin)
PUT    /api/projects/reorder    - apply a full ordering of ids (admin)
"""

import logging
from flask import request, jsonify

from vitrine.core import db_log
from vitrine.modules.auth import admin_required
from . import projects_bp
from .models import (
    ReorderError, get_all_projects, get_project, create_project,
    update_project, delete_project, reorder_projects
)

logger = logging.getLogger(__name__)


@projects_bp.route('', methods=['GET'])
def list_projects():
    """List all projects for the gallery"""
    try:
        return jsonify(get_all_projects())
    except Exception as e:
        logger.error(f"Error fetching projects: {e}")
        db_log('error', 'projects', 'Failed to fetch projects', {'error': str(e)})
        return jsonify({'error': 'Failed to fetch projects'}), 500


@projects_bp.route('/<int:project_id>', methods=['GET'])
def get_project_route(project_id):
    try:
        project = get_project(project_id)
        if project:
            return jsonify(project)
        return jsonify({'error': 'Project not found'}), 404
    except Exception as e:
        logger.error(f"Error fetching project {project_id}: {e}")
        return jsonify({'error': 'Failed to fetch project'}), 500


@projects_bp.route('', methods=['POST'])
@admin_required
def create_project_route():
    """Create new project"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'No data provided'}), 400

    try:
        project_id = create_project(data)
        db_log('info', 'projects', f'Project created: {project_id}', {'title': data.get('title')})
        return jsonify({'id': project_id, 'success': True})
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error creating project: {e}")
        db_log('error', 'projects', 'Failed to create project', {'error': str(e)})
        return jsonify({'error': 'Failed to create project'}), 500


@projects_bp.route('/<int:project_id>', methods=['PUT'])
@admin_required
def update_project_route(project_id):
    """Update project and replace its variations"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'No data provided'}), 400

    try:
        if update_project(project_id, data):
            db_log('info', 'projects', f'Project updated: {project_id}')
            return jsonify({'success': True})
        return jsonify({'error': 'Project not found'}), 404
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error updating project {project_id}: {e}")
        db_log('error', 'projects', f'Failed to update project {project_id}', {'error': str(e)})
        return jsonify({'error': 'Failed to update project'}), 500


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
@admin_required
def delete_project_route(project_id):
    try:
        if delete_project(project_id):
            db_log('info', 'projects', f'Project deleted: {project_id}')
            return jsonify({'success': True})
        return jsonify({'error': 'Project not found'}), 404
    except Exception as e:
        logger.error(f"Error deleting project {project_id}: {e}")
        db_log('error', 'projects', f'Failed to delete project {project_id}', {'error': str(e)})
        return jsonify({'error': 'Failed to delete project'}), 500


@projects_bp.route('/reorder', methods=['PUT'])
@admin_required
def reorder_route():
    """Apply a new order. Body: {"ids": [3, 1, 2]} or a bare list."""
    data = request.get_json(silent=True)
    ids = data.get('ids') if isinstance(data, dict) else data

    try:
        reorder_projects(ids)
        return jsonify({'success': True})
    except ReorderError as e:
        db_log('warning', 'projects', 'Rejected reorder', {'error': str(e)})
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        logger.error(f"Error reordering projects: {e}")
        db_log('error', 'projects', 'Failed to reorder projects', {'error': str(e)})
        return jsonify({'error': 'Failed to reorder projects'}), 500
