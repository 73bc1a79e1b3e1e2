"""
Ops Routes
==========

Public health endpoint and admin log feed.
"""

import shutil
import time

from flask import jsonify, request

from vitrine.core import Database, LoggingService
from vitrine.modules.auth import admin_required
from . import ops_health_bp, ops_admin_bp

START_TIME = time.time()


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _get_disk_usage():
    """Get disk usage for root partition."""
    try:
        usage = shutil.disk_usage('/')
        return {
            'total_gb': round(usage.total / (1024 ** 3), 1),
            'free_gb': round(usage.free / (1024 ** 3), 1),
            'percent': round((usage.used / usage.total) * 100, 1),
        }
    except OSError as e:
        return {'total_gb': 0, 'free_gb': 0, 'percent': 0, 'error': str(e)}


def _get_uptime():
    """Process uptime"""
    uptime_seconds = time.time() - START_TIME
    days = int(uptime_seconds // 86400)
    hours = int((uptime_seconds % 86400) // 3600)
    minutes = int((uptime_seconds % 3600) // 60)
    return {
        'seconds': round(uptime_seconds),
        'formatted': f'{days}d {hours}h {minutes}m',
    }


def _check_database():
    """Run a trivial query against the store"""
    try:
        with Database.transaction() as conn:
            (count,) = conn.execute('SELECT COUNT(*) FROM projects').fetchone()
        return {'ok': True, 'projects': count}
    except Exception as e:
        return {'ok': False, 'error': str(e)}


def _compute_status(database, disk):
    """Compute overall status and issues list."""
    issues = []
    status = 'ok'

    if not database.get('ok'):
        issues.append({'type': 'database', 'message': 'Database unreachable'})
        status = 'critical'

    disk_pct = disk.get('percent', 0)
    if disk_pct >= 90:
        issues.append({'type': 'disk_critical', 'message': f'Disk usage critical: {disk_pct}%'})
        if status != 'critical':
            status = 'warning'
    elif disk_pct >= 80:
        issues.append({'type': 'disk_warning', 'message': f'Disk usage high: {disk_pct}%'})
        if status != 'critical':
            status = 'warning'

    return status, issues


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@ops_health_bp.route('', methods=['GET'])
def health():
    database = _check_database()
    disk = _get_disk_usage()
    status, issues = _compute_status(database, disk)

    payload = {
        'status': status,
        'issues': issues,
        'checks': {
            'database': database,
            'disk': disk,
            'uptime': _get_uptime(),
        },
    }
    return jsonify(payload), (503 if status == 'critical' else 200)


@ops_admin_bp.route('', methods=['GET'])
@admin_required
def recent_logs():
    """Recent persistent log entries, newest first. ?level=ERROR&limit=20"""
    try:
        limit = max(1, min(int(request.args.get('limit', 50)), 500))
    except ValueError:
        return jsonify({'error': 'limit must be a number'}), 400
    return jsonify(LoggingService.recent(limit=limit, level=request.args.get('level')))
