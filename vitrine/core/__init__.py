"""
Vitrine Core
============

Core utilities and shared functionality for Vitrine modules.
"""

from .config import Config, get_config
from .database import Database, init_db
from .logging_service import LoggingService, db_log, logger

__all__ = ['Config', 'get_config', 'Database', 'init_db', 'LoggingService', 'db_log', 'logger']
