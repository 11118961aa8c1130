"""
Application services
"""

from .db_service import DatabaseService, DuplicateEmailError, RecordNotFoundError
from .auth_service import AuthService
from .export_service import ExportService

__all__ = [
    'DatabaseService',
    'DuplicateEmailError',
    'RecordNotFoundError',
    'AuthService',
    'ExportService',
]
