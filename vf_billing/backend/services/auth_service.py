"""
Login and registration
Credentials are compared as stored; there is no hashing.
"""
from typing import Optional
import logging

from ..models import AdminUser, FacultyRecord, User
from .db_service import DatabaseService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    """
    Faculty/admin login against stored records

    Usage:
        auth = AuthService(db_service, default_admin)
        user = auth.login(email, password, 'faculty')
    """

    def __init__(self, db_service: DatabaseService, default_admin: AdminUser):
        """
        Args:
            db_service: record service
            default_admin: built-in administrator, always accepted
        """
        self.db = db_service
        self.default_admin = default_admin

    def login(self, email: str, password: str, role: str) -> Optional[User]:
        """
        Check credentials for the given role

        Returns:
            User: logged-in identity, None when the credentials do not match
        """
        if role == 'admin':
            for admin in [self.default_admin] + self.db.list_admins():
                if admin.email == email and admin.password == password:
                    logger.info(f"Admin login: {email}")
                    return admin.to_user()
        elif role == 'faculty':
            for faculty in self.db.list_faculty():
                if faculty.email == email and faculty.password and faculty.password == password:
                    logger.info(f"Faculty login: {email}")
                    return User(id=faculty.id, email=faculty.email, name=faculty.name, role='faculty')
        else:
            raise ValueError(f"Invalid role: {role}")

        logger.warning(f"Login failed for {email} ({role})")
        return None

    def register(self, data: dict) -> User:
        """
        Register a faculty member with a password

        Raises:
            ValueError: invalid profile or short password
            DuplicateEmailError: email already registered
        """
        password = str(data.get('password') or '')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

        record: FacultyRecord = self.db.create_faculty(data, password=password)
        return User(id=record.id, email=record.email, name=record.name, role='faculty')

    def get_faculty_details(self, user: Optional[User]) -> Optional[FacultyRecord]:
        """Profile of a logged-in faculty member"""
        if not user or user.role != 'faculty':
            return None
        for faculty in self.db.list_faculty():
            if faculty.id == user.id:
                return faculty
        return None
