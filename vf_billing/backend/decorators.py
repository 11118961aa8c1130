"""
Decorators for role-based API access
"""
from functools import wraps

from flask import g, jsonify, session

from .models import User


def current_user():
    """User stored in the session, or None"""
    data = session.get('user')
    if not data:
        return None
    return User.from_dict(data)


def role_required(*roles):
    """Reject the request unless the session user has one of the roles"""
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(*args, **kwargs):
            user = current_user()
            if user is None:
                return jsonify({'status': 'error', 'message': 'Login required'}), 401
            if roles and user.role not in roles:
                return jsonify({'status': 'error', 'message': 'Permission denied'}), 403
            g.user = user
            return view_func(*args, **kwargs)
        return wrapper
    return decorator


admin_required = role_required('admin')
login_required = role_required()
