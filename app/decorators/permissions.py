"""
Permission decorators for role-based access control.
Extends require_login with role checks against the closed UserRole set.
"""

from functools import wraps
from flask import g, jsonify
from app.exceptions import ForbiddenError, UnauthorizedError
from app.models import UserRole


def require_role(*allowed_roles):
    """
    Decorator to restrict access to specific roles.

    Usage:
        @require_role(UserRole.ADMIN)
        @require_role(UserRole.ADMIN, UserRole.ENGINEER)

    Args:
        *allowed_roles: UserRole members (or their string values)

    Returns:
        Decorator function
    """
    allowed = {UserRole.parse(r) if isinstance(r, str) else r for r in allowed_roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = g.get('user')
            if user is None:
                error = UnauthorizedError(g.get('auth_error') or 'Not authorized, token missing')
                return jsonify(error.to_dict()), error.status_code

            if user.user_role not in allowed:
                error = ForbiddenError()
                return jsonify(error.to_dict()), error.status_code

            return f(*args, **kwargs)

        return decorated_function
    return decorator


def admin_only(f):
    """Shortcut for @require_role(UserRole.ADMIN)."""
    return require_role(UserRole.ADMIN)(f)
