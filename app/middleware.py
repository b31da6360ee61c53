"""Middleware for bearer-token authentication."""
from functools import wraps
from flask import g, request, jsonify, current_app
from app.database import get_session
from app.exceptions import UnauthorizedError
from app.services.auth_service import user_from_token


def _bearer_token():
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def load_current_user():
    """
    Load the acting user into g (Flask's per-request global).

    Called before each request. Sets g.user to an active AppUser when the
    request carries a valid bearer token, None otherwise. g.auth_error keeps
    the reason a presented token was rejected.
    """
    g.user = None
    g.auth_error = None

    token = _bearer_token()
    if not token:
        return

    db_session = get_session()
    if not db_session:
        return

    try:
        g.user = user_from_token(
            db_session,
            token,
            current_app.config['JWT_SECRET'],
            current_app.config.get('JWT_ALGORITHM', 'HS256')
        )
    except UnauthorizedError as e:
        g.auth_error = e.message


def require_login(f):
    """
    Decorator: Require an authenticated user.

    Returns a JSON 401 when the token is missing, expired or names an
    inactive/unknown user.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.get('user') is None:
            error = UnauthorizedError(g.get('auth_error') or 'Not authorized, token missing')
            return jsonify(error.to_dict()), error.status_code
        return f(*args, **kwargs)
    return decorated_function
