"""
Bearer token service.

Issues and verifies the HS256 tokens that identify the acting user on each
API request. Account management itself lives outside this service.
"""
from datetime import datetime, timedelta, timezone
import logging

import jwt
from sqlalchemy.exc import IntegrityError

from app.exceptions import UnauthorizedError, ValidationError
from app.models import AppUser, UserRole

logger = logging.getLogger(__name__)


def issue_token(user, secret, expires_hours=12, algorithm='HS256'):
    """
    Create a signed token for ``user``.

    Claims: ``sub`` (user id as string), ``email``, ``role``, ``iat``, ``exp``.
    """
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(user.id),
        'email': user.email,
        'role': user.role,
        'iat': now,
        'exp': now + timedelta(hours=expires_hours),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token, secret, algorithm='HS256'):
    """
    Verify a token and return its claims.

    Raises:
        UnauthorizedError: if the token is expired, tampered with or malformed.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError('Invalid or expired token')
    except jwt.InvalidTokenError as e:
        logger.info(f"Token verification failed: {e}")
        raise UnauthorizedError('Invalid or expired token')


def user_from_token(session, token, secret, algorithm='HS256'):
    """Resolve the active AppUser named by a token's ``sub`` claim."""
    claims = decode_token(token, secret, algorithm)
    try:
        user_id = int(claims.get('sub'))
    except (TypeError, ValueError):
        raise UnauthorizedError('Invalid or expired token')

    user = session.query(AppUser).filter_by(id=user_id, active=True).first()
    if not user:
        raise UnauthorizedError('Invalid or expired token')
    return user


def create_user(session, email, role, full_name=None):
    """
    Create a user account with one of the known roles.

    Raises:
        ValidationError: unknown role, missing email or duplicate email.
    """
    email = (email or '').strip().lower()
    if not email:
        raise ValidationError('Email is required')

    user_role = UserRole.parse(role)
    if user_role is None:
        allowed = ', '.join(r.value for r in UserRole)
        raise ValidationError(f'Unknown role "{role}". Use one of: {allowed}')

    user = AppUser(email=email, full_name=full_name, role=user_role.value, active=True)
    try:
        session.add(user)
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ValidationError(f'A user with email {email} already exists')

    logger.info(f"User created: {email} ({user_role.value})")
    return user
