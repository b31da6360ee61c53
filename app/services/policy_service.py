"""
Authorization policy for quotations.

Every quotation operation asks ``authorize`` whether the acting user may
proceed; no call site compares role strings on its own.
"""
import enum

from app.exceptions import ForbiddenError, UnauthorizedError
from app.models import UserRole


class QuotationAction(enum.Enum):
    VIEW = 'view'
    CREATE = 'create'
    EDIT = 'edit'
    APPROVE = 'approve'
    DELETE = 'delete'


def is_admin(actor):
    return actor is not None and UserRole.parse(actor.role) is UserRole.ADMIN


def is_author(actor, quotation):
    return actor is not None and quotation is not None and actor.email == quotation.created_by


def check(actor, action, quotation=None):
    """
    Evaluate the policy without raising.

    Returns:
        (allowed, reason) where reason names the rule that was violated.
    """
    if actor is None or UserRole.parse(actor.role) is None:
        return False, 'Access denied: unknown role'

    if action in (QuotationAction.VIEW, QuotationAction.CREATE):
        return True, None

    admin = is_admin(actor)

    if action is QuotationAction.APPROVE:
        if admin or is_author(actor, quotation):
            return True, None
        return False, 'You are not allowed to approve this quotation'

    # EDIT and DELETE
    if not admin and not is_author(actor, quotation):
        return False, 'You can only edit your own quotations (admin can edit all)'
    if quotation is not None and quotation.is_approved and not admin:
        return False, 'Approved quotation can only be edited by admin'
    return True, None


def authorize(actor, action, quotation=None):
    """
    Raise unless ``actor`` may perform ``action`` on ``quotation``.

    Raises:
        UnauthorizedError: no acting user.
        ForbiddenError: the message names the rule that failed.
    """
    if actor is None:
        raise UnauthorizedError()
    allowed, reason = check(actor, action, quotation)
    if not allowed:
        raise ForbiddenError(reason)
