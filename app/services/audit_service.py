"""
Audit logging service for tracking quotation, catalog and settings changes.
"""
from app.models.audit_log import AuditLog, AuditAction
from flask import has_request_context, request
from datetime import datetime, timezone
import json
import logging

logger = logging.getLogger(__name__)


def log_action(
    session,
    actor,
    action: AuditAction,
    resource_type: str = None,
    resource_id: int = None,
    details: dict = None
):
    """
    Add an audit entry to the caller's transaction.

    Args:
        session: Database session
        actor: AppUser performing the action
        action: AuditAction enum value
        resource_type: Type of resource affected (e.g., 'quotation', 'material')
        resource_id: ID of the affected resource
        details: Dict with additional details (will be JSON encoded)
    """
    try:
        user_id = actor.id if actor is not None else None

        if not user_id:
            logger.warning(f"Cannot log action {action}: missing user_id")
            return

        # Request metadata is only present when called from a view
        ip_address = None
        user_agent = None
        if has_request_context():
            ip_address = request.remote_addr
            user_agent = request.headers.get('User-Agent', '')[:255]

        details_json = None
        if details:
            try:
                details_json = json.dumps(details, default=str)
            except (TypeError, ValueError) as e:
                logger.warning(f"Failed to serialize audit details: {e}")
                details_json = str(details)

        session.add(AuditLog(
            user_id=user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=details_json,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=datetime.now(timezone.utc)
        ))
        # Note: Caller is responsible for committing the session

        logger.info(f"Audit log created: {action.value} by user {user_id} on {resource_type} {resource_id}")

    except Exception as e:
        logger.error(f"Failed to create audit log: {e}")
        # Don't raise exception - audit failures should not break business logic


def get_audit_logs(session, limit=100, resource_type_filter=None, resource_id_filter=None, action_filter=None):
    """Recent audit entries, newest first, optionally narrowed to one resource or action."""
    query = session.query(AuditLog)
    if resource_type_filter:
        query = query.filter(AuditLog.resource_type == resource_type_filter)
    if resource_id_filter:
        query = query.filter(AuditLog.resource_id == resource_id_filter)
    if action_filter:
        query = query.filter(AuditLog.action == action_filter)
    return query.order_by(AuditLog.id.desc()).limit(limit).all()
