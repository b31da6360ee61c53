"""Main blueprint with health check endpoints."""
from flask import Blueprint, jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.database import get_session

main_bp = Blueprint('main', __name__)


@main_bp.route('/healthz')
def healthz():
    """
    Health check endpoint that validates the database connection.

    Returns:
        200: {"status": "ok"}
        503: database unreachable
    """
    try:
        get_session().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        current_app.logger.error(f"Health check failed: {e}")
        return jsonify({'status': 'unhealthy', 'database': 'disconnected'}), 503

    return jsonify({'status': 'ok'}), 200
