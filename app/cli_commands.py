"""
Flask CLI commands for operating the quotations service.

Commands:
- flask init-db: Create all tables
- flask create-user: Create a staff account with a role
- flask issue-token: Print a bearer token for an existing user
- flask audit-log: Show recent audit entries
"""

import click
from flask import current_app
from app import database
from app.exceptions import SfvError
from app.models import AppUser, UserRole
from app.services.audit_service import get_audit_logs
from app.services.auth_service import create_user, issue_token
from app.utils.formatters import iso_utc


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    def init_db_command():
        """Create database tables for all models."""
        database.create_all()
        click.echo(click.style('Database tables created.', fg='green'))

    @app.cli.command('create-user')
    @click.option('--email', prompt=True, help='User email address')
    @click.option('--role', prompt=True,
                  type=click.Choice([r.value for r in UserRole], case_sensitive=False),
                  help='User role')
    @click.option('--full-name', default=None, help='Display name')
    def create_user_command(email, role, full_name):
        """Create a user account."""
        try:
            user = create_user(database.get_session(), email, role, full_name)
        except SfvError as e:
            click.echo(click.style(f'Error: {e.message}', fg='red'))
            raise SystemExit(1)

        click.echo(click.style('User created.', fg='green', bold=True))
        click.echo(f'   Email: {user.email}')
        click.echo(f'   Role: {user.role}')
        click.echo(f'   ID: {user.id}')

    @app.cli.command('issue-token')
    @click.option('--email', prompt=True, help='Email of an existing active user')
    @click.option('--hours', default=None, type=int, help='Token lifetime in hours')
    def issue_token_command(email, hours):
        """Print a bearer token for an existing user."""
        session = database.get_session()
        user = session.query(AppUser).filter_by(email=email.strip().lower(), active=True).first()
        if not user:
            click.echo(click.style(f'Error: no active user with email {email}', fg='red'))
            raise SystemExit(1)

        token = issue_token(
            user,
            current_app.config['JWT_SECRET'],
            expires_hours=hours or current_app.config.get('JWT_EXPIRES_HOURS', 12),
            algorithm=current_app.config.get('JWT_ALGORITHM', 'HS256')
        )
        click.echo(token)

    @app.cli.command('audit-log')
    @click.option('--limit', default=20, show_default=True, help='Number of entries')
    @click.option('--resource-type', default=None, help='quotation, material or quotation_settings')
    @click.option('--resource-id', default=None, type=int)
    def audit_log_command(limit, resource_type, resource_id):
        """Print recent audit entries, newest first."""
        entries = get_audit_logs(
            database.get_session(),
            limit=limit,
            resource_type_filter=resource_type,
            resource_id_filter=resource_id
        )
        for entry in entries:
            click.echo(
                f"{iso_utc(entry.created_at)}  {entry.action.value:<20} "
                f"{entry.resource_type}:{entry.resource_id}  user={entry.user_id}  {entry.details or ''}"
            )
