"""
Tests for health, metrics and the operator CLI commands.
"""

from app.models import AppUser
from app.services.auth_service import decode_token


def test_healthz(client):
    response = client.get('/healthz')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_metrics_exposes_quotation_counter(client, auth_headers, engineer):
    client.post('/api/quotations', json={'customer_name': 'Acme', 'quote_for': 'Solar'},
                headers=auth_headers(engineer))

    body = client.get('/metrics').get_data(as_text=True)
    assert 'quotation_operations_total' in body
    assert 'http_requests_total' in body


def test_unknown_route_is_json_404(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['status'] == 'error'


def test_create_user_and_issue_token(app, session):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['create-user', '--email', 'Ada@SFVtech.test', '--role', 'engineer'])
    assert result.exit_code == 0, result.output
    user = session.query(AppUser).filter_by(email='ada@sfvtech.test').one()
    assert user.role == 'engineer'

    result = runner.invoke(args=['issue-token', '--email', 'ada@sfvtech.test'])
    assert result.exit_code == 0, result.output
    claims = decode_token(result.output.strip(), app.config['JWT_SECRET'])
    assert claims['email'] == 'ada@sfvtech.test'
    assert claims['role'] == 'engineer'


def test_create_user_rejects_duplicate(app, engineer):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-user', '--email', engineer.email, '--role', 'staff'])
    assert result.exit_code == 1
    assert 'already exists' in result.output


def test_audit_log_command(app, session, engineer):
    from app.services.quotation_service import create_quotation

    created = create_quotation(session, engineer, {'customer_name': 'Acme', 'quote_for': 'Solar'})

    result = app.test_cli_runner().invoke(args=['audit-log', '--resource-type', 'quotation'])
    assert result.exit_code == 0, result.output
    assert 'QUOTATION_CREATED' in result.output
    assert f"quotation:{created['id']}" in result.output
