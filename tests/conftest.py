import pytest
from decimal import Decimal
import uuid

from app import create_app
from app import database
from app.models import AppUser, Material, UserRole
from app.services.auth_service import issue_token


@pytest.fixture(scope='function')
def app():
    """Create application instance backed by a fresh in-memory database."""
    app = create_app('config.TestingConfig')
    with app.app_context():
        database.create_all()
        yield app
        database.get_session().remove()
        database.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Database session shared with the request handlers."""
    session = database.get_session()
    yield session
    session.rollback()


def _make_user(session, role, prefix):
    suffix = str(uuid.uuid4())[:8]
    user = AppUser(
        email=f'{prefix}-{suffix}@sfvtech.test',
        full_name=prefix.replace('_', ' ').title(),
        role=role.value,
        active=True
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture(scope='function')
def admin(session):
    return _make_user(session, UserRole.ADMIN, 'admin')


@pytest.fixture(scope='function')
def engineer(session):
    return _make_user(session, UserRole.ENGINEER, 'engineer')


@pytest.fixture(scope='function')
def other_engineer(session):
    return _make_user(session, UserRole.ENGINEER, 'other_engineer')


@pytest.fixture(scope='function')
def apprentice(session):
    return _make_user(session, UserRole.APPRENTICE, 'apprentice')


@pytest.fixture(scope='function')
def panel(session):
    """A catalog material priced at 50,000 per unit."""
    material = Material(
        name='Solar Panel 400W',
        category='Solar',
        unit='pcs',
        unit_price=Decimal('50000.00')
    )
    session.add(material)
    session.commit()
    return material


@pytest.fixture(scope='function')
def auth_headers(app):
    """Build bearer-token headers for a user."""
    def build(user):
        token = issue_token(user, app.config['JWT_SECRET'])
        return {'Authorization': f'Bearer {token}'}
    return build
