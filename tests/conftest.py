import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('APP_ENV', 'testing')

from models import db  # noqa: E402
from models.user import User  # noqa: E402


@pytest.fixture(scope='session')
def app_instance():
    from app import create_app
    from app.config import TestingConfig
    app = create_app(TestingConfig)
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture
def make_identity(app):
    """Persist an identity and return (user, auth headers) for it."""
    from app.utils import create_access_token

    def _make(phone, role='customer', status='active', name=None):
        user = User(phone=phone, role=role, status=status, kyc_status='pending', name=name)
        db.session.add(user)
        db.session.commit()
        token = create_access_token(user.id, user.role, user.phone)
        return user, {'Authorization': f'Bearer {token}'}

    return _make


@pytest.fixture
def admin_headers(make_identity):
    _, headers = make_identity('9999900000', role='admin', name='Ops')
    return headers
