import os

os.environ['FLASK_ENV'] = 'testing'

import pytest
from app import create_app
from extensions import db
from models import User
from tests.factories import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        admin = User(name='Site Admin', email=ADMIN_EMAIL, role='admin', is_active=True)
        admin.set_password(ADMIN_PASSWORD)
        db.session.add(admin)
        db.session.commit()
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Client logged in through the admin login form"""
    client = app.test_client()
    response = client.post('/admin/login', data={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 302
    return client


@pytest.fixture
def api_admin(app):
    """Client logged in through the JSON API"""
    client = app.test_client()
    response = client.post('/api/auth/login', json={'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD})
    assert response.status_code == 200
    return client
