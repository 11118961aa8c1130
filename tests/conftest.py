import pytest

from vf_billing.config import TestingConfig
from vf_billing.backend.api import create_app
from vf_billing.backend.services import DatabaseService


@pytest.fixture
def db_service(tmp_path):
    return DatabaseService(tmp_path / 'billing.db')


@pytest.fixture
def app(tmp_path):
    config = type('TmpConfig', (TestingConfig,), {
        'DB_PATH': tmp_path / 'api.db',
        'OUTPUT_DIR': tmp_path / 'out',
    })
    return create_app(config)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    response = client.post('/api/auth/login', json={
        'email': 'admin@billing.com',
        'password': 'admin123',
        'role': 'admin',
    })
    assert response.status_code == 200
    return client
