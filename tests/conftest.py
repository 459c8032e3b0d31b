"""
Pytest fixtures compartilhadas
"""

import pytest
from unittest.mock import Mock

from salesforce_connector import create_app
from salesforce_connector.config import TestingConfig
from salesforce_connector.database import db
from salesforce_connector.services.credential_store import CredentialStore


class FakeClock:
    """Relógio controlável para testes de TTL"""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_response(status_code=200, json_data=None, text=None):
    """Cria um mock de requests.Response"""
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if json_data is not None:
        response.json.return_value = json_data
        response.content = b'{...}'
        response.text = text or str(json_data)
    else:
        response.json.side_effect = ValueError('No JSON object could be decoded')
        response.text = text or ''
        response.content = (text or '').encode()
    return response


@pytest.fixture
def app():
    """App Flask com SQLite em memória e schema recém-criado"""
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def mock_response():
    return make_response


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return CredentialStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def connected(store):
    """Org conectada com uma credencial válida"""
    store.replace('AT1', 'RT1', 'https://acme.my.salesforce.com')
    return store.current()
