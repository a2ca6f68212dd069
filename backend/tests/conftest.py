from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from backend.app import create_app


@pytest.fixture()
def app():
    flask_app = create_app({"database_path": ":memory:", "seed_demo_data": True})
    flask_app.testing = True
    yield flask_app
    flask_app.extensions["contribution_store"].close()


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
