import pytest
from fastapi.testclient import TestClient

from cartform.main import app
from cartform.core.cart import get_cart_service
from tests.helpers import RecordingCart


@pytest.fixture()
def cart():
    return RecordingCart()


@pytest.fixture(autouse=True)
def override_cart(cart):
    app.dependency_overrides[get_cart_service] = lambda: cart
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)
