"""
Pytest configuration and shared fixtures.
"""
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from cmv_app.catalog import create_catalog
from cmv_app.dependencies import get_advisory_service, get_catalog, get_inventory_audit, get_now
from cmv_app.main import app
from cmv_app.services.advisory import AdvisoryService
from cmv_app.services.inventory_audit import InventoryAudit
from cmv_app.utils.timezone import LOCAL_TZ

FIXED_NOW = LOCAL_TZ.localize(datetime(2024, 6, 15, 12, 0))


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Stands in for a Gemini GenerativeModel"""

    def __init__(self, text="Looks fine.", error=None):
        self.text = text
        self.error = error
        self.prompts = []
        self.options = []

    def generate_content(self, prompt, **kwargs):
        self.prompts.append(prompt)
        self.options.append(kwargs)
        if self.error:
            raise self.error
        return FakeResponse(self.text)


class Clock:
    def __init__(self, current):
        self.current = current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)
        return self.current


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock():
    return Clock(FIXED_NOW)


@pytest.fixture
def catalog():
    """Fresh seeded catalog for each test"""
    return create_catalog(seed=True)


@pytest.fixture
def audit(catalog):
    return InventoryAudit(catalog)


@pytest.fixture
def fake_model():
    return FakeModel("Raise the price slightly and swap the olive oil.")


@pytest.fixture
def advisory(fake_model):
    return AdvisoryService(api_key=None, model=fake_model)


@pytest.fixture
def client(catalog, audit, advisory, clock):
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_inventory_audit] = lambda: audit
    app.dependency_overrides[get_advisory_service] = lambda: advisory
    app.dependency_overrides[get_now] = lambda: clock.current

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
