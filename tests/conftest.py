import random

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_random_source, get_resource_fetcher
from app.main import app
from app.services.supabase_client import DataSourceError

RESOURCE_ROWS = [
    {"title": "Peer support circle", "category_id": 1, "keywords": ["peer"], "priority": 9, "category_name": "Mental Health"},
    {"title": "Emergency beds", "category_id": 2, "keywords": ["shelter"], "priority": 10, "category_name": "Housing"},
    {"title": "Crisis line", "category_id": 3, "keywords": ["crisis"], "priority": 8, "category_name": "Crisis Support"},
    {"title": "Tenancy advice", "category_id": 2, "keywords": ["tenancy"], "priority": 7, "category_name": "Housing"},
    {"title": "Therapist directory", "category_id": 1, "keywords": ["therapy"], "priority": 6, "category_name": "Mental Health"},
    {"title": "Know your rights", "category_id": 4, "keywords": ["legal"], "priority": 5, "category_name": "Legal Aid"},
    {"title": "Clinic map", "category_id": 5, "keywords": ["clinic"], "priority": 4, "category_name": "Healthcare"},
    {"title": "Zine library", "category_id": None, "keywords": [], "priority": 3, "category_name": None},
    {"title": "Study group", "category_id": 6, "keywords": ["learning"], "priority": 1, "category_name": "Education"},
]


def make_fetcher(rows):
    async def fetch():
        return rows
    return fetch


async def failing_fetch():
    raise DataSourceError("connection refused")


@pytest.fixture
def resource_rows():
    return [dict(row) for row in RESOURCE_ROWS]


@pytest.fixture
def client():
    app.dependency_overrides[get_random_source] = lambda: random.Random(7)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def live_client(client, resource_rows):
    app.dependency_overrides[get_resource_fetcher] = lambda: make_fetcher(resource_rows)
    return client


@pytest.fixture
def offline_client(client):
    app.dependency_overrides[get_resource_fetcher] = lambda: failing_fetch
    return client
