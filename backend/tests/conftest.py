import json
import sys
from pathlib import Path
from urllib.parse import parse_qs

import httpx
import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from app.repos.local_repo import LocalSavedPlacesRepository


def overpass_body(request: httpx.Request) -> str:
    """The Overpass query text from a form-encoded POST."""
    return parse_qs(request.content.decode())["data"][0]


def json_transport(payload, status_code: int = 200, calls: list = None) -> httpx.MockTransport:
    """MockTransport answering every request with `payload`, recording requests in `calls`."""
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return httpx.Response(status_code, content=json.dumps(payload).encode(), headers={"content-type": "application/json"})
    return httpx.MockTransport(handler)


@pytest.fixture
def local_repo(tmp_path) -> LocalSavedPlacesRepository:
    return LocalSavedPlacesRepository(base_dir=tmp_path)


@pytest.fixture
def place_fields() -> dict:
    return {
        "osmId": "123456",
        "name": "Zilker Park",
        "lat": 30.2669,
        "lon": -97.7729,
        "type": "park",
        "address": "Barton Springs Rd",
        "notes": "",
    }
