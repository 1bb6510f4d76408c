import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from instruments_api import create_app
from instruments_api.core.config import AppSettings
from instruments_api.crud.instruments import InstrumentStore
from instruments_api.db.session import build_engine, build_session_factory


@pytest.fixture()
def store():
    engine = build_engine("sqlite://")
    try:
        yield InstrumentStore(build_session_factory(engine))
    finally:
        engine.dispose()


@pytest.fixture()
def api(store):
    app = create_app(AppSettings(DB_URL="sqlite://"), store=store)
    with TestClient(app) as client:
        yield client
