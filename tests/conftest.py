"""Shared fixtures: a throwaway store, ledger, repository and selfie."""

import io

import pytest
from PIL import Image

from core.ledger import EntitlementLedger
from core.persistence import JsonKeyValueStore
from core.repository import BoardRepository


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "store.json"


@pytest.fixture
def store(store_path):
    return JsonKeyValueStore(store_path)


@pytest.fixture
def ledger(store):
    return EntitlementLedger(store)


@pytest.fixture
def repository(store, ledger):
    return BoardRepository(store, ledger=ledger)


def make_png(width: int = 4, height: int = 4, color=(200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def selfie_bytes():
    return make_png()
