"""Tests for application lifespan."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from simpleca.config import get_settings
from simpleca.lifespan import lifespan


def test_lifespan_creates_storage_directory(tmp_path, monkeypatch):
    target = tmp_path / "fresh-store"
    monkeypatch.setenv("STORAGE_DIR", str(target))
    get_settings.cache_clear()
    try:
        app = FastAPI(lifespan=lifespan)
        with TestClient(app):
            assert target.is_dir()
    finally:
        get_settings.cache_clear()

    assert target.stat().st_mode & 0o777 == 0o700
