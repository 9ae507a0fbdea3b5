"""Global pytest configuration and fixtures for all tests."""

import os
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio


@pytest.fixture(scope="session", autouse=True)
def set_test_env_vars():
    """
    Set environment variables for testing.

    Points the default storage directory at a throwaway location so no
    test ever touches ./data.
    """
    original_env = {}

    test_env_vars = {
        "STORAGE_DIR": tempfile.mkdtemp(prefix="simpleca-test-"),
        "ENABLE_DOCS": "false",
        "LOG_LEVEL": "DEBUG",
        "INFRASTRUCTURE_PROVIDER": "local",
    }

    for key, value in test_env_vars.items():
        original_env[key] = os.environ.get(key)
        os.environ[key] = value

    yield

    for key, original_value in original_env.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Managed storage directory for one test."""
    path = tmp_path / "data"
    path.mkdir(mode=0o700)
    return path


@pytest.fixture
def infrastructure_factory(storage_dir: Path):
    """Infrastructure factory bound to the test storage directory."""
    from simpleca.infrastructure import InfrastructureFactory

    return InfrastructureFactory(provider="local", base_dir=str(storage_dir))


@pytest.fixture
def root_ca_store(infrastructure_factory):
    """Root CA store over the test storage directory."""
    from simpleca.services import RootCAStore

    return RootCAStore(infrastructure_factory)


@pytest_asyncio.fixture
async def root_ca(root_ca_store):
    """Root CA store with a freshly generated (small, fast) root CA."""
    await root_ca_store.generate(common_name="Test Root", days=30, key_size=1024)
    return root_ca_store


@pytest.fixture
def leaf_issuer(infrastructure_factory, root_ca_store):
    """Leaf issuer sharing the test root CA store."""
    from simpleca.services import LeafIssuer

    return LeafIssuer(infrastructure_factory, root_ca=root_ca_store)


@pytest.fixture
def deletion_coordinator(infrastructure_factory):
    """Deletion coordinator over the test storage directory."""
    from simpleca.services import DeletionCoordinator

    return DeletionCoordinator(infrastructure_factory)
