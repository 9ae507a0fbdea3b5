"""Tests for dependency providers."""

from simpleca.config import Settings
from simpleca.di import (
    get_deletion_coordinator,
    get_infrastructure_factory,
    get_leaf_issuer,
    get_root_ca_store,
)
from simpleca.services import DeletionCoordinator, LeafIssuer, RootCAStore


def test_providers_build_services(tmp_path):
    settings = Settings(storage_dir=str(tmp_path), default_leaf_days=10)

    factory = get_infrastructure_factory(settings)
    root_ca = get_root_ca_store(factory, settings)
    issuer = get_leaf_issuer(factory, root_ca, settings)
    coordinator = get_deletion_coordinator(factory)

    assert factory.base_dir == str(tmp_path)
    assert isinstance(root_ca, RootCAStore)
    assert isinstance(issuer, LeafIssuer)
    assert issuer.root_ca is root_ca
    assert issuer.settings.default_leaf_days == 10
    assert isinstance(coordinator, DeletionCoordinator)
