"""Certificate authority services."""

from simpleca.services.deletion import DeletionCoordinator, DeletionReport
from simpleca.services.leaf_issuer import LeafIssuance, LeafIssuer
from simpleca.services.root_ca import RootCAInfo, RootCAStatus, RootCAStore

__all__ = [
    "DeletionCoordinator",
    "DeletionReport",
    "LeafIssuance",
    "LeafIssuer",
    "RootCAInfo",
    "RootCAStatus",
    "RootCAStore",
]
