"""
API v1 endpoints.

Route prefix constants for consistent API versioning.
"""

API_PREFIX: str = "/api"

# Module-specific prefixes
ROOT_CA_PREFIX: str = f"{API_PREFIX}/root-ca"
CA_PREFIX: str = f"{API_PREFIX}/ca"
LEAF_PREFIX: str = f"{API_PREFIX}/leaf"
DOWNLOAD_PREFIX: str = f"{API_PREFIX}/download"

__all__ = [
    "API_PREFIX",
    "ROOT_CA_PREFIX",
    "CA_PREFIX",
    "LEAF_PREFIX",
    "DOWNLOAD_PREFIX",
]
