"""
Local file-based registry repository implementation.

Stores the registry as one JSON document in the storage directory:
    {base_dir}/
        certs.json
"""

import asyncio
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from simpleca.infrastructure.repositories.registry_repository import (
    CertificateRegistry,
    RegistryRepository,
)
from simpleca.utils.files import atomic_write

# One writer lock per registry document, shared by every repository instance
_REGISTRY_LOCKS: dict[Path, asyncio.Lock] = {}


class LocalRegistryRepository(RegistryRepository):
    """
    JSON document registry.

    Corrupt or unexpected documents are treated as empty; they are
    overwritten by the next successful save.
    """

    def __init__(self, base_dir: str = "./data", registry_file: str = "certs.json"):
        """
        Initialize local registry repository.

        Args:
            base_dir: Managed storage directory
            registry_file: Registry document file name
        """
        self.base_dir = Path(base_dir)
        self.registry_path = self.base_dir / registry_file

        logger.debug(f"Initialized LocalRegistryRepository at {self.registry_path}")

    def lock(self) -> asyncio.Lock:
        """Process-wide writer lock for this registry document."""
        key = self.registry_path.absolute()
        if key not in _REGISTRY_LOCKS:
            _REGISTRY_LOCKS[key] = asyncio.Lock()
        return _REGISTRY_LOCKS[key]

    async def load(self) -> CertificateRegistry:
        """Load the registry, degrading to empty on any read or parse error."""
        try:
            raw = self.registry_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return CertificateRegistry()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Registry unreadable, treating as empty: {e}")
            return CertificateRegistry()

        try:
            return CertificateRegistry.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Registry document malformed, treating as empty: "
                f"{e.error_count()} errors"
            )
            return CertificateRegistry()

    async def save(self, registry: CertificateRegistry) -> None:
        """Replace the registry document."""
        data = registry.model_dump_json(indent=2).encode("utf-8")
        atomic_write(self.registry_path, data, mode=0o644)

        logger.debug(f"Saved registry with {len(registry.certificates)} entries")
