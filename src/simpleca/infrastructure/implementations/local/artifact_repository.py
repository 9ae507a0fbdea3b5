"""
Local file-based artifact repository implementation.

Stores leaf artifacts flat in the storage directory:
    {base_dir}/
        {base}.crt.pem
        {base}.key.pem
        {base}-fullchain.pem
"""

import os
from pathlib import Path

from loguru import logger

from simpleca.infrastructure.repositories.artifact_repository import (
    ArtifactRepository,
    LeafFileNames,
    UnsafePathError,
)
from simpleca.utils.files import is_strictly_inside, write_exclusive

CERT_SUFFIX = ".crt.pem"
KEY_SUFFIX = ".key.pem"
CHAIN_SUFFIX = "-fullchain.pem"


class LocalArtifactRepository(ArtifactRepository):
    """File-based leaf artifact storage."""

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local artifact repository.

        Args:
            base_dir: Managed storage directory
        """
        self.base_dir = Path(base_dir)

        logger.debug(f"Initialized LocalArtifactRepository at {self.base_dir}")

    @property
    def root(self) -> Path:
        return self.base_dir

    @staticmethod
    def _names_for(base: str) -> LeafFileNames:
        return LeafFileNames(
            cert_file=f"{base}{CERT_SUFFIX}",
            key_file=f"{base}{KEY_SUFFIX}",
            chain_file=f"{base}{CHAIN_SUFFIX}",
        )

    async def reserve_names(self, base_name: str) -> LeafFileNames:
        """Append -1, -2, ... until no candidate file exists on disk."""
        self.base_dir.mkdir(parents=True, exist_ok=True)

        candidate = base_name
        suffix = 0
        while True:
            names = self._names_for(candidate)
            # Dangling symlinks count as taken
            if not any(os.path.lexists(self.base_dir / n) for n in names.names()):
                return names
            suffix += 1
            candidate = f"{base_name}-{suffix}"

    async def write_new(self, file_name: str, data: bytes, mode: int) -> None:
        """Create a new artifact file exclusively."""
        write_exclusive(self.resolve(file_name), data, mode=mode)

    def resolve(self, file_name: str) -> Path:
        """Resolve a reference and verify containment."""
        if not file_name or not Path(file_name).name:
            raise UnsafePathError(f"Reference has no file name: {file_name!r}")

        path = self.base_dir / file_name
        if not is_strictly_inside(path, self.base_dir):
            raise UnsafePathError(
                f"Reference resolves outside the storage directory: {file_name!r}"
            )
        return path

    async def delete(self, file_name: str) -> bool:
        """Delete an artifact; False when it was already absent."""
        path = self.resolve(file_name)
        try:
            path.unlink()
        except FileNotFoundError:
            return False

        logger.info(f"Deleted artifact: {file_name}")
        return True

    async def discard(self, file_names: list[str]) -> None:
        """Remove partially written artifacts, logging but not raising."""
        for file_name in file_names:
            try:
                await self.delete(file_name)
            except (OSError, UnsafePathError) as e:
                logger.warning(f"Could not remove partial artifact {file_name}: {e}")
