"""
Abstract interface for leaf artifact files in the storage directory.

Handles the per-leaf key, certificate and full-chain files:
- Unique file name reservation
- Exclusive creation with explicit permissions
- Path-safe resolution and deletion of registry references
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LeafFileNames:
    """File names reserved for one leaf issuance."""

    cert_file: str
    key_file: str
    chain_file: str

    def names(self) -> list[str]:
        return [self.cert_file, self.key_file, self.chain_file]


class UnsafePathError(Exception):
    """Raised when a file reference resolves outside the storage directory."""

    pass


class ArtifactRepository(ABC):
    """Abstract interface for leaf artifact storage."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """The managed storage directory."""
        pass

    @abstractmethod
    async def reserve_names(self, base_name: str) -> LeafFileNames:
        """
        Choose artifact names that collide with no existing file.

        Tries ``base_name``, then ``base_name-1``, ``base_name-2``, ...

        Args:
            base_name: Filesystem-safe base derived from the common name

        Returns:
            Reserved certificate, key and chain file names
        """
        pass

    @abstractmethod
    async def write_new(self, file_name: str, data: bytes, mode: int) -> None:
        """
        Create a new artifact file.

        Raises:
            FileExistsError: If the file already exists
            OSError: If the write fails
        """
        pass

    @abstractmethod
    def resolve(self, file_name: str) -> Path:
        """
        Resolve a file reference inside the storage directory.

        Raises:
            UnsafePathError: If the reference has no file name or resolves
                             outside the storage directory
        """
        pass

    @abstractmethod
    async def delete(self, file_name: str) -> bool:
        """
        Delete an artifact by name.

        Returns:
            True if the file was deleted, False if it did not exist

        Raises:
            UnsafePathError: If the reference is not path-safe
            OSError: If the file exists but cannot be removed
        """
        pass

    @abstractmethod
    async def discard(self, file_names: list[str]) -> None:
        """Best-effort removal of partially written artifacts."""
        pass
