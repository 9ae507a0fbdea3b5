"""
Abstract interface for the leaf certificate registry.

The registry is a single versioned document listing every issued leaf
certificate and the names of its artifact files:

    {
        "version": 1,
        "certificates": [
            {"name": "example.com", "expiry": "2027-10-19",
             "cert_file": "examplecom.crt.pem", "key_file": "examplecom.key.pem",
             "chain_file": "examplecom-fullchain.pem", ...}
        ]
    }

Mutations are always read-entire, modify-in-memory, write-entire, and
callers hold ``lock()`` across the whole sequence.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Literal

from pydantic import BaseModel, Field

from simpleca.utils.names import normalize_name

REGISTRY_SCHEMA_VERSION = 1


class LeafCertificateEntry(BaseModel):
    """
    One issued leaf certificate.

    Attributes:
        name: Logical identifier (the certificate's common name)
        expiry: Calendar date the certificate expires (YYYY-MM-DD, UTC)
        cert_file: Certificate file name inside the storage directory
        key_file: Private key file name inside the storage directory
        chain_file: Full-chain file name, None when it could not be written
        serial: Certificate serial number (hex)
        created_at: Issuance timestamp (ISO-8601, UTC)
    """

    name: str = Field(..., description="Logical certificate name")
    expiry: str = Field(..., description="Expiry date (YYYY-MM-DD)")
    cert_file: str = Field(..., description="Certificate file name")
    key_file: str = Field(..., description="Private key file name")
    chain_file: str | None = Field(None, description="Full-chain file name")
    serial: str | None = Field(None, description="Serial number (hex)")
    created_at: str | None = Field(None, description="Issuance timestamp")

    def referenced_files(self) -> list[str]:
        """Artifact file names in deletion order (chain only when present)."""
        files = [self.cert_file, self.key_file]
        if self.chain_file:
            files.append(self.chain_file)
        return files


class CertificateRegistry(BaseModel):
    """The persisted collection of leaf certificate entries."""

    version: Literal[1] = REGISTRY_SCHEMA_VERSION
    certificates: list[LeafCertificateEntry] = Field(default_factory=list)

    def find(self, name: str) -> LeafCertificateEntry | None:
        """Find an entry by name (trimmed, case-insensitive)."""
        key = normalize_name(name)
        for entry in self.certificates:
            if normalize_name(entry.name) == key:
                return entry
        return None

    def contains(self, name: str) -> bool:
        """True if an entry with the same normalized name exists."""
        return self.find(name) is not None

    def add(self, entry: LeafCertificateEntry) -> None:
        """Append an entry."""
        self.certificates.append(entry)

    def remove(self, name: str) -> bool:
        """
        Remove the entry matching ``name``.

        Returns:
            True if an entry was removed, False if none matched
        """
        key = normalize_name(name)
        remaining = [e for e in self.certificates if normalize_name(e.name) != key]
        removed = len(remaining) != len(self.certificates)
        self.certificates = remaining
        return removed


class RegistryRepository(ABC):
    """
    Abstract interface for registry persistence.

    Implementations must:
    - Degrade to an empty registry when the document is missing or corrupt
    - Replace the whole document on save
    - Provide one writer lock per registry document
    """

    @abstractmethod
    async def load(self) -> CertificateRegistry:
        """
        Load the registry.

        Returns:
            Persisted registry, or an empty one if absent or malformed
        """
        pass

    @abstractmethod
    async def save(self, registry: CertificateRegistry) -> None:
        """
        Persist the full registry, overwriting the previous document.

        Raises:
            OSError: If the document cannot be written
        """
        pass

    @abstractmethod
    def lock(self) -> asyncio.Lock:
        """
        Writer lock guarding load-modify-save sequences.

        Returns:
            The same lock object for every repository bound to one document
        """
        pass

    async def find_by_name(self, name: str) -> LeafCertificateEntry | None:
        """
        Find an entry by name.

        Args:
            name: Certificate name (trimmed, case-insensitive match)

        Returns:
            Matching entry, or None
        """
        registry = await self.load()
        return registry.find(name)

    async def list_entries(self) -> list[LeafCertificateEntry]:
        """List all entries in insertion order."""
        registry = await self.load()
        return list(registry.certificates)
