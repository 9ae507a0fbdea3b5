"""
Abstract interface for root CA key material storage.

Handles the singleton trust anchor:
- Private key and certificate (PEM), stored as a pair
- Derived DER copy of the certificate
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Literal

CertificateFormat = Literal["pem", "der"]


class RootCARepository(ABC):
    """
    Abstract interface for root CA persistence.

    Implementations must guarantee that ``store`` leaves either both the
    key and the certificate persisted, or neither discoverable by
    ``exists``.
    """

    @abstractmethod
    async def exists(self) -> bool:
        """
        Check whether a usable root CA is stored.

        Returns:
            True iff both the private key and certificate are present
            and non-empty
        """
        pass

    @abstractmethod
    async def get_private_key(self) -> str:
        """
        Retrieve the root private key in PEM format.

        Raises:
            FileNotFoundError: If no private key is stored
        """
        pass

    @abstractmethod
    async def get_certificate(self) -> str:
        """
        Retrieve the root certificate in PEM format.

        Raises:
            FileNotFoundError: If no certificate is stored
        """
        pass

    @abstractmethod
    async def store(self, private_key_pem: str, certificate_pem: str) -> None:
        """
        Store the root key pair, replacing any existing one.

        Args:
            private_key_pem: PEM-encoded private key (owner read/write only)
            certificate_pem: PEM-encoded certificate (world-readable)

        Raises:
            OSError: If either file cannot be written; nothing is left
                     discoverable as an existing CA in that case
        """
        pass

    @abstractmethod
    async def store_der(self, certificate_pem: str) -> None:
        """
        Materialize the DER copy of the certificate.

        Raises:
            ValueError: If the PEM body is not valid base64
            OSError: If the file cannot be written
        """
        pass

    @abstractmethod
    def certificate_path(self, fmt: CertificateFormat = "pem") -> Path:
        """Path of the stored certificate in the requested encoding."""
        pass
