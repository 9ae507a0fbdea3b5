"""
Local file-based root CA repository implementation.

Stores the root key pair as fixed files in the storage directory:
    {base_dir}/
        root-key.pem   (0600)
        root-crt.pem   (0644)
        root-crt.der   (0644, derived)
"""

import os
import tempfile
from pathlib import Path

from loguru import logger

from simpleca.infrastructure.repositories.root_ca_repository import (
    CertificateFormat,
    RootCARepository,
)
from simpleca.utils.pem import write_der

PRIVATE_KEY_MODE = 0o600
CERTIFICATE_MODE = 0o644


class LocalRootCARepository(RootCARepository):
    """File-based root CA storage."""

    def __init__(
        self,
        base_dir: str = "./data",
        key_file: str = "root-key.pem",
        cert_file: str = "root-crt.pem",
        der_file: str = "root-crt.der",
    ):
        """
        Initialize local root CA repository.

        Args:
            base_dir: Managed storage directory
            key_file: Private key file name
            cert_file: PEM certificate file name
            der_file: DER certificate file name
        """
        self.base_dir = Path(base_dir)
        self.key_path = self.base_dir / key_file
        self.cert_path = self.base_dir / cert_file
        self.der_path = self.base_dir / der_file

        logger.debug(f"Initialized LocalRootCARepository at {self.base_dir}")

    @staticmethod
    def _present(path: Path) -> bool:
        try:
            return path.is_file() and path.stat().st_size > 0
        except OSError:
            return False

    async def exists(self) -> bool:
        """Both key and certificate present and non-empty."""
        return self._present(self.key_path) and self._present(self.cert_path)

    async def get_private_key(self) -> str:
        """Retrieve root private key."""
        if not self.key_path.exists():
            raise FileNotFoundError(f"Root CA private key not found at {self.key_path}")
        return self.key_path.read_text()

    async def get_certificate(self) -> str:
        """Retrieve root certificate."""
        if not self.cert_path.exists():
            raise FileNotFoundError(f"Root CA certificate not found at {self.cert_path}")
        return self.cert_path.read_text()

    def _stage(self, target: Path, data: str, mode: int) -> Path:
        """Write ``data`` to a temporary file next to ``target``."""
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=self.base_dir)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w") as f:
                f.write(data)
            os.chmod(tmp_path, mode)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        return tmp_path

    async def store(self, private_key_pem: str, certificate_pem: str) -> None:
        """
        Store the key pair as a unit.

        Both files are staged first, then moved into place. If the
        certificate cannot be moved, the already-moved key is removed so
        the CA is not reported as existing.
        """
        self.base_dir.mkdir(parents=True, exist_ok=True)

        staged: list[Path] = []
        try:
            staged.append(self._stage(self.key_path, private_key_pem, PRIVATE_KEY_MODE))
            staged.append(self._stage(self.cert_path, certificate_pem, CERTIFICATE_MODE))
        except BaseException:
            for tmp in staged:
                tmp.unlink(missing_ok=True)
            raise

        key_tmp, cert_tmp = staged
        try:
            os.replace(key_tmp, self.key_path)
        except BaseException:
            key_tmp.unlink(missing_ok=True)
            cert_tmp.unlink(missing_ok=True)
            raise

        try:
            os.replace(cert_tmp, self.cert_path)
        except BaseException:
            cert_tmp.unlink(missing_ok=True)
            self.key_path.unlink(missing_ok=True)
            logger.error("Root CA certificate could not be stored; removed private key")
            raise

        # The DER copy belongs to the replaced certificate
        self.der_path.unlink(missing_ok=True)

        logger.info("Stored root CA key pair")

    async def store_der(self, certificate_pem: str) -> None:
        """Write the DER copy of the certificate."""
        write_der(certificate_pem, self.der_path)
        logger.info("Stored root CA certificate (DER)")

    def certificate_path(self, fmt: CertificateFormat = "pem") -> Path:
        """Path of the PEM or DER certificate."""
        return self.der_path if fmt == "der" else self.cert_path
