"""
Root CA store service.

Creates, imports and exposes the singleton root certificate authority:
- Generation: fresh RSA key pair + self-signed CA certificate
- Import: operator-supplied PEM key and certificate
- Status and download of the stored certificate

Security notes:
- Private key is written owner read/write only (0600)
- Key and certificate are persisted as a pair, never one without the other
- Existing CA is only replaced on explicit force (generation) or import
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import (
    CertificateIssuerPrivateKeyTypes,
)
from cryptography.x509.oid import NameOID
from loguru import logger

from simpleca.config import Settings, get_settings
from simpleca.domain.errors import (
    ConflictError,
    NotFoundError,
    PreconditionError,
    SigningError,
    StorageError,
    ValidationError,
)
from simpleca.infrastructure import InfrastructureFactory
from simpleca.infrastructure.repositories import CertificateFormat
from simpleca.services.crypto import (
    certificate_to_pem,
    generate_private_key,
    private_key_to_pem,
    public_keys_match,
    resolve_signature_algorithm,
    san_extension,
    serial_hex,
    validate_common_name,
    validate_days,
    validate_key_size,
)
from simpleca.utils.names import classify_san
from simpleca.utils.pem import has_certificate_marker, has_private_key_marker


@dataclass
class RootCAInfo:
    """Identity metadata of a generated root CA."""

    common_name: str
    days: int
    key_size: int
    algorithm: str
    serial: str
    not_after: datetime


@dataclass
class RootCAStatus:
    """Presence and, when readable, identity of the stored root CA."""

    exists: bool
    common_name: str | None = None
    not_after: datetime | None = None


@dataclass
class RootCASigner:
    """Loaded root key material used to sign leaf certificates."""

    private_key: CertificateIssuerPrivateKeyTypes
    certificate: x509.Certificate
    certificate_pem: str


class RootCAStore:
    """
    Root CA lifecycle service.

    Reads and writes the root key pair through the root CA repository
    obtained from the infrastructure factory.
    """

    def __init__(
        self,
        infrastructure_factory: InfrastructureFactory,
        settings: Settings | None = None,
    ):
        """
        Initialize the root CA store.

        Args:
            infrastructure_factory: Factory for accessing repositories
            settings: Defaults for omitted parameters (global settings if None)
        """
        self.factory = infrastructure_factory
        self.settings = settings or get_settings()
        self.repo = infrastructure_factory.get_root_ca_repository()

    async def exists(self) -> bool:
        """True iff both the root key and certificate are stored."""
        return await self.repo.exists()

    async def generate(
        self,
        common_name: str | None = None,
        days: int | str | None = None,
        key_size: int | str | None = None,
        algorithm: str | None = None,
        force: bool = False,
    ) -> RootCAInfo:
        """
        Generate a new self-signed root CA.

        Args:
            common_name: Subject CN (also the only SAN entry)
            days: Validity in days, 1-36500
            key_size: RSA key size, one of 1024, 2048, 4096
            algorithm: Signature digest (sha256, sha384, sha512)
            force: Replace an existing root CA

        Returns:
            Identity metadata of the new CA

        Raises:
            ValidationError: If a parameter is out of range
            ConflictError: If a root CA exists and ``force`` is not set
            SigningError: If key generation or self-signing fails
            StorageError: If the key pair cannot be written
        """
        common_name = validate_common_name(
            self.settings.default_root_common_name if common_name is None else common_name
        )
        days = validate_days(self.settings.default_root_days if days is None else days)
        key_size = validate_key_size(
            self.settings.default_key_size if key_size is None else key_size
        )
        algorithm = (algorithm or self.settings.default_signature_algorithm).strip().lower()
        digest = resolve_signature_algorithm(algorithm)
        san = san_extension([classify_san(common_name)])

        if await self.repo.exists() and not force:
            logger.warning("Root CA generation refused: CA already exists")
            raise ConflictError("CA already exists")

        try:
            private_key = generate_private_key(key_size)
            certificate = self._self_sign(private_key, common_name, days, digest, san)
        except Exception as e:
            logger.error(f"Root CA generation failed: {e}")
            raise SigningError("Failed to generate CA") from e

        certificate_pem = certificate_to_pem(certificate)
        try:
            await self.repo.store(private_key_to_pem(private_key), certificate_pem)
        except OSError as e:
            logger.error(f"Root CA could not be stored: {e}")
            raise StorageError("Failed to save CA") from e

        await self._materialize_der(certificate_pem)

        logger.info(
            f"Root CA generated: cn={common_name}, key_size={key_size}, "
            f"days={days}, algorithm={algorithm}, force={force}"
        )

        return RootCAInfo(
            common_name=common_name,
            days=days,
            key_size=key_size,
            algorithm=algorithm,
            serial=serial_hex(certificate),
            not_after=certificate.not_valid_after_utc,
        )

    def _self_sign(self, private_key, common_name, days, digest, san) -> x509.Certificate:
        """Build the self-signed CA certificate."""
        now = datetime.now(UTC)
        subject = issuer = x509.Name(
            [x509.NameAttribute(NameOID.COMMON_NAME, common_name)]
        )

        return (
            x509.CertificateBuilder()
            .subject_name(subject)
            .issuer_name(issuer)
            .public_key(private_key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=days))
            .add_extension(x509.BasicConstraints(ca=True, path_length=None), critical=True)
            .add_extension(
                x509.KeyUsage(
                    digital_signature=True,
                    key_cert_sign=True,
                    crl_sign=True,
                    key_encipherment=False,
                    content_commitment=False,
                    data_encipherment=False,
                    key_agreement=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(san, critical=False)
            .add_extension(
                x509.SubjectKeyIdentifier.from_public_key(private_key.public_key()),
                critical=False,
            )
            .sign(private_key, digest)
        )

    async def import_pair(self, private_key_pem: str, certificate_pem: str) -> None:
        """
        Import an existing root key pair, replacing any stored CA.

        Only PEM framing is checked; the material is stored as given.

        Raises:
            ValidationError: If either input is empty or lacks PEM framing
            StorageError: If the key pair cannot be written
        """
        if not (private_key_pem or "").strip() or not (certificate_pem or "").strip():
            raise ValidationError("Both private and public PEM must be provided")
        if not has_private_key_marker(private_key_pem) or not has_certificate_marker(
            certificate_pem
        ):
            raise ValidationError("Invalid PEM format")

        try:
            await self.repo.store(private_key_pem, certificate_pem)
        except OSError as e:
            logger.error(f"Imported root CA could not be stored: {e}")
            raise StorageError("Failed to save CA") from e

        await self._materialize_der(certificate_pem)

        logger.info("Root CA imported")

    async def _materialize_der(self, certificate_pem: str) -> bool:
        """Write the DER copy; failures are logged, not raised."""
        try:
            await self.repo.store_der(certificate_pem)
        except (OSError, ValueError) as e:
            logger.warning(f"DER copy of root certificate not written: {e}")
            return False
        return True

    async def status(self) -> RootCAStatus:
        """Presence of the CA plus subject and expiry when parseable."""
        if not await self.repo.exists():
            return RootCAStatus(exists=False)

        try:
            certificate = x509.load_pem_x509_certificate(
                (await self.repo.get_certificate()).encode()
            )
        except (OSError, ValueError) as e:
            logger.warning(f"Stored root certificate not parseable: {e}")
            return RootCAStatus(exists=True)

        names = certificate.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        return RootCAStatus(
            exists=True,
            common_name=str(names[0].value) if names else None,
            not_after=certificate.not_valid_after_utc,
        )

    async def certificate_file(self, fmt: CertificateFormat = "pem") -> Path:
        """
        Path of the root certificate for download.

        The DER copy is regenerated when it is missing.

        Raises:
            NotFoundError: If no root CA exists
            StorageError: If the DER copy cannot be produced
        """
        if not await self.repo.exists():
            raise NotFoundError("No root CA present")

        path = self.repo.certificate_path(fmt)
        if fmt == "der" and not path.exists():
            if not await self._materialize_der(await self.repo.get_certificate()):
                raise StorageError("DER certificate not available")
        return path

    async def load_signer(self) -> RootCASigner:
        """
        Load the root key pair for signing.

        Raises:
            PreconditionError: If no root CA exists
            SigningError: If the stored material cannot be parsed or the
                          key does not belong to the certificate
        """
        if not await self.repo.exists():
            raise PreconditionError(
                "No root CA present. Generate or upload a root CA first."
            )

        try:
            key_pem = await self.repo.get_private_key()
            certificate_pem = await self.repo.get_certificate()
            private_key = serialization.load_pem_private_key(
                key_pem.encode(), password=None
            )
            certificate = x509.load_pem_x509_certificate(certificate_pem.encode())
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Root CA could not be loaded: {e}")
            raise SigningError("Root CA could not be loaded") from e

        if not public_keys_match(private_key, certificate):
            logger.error("Root CA private key does not match its certificate")
            raise SigningError("Root CA private key does not match its certificate")

        return RootCASigner(
            private_key=private_key,
            certificate=certificate,
            certificate_pem=certificate_pem,
        )
