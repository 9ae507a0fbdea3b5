"""
Leaf certificate issuance.

Builds a CSR for a freshly generated key, signs it with the root CA and
records the resulting artifacts in the registry.

Issuance is all-or-nothing:
- Inputs and the root CA are checked before any file is created
- Key and certificate files are created exclusively and removed again if
  signing, writing or the registry update fails
- The full-chain file is optional; failing to write it does not fail issuance
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

from cryptography import x509
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID
from loguru import logger

from simpleca.config import Settings, get_settings
from simpleca.domain.errors import (
    ConflictError,
    NotFoundError,
    SigningError,
    StorageError,
)
from simpleca.infrastructure import InfrastructureFactory
from simpleca.infrastructure.repositories import (
    LeafCertificateEntry,
    LeafFileNames,
    UnsafePathError,
)
from simpleca.services.crypto import (
    certificate_to_pem,
    generate_private_key,
    private_key_to_pem,
    san_extension,
    serial_hex,
    signing_hash,
    validate_common_name,
    validate_days,
    validate_key_size,
)
from simpleca.services.root_ca import RootCASigner, RootCAStore
from simpleca.utils.names import build_san_list, safe_base_name

KEY_FILE_MODE = 0o600
CERT_FILE_MODE = 0o644


@dataclass
class LeafIssuance:
    """Result of a successful issuance."""

    entry: LeafCertificateEntry
    sans: list[str] = field(default_factory=list)


class LeafIssuer:
    """
    Issues leaf certificates signed by the root CA.

    Registry mutations run under the registry writer lock so concurrent
    issuances and deletions never lose each other's updates.
    """

    def __init__(
        self,
        infrastructure_factory: InfrastructureFactory,
        root_ca: RootCAStore | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the leaf issuer.

        Args:
            infrastructure_factory: Factory for accessing repositories
            root_ca: Root CA store (built from the factory if None)
            settings: Defaults for omitted parameters (global settings if None)
        """
        self.settings = settings or get_settings()
        self.root_ca = root_ca or RootCAStore(infrastructure_factory, self.settings)
        self.registry_repo = infrastructure_factory.get_registry_repository()
        self.artifact_repo = infrastructure_factory.get_artifact_repository()

    async def issue(
        self,
        common_name: str,
        sans: str | None = None,
        days: int | str | None = None,
        key_size: int | str | None = None,
    ) -> LeafIssuance:
        """
        Issue a leaf certificate.

        Args:
            common_name: Subject CN, also the registry name and first SAN
            sans: Comma-separated additional DNS names or IPv4 addresses
            days: Validity in days, 1-36500
            key_size: RSA key size, one of 1024, 2048, 4096

        Returns:
            The registry entry and the SAN list in certificate order

        Raises:
            ValidationError: If a parameter or SAN value is invalid
            PreconditionError: If no root CA exists
            ConflictError: If the name is already registered
            SigningError: If key generation, CSR construction or signing fails
            StorageError: If artifacts or the registry cannot be written
        """
        common_name = validate_common_name(common_name)
        days = validate_days(self.settings.default_leaf_days if days is None else days)
        key_size = validate_key_size(
            self.settings.default_key_size if key_size is None else key_size
        )
        san_entries = build_san_list(common_name, sans)
        san = san_extension(san_entries)

        signer = await self.root_ca.load_signer()

        async with self.registry_repo.lock():
            registry = await self.registry_repo.load()
            if registry.contains(common_name):
                logger.warning(f"Leaf issuance refused: {common_name} already exists")
                raise ConflictError("Certificate with this name already exists")

            names = await self.artifact_repo.reserve_names(safe_base_name(common_name))

            try:
                private_key = generate_private_key(key_size)
                csr = self._build_csr(private_key, common_name, san)
                certificate = self._sign(csr, signer, days)
            except Exception as e:
                logger.error(f"Leaf signing failed for {common_name}: {e}")
                raise SigningError("Failed to generate certificate") from e

            certificate_pem = certificate_to_pem(certificate)
            written: list[str] = []
            try:
                await self.artifact_repo.write_new(
                    names.key_file,
                    private_key_to_pem(private_key).encode("utf-8"),
                    mode=KEY_FILE_MODE,
                )
                written.append(names.key_file)
                await self.artifact_repo.write_new(
                    names.cert_file, certificate_pem.encode("utf-8"), mode=CERT_FILE_MODE
                )
                written.append(names.cert_file)
            except (OSError, UnsafePathError) as e:
                logger.error(f"Leaf artifacts for {common_name} not written: {e}")
                await self.artifact_repo.discard(written)
                raise StorageError("Failed to save certificate files") from e

            chain_file = await self._write_chain(names, certificate_pem, signer)
            if chain_file:
                written.append(chain_file)

            entry = LeafCertificateEntry(
                name=common_name,
                expiry=certificate.not_valid_after_utc.date().isoformat(),
                cert_file=names.cert_file,
                key_file=names.key_file,
                chain_file=chain_file,
                serial=serial_hex(certificate),
                created_at=datetime.now(UTC).isoformat(timespec="seconds"),
            )
            registry.add(entry)

            try:
                await self.registry_repo.save(registry)
            except OSError as e:
                logger.error(f"Registry update for {common_name} failed: {e}")
                await self.artifact_repo.discard(written)
                raise StorageError("Failed to update certificate registry") from e

        logger.info(
            f"Leaf issued: name={common_name}, serial={entry.serial}, "
            f"expiry={entry.expiry}, sans={[str(s) for s in san_entries]}"
        )

        return LeafIssuance(entry=entry, sans=[str(s) for s in san_entries])

    @staticmethod
    def _build_csr(private_key, common_name: str, san) -> x509.CertificateSigningRequest:
        """CSR carrying the subject and end-entity extensions."""
        return (
            x509.CertificateSigningRequestBuilder()
            .subject_name(
                x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
            )
            .add_extension(san, critical=False)
            .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
            .add_extension(
                x509.KeyUsage(
                    digital_signature=True,
                    key_encipherment=True,
                    content_commitment=False,
                    data_encipherment=False,
                    key_agreement=False,
                    key_cert_sign=False,
                    crl_sign=False,
                    encipher_only=False,
                    decipher_only=False,
                ),
                critical=True,
            )
            .add_extension(
                x509.ExtendedKeyUsage([ExtendedKeyUsageOID.SERVER_AUTH]),
                critical=False,
            )
            .sign(private_key, signing_hash(private_key))
        )

    @staticmethod
    def _sign(
        csr: x509.CertificateSigningRequest, signer: RootCASigner, days: int
    ) -> x509.Certificate:
        """Sign a CSR with the root CA, copying its subject and extensions."""
        if not csr.is_signature_valid:
            raise ValueError("CSR signature is invalid")

        now = datetime.now(UTC)
        builder = (
            x509.CertificateBuilder()
            .subject_name(csr.subject)
            .issuer_name(signer.certificate.subject)
            .public_key(csr.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=days))
        )
        for extension in csr.extensions:
            builder = builder.add_extension(extension.value, critical=extension.critical)

        builder = builder.add_extension(
            x509.SubjectKeyIdentifier.from_public_key(csr.public_key()), critical=False
        ).add_extension(
            x509.AuthorityKeyIdentifier.from_issuer_public_key(
                signer.private_key.public_key()
            ),
            critical=False,
        )

        return builder.sign(signer.private_key, signing_hash(signer.private_key))

    async def _write_chain(
        self, names: LeafFileNames, certificate_pem: str, signer: RootCASigner
    ) -> str | None:
        """Write leaf + root PEM; returns None when the file could not be written."""
        root_pem = signer.certificate_pem
        if not root_pem.endswith("\n"):
            root_pem += "\n"
        try:
            await self.artifact_repo.write_new(
                names.chain_file,
                (certificate_pem + root_pem).encode("utf-8"),
                mode=CERT_FILE_MODE,
            )
        except (OSError, UnsafePathError) as e:
            logger.warning(f"Full chain not written ({names.chain_file}): {e}")
            return None
        return names.chain_file

    async def list_leaves(self) -> list[LeafCertificateEntry]:
        """Registry entries in insertion order."""
        return await self.registry_repo.list_entries()

    async def artifact_path(self, file_name: str) -> Path:
        """
        Resolve a downloadable leaf artifact.

        Only files referenced by a registry entry are served.

        Raises:
            NotFoundError: If the file is unreferenced, unsafe or absent
        """
        entries = await self.registry_repo.list_entries()
        if not any(file_name in entry.referenced_files() for entry in entries):
            raise NotFoundError("File not found")

        try:
            path = self.artifact_repo.resolve(file_name)
        except UnsafePathError as e:
            logger.warning(f"Refused download of unsafe reference: {e}")
            raise NotFoundError("File not found") from e

        if not path.is_file():
            raise NotFoundError("File not found")
        return path
