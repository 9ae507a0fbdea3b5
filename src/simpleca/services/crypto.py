"""
Key, certificate and parameter helpers shared by the CA services.

Validation helpers raise ``ValidationError`` so callers can report input
problems before any file is touched.
"""

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ed448, ed25519, rsa
from cryptography.hazmat.primitives.asymmetric.types import (
    CertificateIssuerPrivateKeyTypes,
)

from simpleca.domain.errors import ValidationError
from simpleca.utils.names import SanEntry, invalid_ip_entries

ALLOWED_KEY_SIZES = (1024, 2048, 4096)
MIN_VALIDITY_DAYS = 1
MAX_VALIDITY_DAYS = 36500
MAX_COMMON_NAME_LENGTH = 64

SIGNATURE_ALGORITHMS: dict[str, type[hashes.HashAlgorithm]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}


def _as_int(value: int | str) -> int | None:
    """Integer form of a JSON number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_days(days: int | str) -> int:
    """Validity period must be within [1, 36500] days."""
    value = _as_int(days)
    if value is None:
        raise ValidationError("Invalid days value")
    if value < MIN_VALIDITY_DAYS or value > MAX_VALIDITY_DAYS:
        raise ValidationError(
            f"Invalid days value. Allowed: {MIN_VALIDITY_DAYS}-{MAX_VALIDITY_DAYS}"
        )
    return value


def validate_key_size(key_size: int | str) -> int:
    """Key size must be one of 1024, 2048, 4096."""
    value = _as_int(key_size)
    if value not in ALLOWED_KEY_SIZES:
        allowed = ", ".join(str(size) for size in ALLOWED_KEY_SIZES)
        raise ValidationError(f"Invalid keySize. Allowed: {allowed}")
    return value


def validate_common_name(common_name: str | None) -> str:
    """Trimmed common name, 1-64 characters."""
    value = (common_name or "").strip()
    if not value:
        raise ValidationError("commonName is required")
    if len(value) > MAX_COMMON_NAME_LENGTH:
        raise ValidationError(
            f"commonName must be at most {MAX_COMMON_NAME_LENGTH} characters"
        )
    return value


def resolve_signature_algorithm(name: str) -> hashes.HashAlgorithm:
    """Map an algorithm name (sha256, sha384, sha512) to a hash instance."""
    algorithm = SIGNATURE_ALGORITHMS.get((name or "").strip().lower())
    if algorithm is None:
        allowed = ", ".join(SIGNATURE_ALGORITHMS)
        raise ValidationError(f"Invalid algorithm. Allowed: {allowed}")
    return algorithm()


def san_extension(entries: list[SanEntry]) -> x509.SubjectAlternativeName:
    """
    Build the SAN extension, preserving entry order.

    Raises:
        ValidationError: If an entry cannot be encoded (bad IPv4 octets,
                         non-ASCII DNS names)
    """
    invalid = invalid_ip_entries(entries)
    if invalid:
        raise ValidationError(f"Invalid IP address in SAN: {', '.join(invalid)}")
    try:
        return x509.SubjectAlternativeName([e.to_general_name() for e in entries])
    except ValueError as e:
        raise ValidationError(f"Invalid subject alternative name: {e}") from e


def generate_private_key(key_size: int) -> rsa.RSAPrivateKey:
    """Generate an RSA private key."""
    return rsa.generate_private_key(public_exponent=65537, key_size=key_size)


def private_key_to_pem(private_key: CertificateIssuerPrivateKeyTypes) -> str:
    """Serialize a private key as unencrypted PKCS#8 PEM."""
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


def certificate_to_pem(certificate: x509.Certificate) -> str:
    """Serialize a certificate as PEM."""
    return certificate.public_bytes(serialization.Encoding.PEM).decode("utf-8")


def signing_hash(
    private_key: CertificateIssuerPrivateKeyTypes,
    preferred: hashes.HashAlgorithm | None = None,
) -> hashes.HashAlgorithm | None:
    """
    Digest to sign with: EdDSA keys take none, everything else SHA-256
    unless ``preferred`` is given.
    """
    if isinstance(private_key, (ed25519.Ed25519PrivateKey, ed448.Ed448PrivateKey)):
        return None
    return preferred or hashes.SHA256()


def public_keys_match(
    private_key: CertificateIssuerPrivateKeyTypes, certificate: x509.Certificate
) -> bool:
    """True if ``private_key`` belongs to ``certificate``."""
    spki = serialization.PublicFormat.SubjectPublicKeyInfo
    der = serialization.Encoding.DER
    return private_key.public_key().public_bytes(der, spki) == (
        certificate.public_key().public_bytes(der, spki)
    )


def serial_hex(certificate: x509.Certificate) -> str:
    """Serial number as upper-case hex."""
    return format(certificate.serial_number, "X")
