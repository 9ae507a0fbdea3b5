"""Tests for the PEM/DER codec."""

import base64
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from simpleca.utils.pem import (
    has_certificate_marker,
    has_private_key_marker,
    pem_to_der,
    write_der,
)


@pytest.fixture(scope="module")
def certificate():
    """Self-signed certificate for codec tests."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=1024)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "codec")])
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .sign(key, hashes.SHA256())
    )


def test_pem_to_der_matches_library_encoding(certificate):
    """DER produced from PEM equals the library's DER encoding."""
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()

    assert pem_to_der(pem) == certificate.public_bytes(serialization.Encoding.DER)


def test_pem_to_der_tolerates_crlf_and_indentation(certificate):
    """Whitespace inside the body is ignored."""
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()
    messy = "\r\n".join("  " + line for line in pem.splitlines())

    assert pem_to_der(messy) == certificate.public_bytes(serialization.Encoding.DER)


def test_pem_to_der_does_not_validate_structure():
    """Any base64 body decodes; structure is not checked."""
    pem = (
        "-----BEGIN CERTIFICATE-----\n"
        f"{base64.b64encode(b'not a certificate').decode()}\n"
        "-----END CERTIFICATE-----\n"
    )

    assert pem_to_der(pem) == b"not a certificate"


def test_pem_to_der_rejects_invalid_base64():
    """Invalid base64 surfaces as ValueError."""
    with pytest.raises(ValueError):
        pem_to_der("-----BEGIN CERTIFICATE-----\n@@@@\n-----END CERTIFICATE-----")


def test_pem_to_der_ignores_text_around_delimiters(certificate):
    """openssl export headers before BEGIN and trailing text are skipped."""
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()
    exported = f"subject=CN = codec\nissuer=CN = codec\n\n{pem}trailing note\n"

    assert pem_to_der(exported) == certificate.public_bytes(serialization.Encoding.DER)


def test_write_der_creates_world_readable_file(certificate, tmp_path):
    """write_der writes the decoded bytes with mode 0644."""
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()
    target = tmp_path / "root-crt.der"

    write_der(pem, target)

    assert target.read_bytes() == certificate.public_bytes(serialization.Encoding.DER)
    assert target.stat().st_mode & 0o777 == 0o644


@pytest.mark.parametrize(
    "header",
    ["PRIVATE KEY", "RSA PRIVATE KEY", "EC PRIVATE KEY", "ENCRYPTED PRIVATE KEY"],
)
def test_private_key_marker_accepts_common_headers(header):
    text = f"-----BEGIN {header}-----\nAAAA\n-----END {header}-----\n"

    assert has_private_key_marker(text)


def test_private_key_marker_rejects_certificate(certificate):
    pem = certificate.public_bytes(serialization.Encoding.PEM).decode()

    assert not has_private_key_marker(pem)
    assert has_certificate_marker(pem)


def test_certificate_marker_requires_both_delimiters():
    assert not has_certificate_marker("-----BEGIN CERTIFICATE-----\nAAAA\n")
    assert not has_certificate_marker("hello")
