"""
PEM/DER codec for certificate material.

Only framing is handled here: no certificate structure is validated
beyond a successful base64 decode.
"""

import base64
import re
from pathlib import Path

from simpleca.utils.files import atomic_write

CERTIFICATE_BEGIN = "-----BEGIN CERTIFICATE-----"
CERTIFICATE_END = "-----END CERTIFICATE-----"

# Matches PKCS#8, PKCS#1 (RSA), SEC1 (EC) and encrypted PKCS#8 headers
_PRIVATE_KEY_BEGIN = re.compile(r"-----BEGIN ([A-Z0-9]+ )*PRIVATE KEY-----")
_PRIVATE_KEY_END = re.compile(r"-----END ([A-Z0-9]+ )*PRIVATE KEY-----")


def pem_to_der(pem: str) -> bytes:
    """
    Convert a PEM-encoded certificate to DER bytes.

    Args:
        pem: PEM text containing a single certificate. Text outside the
             delimiters, such as openssl ``subject=`` lines, is ignored.

    Returns:
        Raw DER bytes

    Raises:
        ValueError: If the body is not valid base64
    """
    begin = pem.find(CERTIFICATE_BEGIN)
    end = pem.find(CERTIFICATE_END, begin + 1)
    if begin != -1 and end != -1:
        body = pem[begin + len(CERTIFICATE_BEGIN) : end]
    else:
        body = pem.replace(CERTIFICATE_BEGIN, "").replace(CERTIFICATE_END, "")
    body = "".join(body.split())
    return base64.b64decode(body, validate=True)


def write_der(pem: str, path: Path) -> None:
    """Decode ``pem`` and write the DER bytes to ``path`` (world-readable)."""
    atomic_write(path, pem_to_der(pem), mode=0o644)


def has_certificate_marker(text: str) -> bool:
    """True if ``text`` carries certificate PEM framing."""
    return CERTIFICATE_BEGIN in text and CERTIFICATE_END in text


def has_private_key_marker(text: str) -> bool:
    """True if ``text`` carries private key PEM framing."""
    return bool(_PRIVATE_KEY_BEGIN.search(text) and _PRIVATE_KEY_END.search(text))
