"""
Naming rules for certificates.

- SAN classification: dotted-quad tokens are IP addresses, anything else
  is a DNS name.
- Registry names are compared trimmed and case-insensitively.
- Artifact base names keep only ``[a-z0-9]`` of the lower-cased common name.
"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Literal

from cryptography import x509

IPV4_PATTERN = re.compile(r"^[0-9]{1,3}(\.[0-9]{1,3}){3}$")
DEFAULT_BASE_NAME = "cert"

SanKind = Literal["DNS", "IP"]


@dataclass(frozen=True)
class SanEntry:
    """One Subject Alternative Name value."""

    kind: SanKind
    value: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"

    def to_general_name(self) -> x509.GeneralName:
        """
        Convert to a ``cryptography`` general name.

        Raises:
            ValueError: If an IP entry is not a valid IPv4 address
        """
        if self.kind == "IP":
            return x509.IPAddress(ipaddress.IPv4Address(self.value))
        return x509.DNSName(self.value)


def classify_san(token: str) -> SanEntry:
    """
    Classify a single SAN token as IP or DNS.

    Args:
        token: Operator-supplied value (surrounding whitespace is ignored)

    Returns:
        SanEntry tagged ``IP`` for four dot-separated 1-3 digit groups,
        ``DNS`` otherwise
    """
    value = token.strip()
    if IPV4_PATTERN.match(value):
        return SanEntry("IP", value)
    return SanEntry("DNS", value)


def build_san_list(common_name: str, sans: str | None = None) -> list[SanEntry]:
    """
    Build the ordered SAN list: common name first, then each comma-separated
    entry of ``sans``. Empty tokens are skipped.
    """
    entries = [classify_san(common_name)]
    for token in (sans or "").split(","):
        if token.strip():
            entries.append(classify_san(token))
    return entries


def invalid_ip_entries(entries: list[SanEntry]) -> list[str]:
    """Return IP-classified values that are not valid IPv4 addresses."""
    invalid = []
    for entry in entries:
        if entry.kind != "IP":
            continue
        try:
            ipaddress.IPv4Address(entry.value)
        except ValueError:
            invalid.append(entry.value)
    return invalid


def normalize_name(name: str) -> str:
    """Registry comparison key: trimmed and lower-cased."""
    return name.strip().lower()


def safe_base_name(common_name: str) -> str:
    """
    Derive a filesystem-safe base name from a common name.

    Example:
        >>> safe_base_name("API.Example.com")
        'apiexamplecom'
        >>> safe_base_name("***")
        'cert'
    """
    base = re.sub(r"[^a-z0-9]", "", common_name.lower())
    return base or DEFAULT_BASE_NAME
