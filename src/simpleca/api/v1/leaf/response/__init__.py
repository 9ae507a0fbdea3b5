"""Leaf Certificate Response Models."""

from typing import Any

from pydantic import BaseModel, Field

from simpleca.infrastructure.repositories import LeafCertificateEntry


class LeafGenerateResponse(BaseModel):
    """
    Response after successful issuance.

    Attributes:
        name: Registry name
        expiry: Expiry date (YYYY-MM-DD)
        cert_file / key_file / chain_file: Artifact file names
        download_cert / download_key / download_chain: Download links
        sans: Subject alternative names in certificate order
    """

    message: str = Field(..., description="Human-readable message")
    name: str = Field(..., description="Registry name")
    expiry: str = Field(..., description="Expiry date (YYYY-MM-DD)")
    serial: str | None = Field(None, description="Serial number (hex)")
    cert_file: str = Field(..., description="Certificate file name")
    key_file: str = Field(..., description="Private key file name")
    chain_file: str | None = Field(None, description="Full-chain file name")
    download_cert: str = Field(..., description="Certificate download link")
    download_key: str = Field(..., description="Private key download link")
    download_chain: str | None = Field(None, description="Full-chain download link")
    sans: list[str] = Field(default_factory=list, description="SAN entries")


class LeafListResponse(BaseModel):
    """Registered leaf certificates in issuance order."""

    certificates: list[LeafCertificateEntry] = Field(default_factory=list)


class LeafDeleteResponse(BaseModel):
    """Response after a successful deletion."""

    message: str = Field(..., description="Human-readable message")
    name: str = Field(..., description="Deleted registry name")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Deleted and missing files"
    )
