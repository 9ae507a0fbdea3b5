"""Root CA Response Models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RootCAStatusResponse(BaseModel):
    """
    Root CA presence, with certificate metadata when it exists.

    Attributes:
        exists: Whether the root key and certificate are stored
        common_name: Subject common name
        not_after: Certificate expiration timestamp (UTC)
        download_pem: Download link for the PEM certificate
        download_der: Download link for the DER certificate
    """

    model_config = ConfigDict(populate_by_name=True)

    exists: bool = Field(..., description="Whether a root CA is present")
    common_name: str | None = Field(
        None, alias="commonName", description="Root CA common name"
    )
    not_after: datetime | None = Field(
        None, alias="notAfter", description="Expiration timestamp (UTC)"
    )
    download_pem: str | None = Field(None, description="PEM download link")
    download_der: str | None = Field(None, description="DER download link")


class RootCAGenerateResponse(BaseModel):
    """Response after successful root CA generation."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Human-readable message")
    common_name: str = Field(..., alias="commonName", description="Common name")
    days: int = Field(..., description="Validity period in days")
    key_size: int = Field(..., alias="keySize", description="RSA key size")
    algorithm: str = Field(..., description="Signature digest")
    serial: str = Field(..., description="Certificate serial number (hex)")
    not_after: datetime = Field(
        ..., alias="notAfter", description="Expiration timestamp (UTC)"
    )


class RootCAUploadResponse(BaseModel):
    """Response after a successful import."""

    message: str = Field(..., description="Human-readable message")
