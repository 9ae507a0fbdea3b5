"""Leaf Certificate Request Models."""

from pydantic import BaseModel, ConfigDict, Field


class LeafGenerateRequest(BaseModel):
    """
    Request to issue a leaf certificate.

    Attributes:
        common_name: Subject common name, also the registry name
        sans: Comma-separated extra DNS names or IPv4 addresses
        days: Validity period in days
        key_size: RSA key size
    """

    model_config = ConfigDict(populate_by_name=True)

    common_name: str | None = Field(
        None, alias="commonName", description="Certificate common name"
    )
    sans: str | None = Field(
        None,
        description="Comma-separated subject alternative names",
        json_schema_extra={"example": "192.168.1.1,api.example.com"},
    )
    days: int | str | None = Field(None, description="Validity period in days (1-36500)")
    key_size: int | str | None = Field(
        None, alias="keySize", description="RSA key size (1024, 2048, 4096)"
    )


class LeafDeleteRequest(BaseModel):
    """Request to delete a leaf certificate by registry name."""

    name: str | None = Field(None, description="Registry name of the certificate")
