"""Root CA Request Models."""

from pydantic import BaseModel, ConfigDict, Field


class RootCAGenerateRequest(BaseModel):
    """
    Request to generate a new root CA.

    Omitted fields fall back to the configured defaults.

    Attributes:
        common_name: Subject common name (``commonName``)
        days: Validity period in days
        key_size: RSA key size (``keySize``)
        algorithm: Signature digest (sha256, sha384, sha512)
    """

    model_config = ConfigDict(populate_by_name=True)

    common_name: str | None = Field(
        None, alias="commonName", description="Root CA common name"
    )
    days: int | str | None = Field(None, description="Validity period in days (1-36500)")
    key_size: int | str | None = Field(
        None, alias="keySize", description="RSA key size (1024, 2048, 4096)"
    )
    algorithm: str | None = Field(
        None, description="Signature digest (sha256, sha384, sha512)"
    )


class RootCAUploadRequest(BaseModel):
    """
    Request to import an existing root CA key pair.

    Attributes:
        private_key: PEM-encoded private key (``private``)
        certificate: PEM-encoded certificate (``public``)
    """

    model_config = ConfigDict(populate_by_name=True)

    private_key: str = Field(
        "", alias="private", description="PEM-encoded root private key"
    )
    certificate: str = Field(
        "", alias="public", description="PEM-encoded root certificate"
    )
