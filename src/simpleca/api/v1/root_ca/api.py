"""
Root CA API endpoints.

Handles root CA status, generation, import and certificate download.
Errors raised by the Root CA store are rendered by the global CAError
handler.
"""

from fastapi import APIRouter, Query, status
from fastapi.responses import FileResponse
from loguru import logger

from simpleca.api.v1 import ROOT_CA_PREFIX
from simpleca.api.v1.root_ca.request import RootCAGenerateRequest, RootCAUploadRequest
from simpleca.api.v1.root_ca.response import (
    RootCAGenerateResponse,
    RootCAStatusResponse,
    RootCAUploadResponse,
)
from simpleca.di import RootCAStoreDep
from simpleca.infrastructure.repositories import CertificateFormat

router = APIRouter()

# Mounted under /api/ca for clients of the older status endpoint
legacy_router = APIRouter()

MEDIA_TYPES: dict[str, str] = {
    "pem": "application/x-pem-file",
    "der": "application/pkix-cert",
}

FORCE_VALUES = {"1", "true"}


def is_forced(value: str | None) -> bool:
    """Query flag ``force`` accepts ``1`` or ``true``."""
    return (value or "").strip().lower() in FORCE_VALUES


async def _status(root_ca: RootCAStoreDep) -> RootCAStatusResponse:
    current = await root_ca.status()
    if not current.exists:
        return RootCAStatusResponse(exists=False)

    return RootCAStatusResponse(
        exists=True,
        common_name=current.common_name,
        not_after=current.not_after,
        download_pem=f"{ROOT_CA_PREFIX}/download?format=pem",
        download_der=f"{ROOT_CA_PREFIX}/download?format=der",
    )


@router.get(
    "/exists",
    response_model=RootCAStatusResponse,
    response_model_exclude_none=True,
    summary="Check whether a root CA exists",
)
@router.get(
    "/exsists",
    response_model=RootCAStatusResponse,
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def root_ca_exists(root_ca: RootCAStoreDep) -> RootCAStatusResponse:
    """
    Report whether a root CA key pair is stored.

    Returns:
        ``exists`` plus certificate metadata when a CA is present
    """
    return await _status(root_ca)


@legacy_router.get(
    "/status",
    response_model=RootCAStatusResponse,
    response_model_exclude_none=True,
    summary="Root CA status",
)
async def root_ca_status(root_ca: RootCAStoreDep) -> RootCAStatusResponse:
    """Same as ``/api/root-ca/exists``."""
    return await _status(root_ca)


@router.post(
    "/generate",
    response_model=RootCAGenerateResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a new root CA",
    description="""
    Generate a fresh RSA key pair and a self-signed CA certificate.

    An existing root CA is only replaced when `force=1` (or `force=true`)
    is passed as query parameter; otherwise the request fails with 409.
    """,
)
async def generate_root_ca(
    root_ca: RootCAStoreDep,
    request: RootCAGenerateRequest | None = None,
    force: str | None = Query(None, description="Replace an existing root CA"),
) -> RootCAGenerateResponse:
    """
    Generate the root CA.

    Args:
        root_ca: Root CA store (injected)
        request: Generation parameters (all optional)
        force: Overwrite flag

    Returns:
        Identity metadata of the generated CA
    """
    request = request or RootCAGenerateRequest()
    info = await root_ca.generate(
        common_name=request.common_name,
        days=request.days,
        key_size=request.key_size,
        algorithm=request.algorithm,
        force=is_forced(force),
    )

    return RootCAGenerateResponse(
        message="Root CA generated",
        common_name=info.common_name,
        days=info.days,
        key_size=info.key_size,
        algorithm=info.algorithm,
        serial=info.serial,
        not_after=info.not_after,
    )


@router.post(
    "/upload",
    response_model=RootCAUploadResponse,
    summary="Import an existing root CA",
)
@router.post("/import", response_model=RootCAUploadResponse, include_in_schema=False)
async def upload_root_ca(
    request: RootCAUploadRequest,
    root_ca: RootCAStoreDep,
) -> RootCAUploadResponse:
    """
    Import a PEM key pair, replacing any stored root CA.

    Args:
        request: PEM private key and certificate
        root_ca: Root CA store (injected)
    """
    await root_ca.import_pair(request.private_key, request.certificate)
    return RootCAUploadResponse(message="Root CA uploaded")


@router.get("/download", summary="Download the root certificate")
async def download_root_ca(
    root_ca: RootCAStoreDep,
    fmt: CertificateFormat = Query("pem", alias="format"),
) -> FileResponse:
    """
    Download the root certificate as PEM or DER.

    Args:
        root_ca: Root CA store (injected)
        fmt: ``pem`` or ``der``
    """
    path = await root_ca.certificate_file(fmt)
    logger.info(f"Serving root certificate ({fmt})")
    return FileResponse(path, media_type=MEDIA_TYPES[fmt], filename=path.name)
