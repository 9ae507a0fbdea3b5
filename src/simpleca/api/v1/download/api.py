"""Leaf artifact download endpoint."""

from fastapi import APIRouter
from fastapi.responses import FileResponse
from loguru import logger

from simpleca.di import LeafIssuerDep

router = APIRouter()

MEDIA_TYPE = "application/x-pem-file"


@router.get("/{file_name}", summary="Download a leaf artifact")
async def download_artifact(file_name: str, issuer: LeafIssuerDep) -> FileResponse:
    """
    Download a certificate, key or full-chain file.

    Only files referenced by the registry are served; anything else is 404.
    """
    path = await issuer.artifact_path(file_name)
    logger.info(f"Serving artifact {file_name}")
    return FileResponse(path, media_type=MEDIA_TYPE, filename=path.name)
