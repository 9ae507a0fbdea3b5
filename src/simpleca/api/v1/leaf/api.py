"""
Leaf certificate API endpoints.

Issues, lists and deletes leaf certificates signed by the root CA.
"""

from urllib.parse import quote

from fastapi import APIRouter, Query

from simpleca.api.v1 import DOWNLOAD_PREFIX
from simpleca.api.v1.leaf.request import LeafDeleteRequest, LeafGenerateRequest
from simpleca.api.v1.leaf.response import (
    LeafDeleteResponse,
    LeafGenerateResponse,
    LeafListResponse,
)
from simpleca.di import DeletionCoordinatorDep, LeafIssuerDep
from simpleca.services import DeletionCoordinator

router = APIRouter()


def download_link(file_name: str) -> str:
    """Download URL of a leaf artifact."""
    return f"{DOWNLOAD_PREFIX}/{quote(file_name)}"


@router.post(
    "/generate",
    response_model=LeafGenerateResponse,
    summary="Issue a leaf certificate",
    description="""
    Generate a key pair, build a CSR with the given common name and SANs
    and sign it with the root CA.

    The common name is always the first SAN entry; `sans` adds further
    comma-separated DNS names or IPv4 addresses in the given order.
    """,
)
async def generate_leaf(
    request: LeafGenerateRequest,
    issuer: LeafIssuerDep,
) -> LeafGenerateResponse:
    """
    Issue a leaf certificate.

    Args:
        request: Common name, SANs, validity and key size
        issuer: Leaf issuer service (injected)

    Returns:
        Registry entry with download links
    """
    issuance = await issuer.issue(
        common_name=request.common_name,
        sans=request.sans,
        days=request.days,
        key_size=request.key_size,
    )
    entry = issuance.entry

    return LeafGenerateResponse(
        message="Certificate generated",
        name=entry.name,
        expiry=entry.expiry,
        serial=entry.serial,
        cert_file=entry.cert_file,
        key_file=entry.key_file,
        chain_file=entry.chain_file,
        download_cert=download_link(entry.cert_file),
        download_key=download_link(entry.key_file),
        download_chain=download_link(entry.chain_file) if entry.chain_file else None,
        sans=issuance.sans,
    )


@router.get("/list", response_model=LeafListResponse, summary="List leaf certificates")
async def list_leaves(issuer: LeafIssuerDep) -> LeafListResponse:
    """List registered leaf certificates."""
    return LeafListResponse(certificates=await issuer.list_leaves())


async def _delete(name: str | None, coordinator: DeletionCoordinator) -> LeafDeleteResponse:
    result = await coordinator.delete_by_name(name)
    return LeafDeleteResponse(
        message="Certificate deleted",
        name=result.name,
        details=result.report.to_dict(),
    )


@router.post("/delete", response_model=LeafDeleteResponse, summary="Delete a leaf certificate")
async def delete_leaf(
    coordinator: DeletionCoordinatorDep,
    request: LeafDeleteRequest | None = None,
    name: str | None = Query(None, description="Registry name"),
) -> LeafDeleteResponse:
    """
    Delete a leaf certificate and its files.

    The name is taken from the JSON body, falling back to ``?name=``.
    """
    body_name = request.name if request else None
    return await _delete(body_name or name, coordinator)


@router.get("/delete", response_model=LeafDeleteResponse, include_in_schema=False)
async def delete_leaf_by_query(
    coordinator: DeletionCoordinatorDep,
    name: str | None = Query(None, description="Registry name"),
) -> LeafDeleteResponse:
    """Delete a leaf certificate named by ``?name=``."""
    return await _delete(name, coordinator)
