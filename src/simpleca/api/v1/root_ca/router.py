"""Root CA API Routes - Route registration only."""

from fastapi import APIRouter

from simpleca.api.v1 import CA_PREFIX, ROOT_CA_PREFIX
from simpleca.api.v1.root_ca import api

router = APIRouter()
router.include_router(api.router, prefix=ROOT_CA_PREFIX, tags=["root-ca"])
router.include_router(api.legacy_router, prefix=CA_PREFIX, tags=["root-ca"])
