"""Download API Routes - Route registration only."""

from fastapi import APIRouter

from simpleca.api.v1 import DOWNLOAD_PREFIX
from simpleca.api.v1.download import api

router = APIRouter()
router.include_router(api.router, prefix=DOWNLOAD_PREFIX, tags=["downloads"])
