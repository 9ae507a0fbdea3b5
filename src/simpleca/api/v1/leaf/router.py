"""Leaf Certificate API Routes - Route registration only."""

from fastapi import APIRouter

from simpleca.api.v1 import LEAF_PREFIX
from simpleca.api.v1.leaf import api

router = APIRouter()
router.include_router(api.router, prefix=LEAF_PREFIX, tags=["leaf-certificates"])
