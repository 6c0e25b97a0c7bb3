"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import forest_fires, proxy

router = APIRouter()

router.include_router(forest_fires.router, prefix="/forest-fires", tags=["forest-fires"])
router.include_router(proxy.router, prefix="/proxy", tags=["proxy"])
