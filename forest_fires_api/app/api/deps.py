"""
Request dependencies.

The record store and the proxy service are created once when the
application starts (see ``main.create_app``) and kept on
``app.state``; these dependencies hand them to the route handlers.

Usage::

    @router.get("")
    async def list_records(service: ForestFireService = Depends(get_forest_fire_service)):
        ...
"""

from fastapi import Depends, Request

from forest_fires_api.app.core.config import Settings
from forest_fires_api.app.core.db import ForestFireStore
from forest_fires_api.app.services.forest_fire_service import ForestFireService
from forest_fires_api.app.services.proxy_service import ProxyService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ForestFireStore:
    return request.app.state.store


def get_forest_fire_service(store: ForestFireStore = Depends(get_store)) -> ForestFireService:
    return ForestFireService(store)


def get_proxy_service(request: Request) -> ProxyService:
    return request.app.state.proxy_service
