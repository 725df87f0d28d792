from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..services.catalog_loader import CatalogLoader
from .deps import catalog_loader

router = APIRouter()


@router.get("/healthz")
async def health_check(loader: CatalogLoader = Depends(catalog_loader)) -> Dict[str, Any]:
    """Health check endpoint that verifies the price source"""
    provider_status = {loader.provider.name: await loader.provider.health_check()}

    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] == "healthy"
    )

    return {
        "status": "healthy" if available_providers == len(provider_status) else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status)
    }
