from fastapi import Depends

from ..providers.base import PriceProvider
from ..providers.prices import get_price_provider
from ..services.catalog_loader import CatalogLoader


def price_provider() -> PriceProvider:
    return get_price_provider()


def catalog_loader(provider: PriceProvider = Depends(price_provider)) -> CatalogLoader:
    # One loader per request: superseding only applies within a single caller
    return CatalogLoader(provider=provider)
