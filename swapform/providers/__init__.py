from .base import PriceProvider, Provider
from .prices import PricesProvider, get_price_provider

__all__ = ["Provider", "PriceProvider", "PricesProvider", "get_price_provider"]
