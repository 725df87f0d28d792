from abc import ABC, abstractmethod
from typing import Any, Dict


class Provider(ABC):
    """Base provider interface"""

    name: str
    timeout_s: float = 10

    @abstractmethod
    async def ready(self) -> bool:
        """Check if provider is ready to serve requests"""
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """Return provider health status"""
        pass


class PriceProvider(Provider):
    """Provider for per-currency price records"""

    @abstractmethod
    async def get_price_records(self) -> Any:
        """Return the decoded price payload, expected to be a list of
        ``{currency, date, price}`` records"""
        pass
