from .catalog_loader import CatalogLoader, CatalogLoadResult

__all__ = ["CatalogLoader", "CatalogLoadResult"]
