from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..config import settings
from ..core.swap.search import search_tokens
from ..services.catalog_loader import CatalogLoader
from .deps import catalog_loader


router = APIRouter()


class TokenOut(BaseModel):
    symbol: str
    price: float
    updated_at: str
    icon_ref: str


class TokenListResponse(BaseModel):
    tokens: List[TokenOut]
    count: int
    query: Optional[str] = None


@router.get("/tokens")
async def list_tokens(
    query: Optional[str] = Query(default=None, description="Case-insensitive symbol substring"),
    limit: int = Query(default=settings.search_result_limit, ge=1, le=100),
    loader: CatalogLoader = Depends(catalog_loader),
) -> TokenListResponse:
    result = await loader.load()
    if result is None:
        raise HTTPException(status_code=503, detail="Catalog load superseded, retry")
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)

    tokens = search_tokens(result.tokens, query, limit) if query else list(result.tokens)
    return TokenListResponse(
        tokens=[
            TokenOut(symbol=t.symbol, price=t.price, updated_at=t.updated_at, icon_ref=t.icon_ref)
            for t in tokens
        ],
        count=len(tokens),
        query=query,
    )
