from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..config import settings
from ..core.swap.amounts import parse_amount, validate_amount
from ..core.swap.catalog import find_token_by_symbol, normalize_symbol
from ..core.swap.errors import AmountValidationError, SameTokenError
from ..core.swap.formatting import format_amount
from ..core.swap.quote import build_quote, format_rate_line, require_distinct_tokens
from ..services.catalog_loader import CatalogLoader
from .deps import catalog_loader


router = APIRouter(prefix="/swap")


class AmountValidationRequest(BaseModel):
    amount: str = Field(description="Amount text exactly as typed")


class AmountValidationResponse(BaseModel):
    valid: bool
    value: Optional[float] = None
    error: Optional[str] = None
    message: Optional[str] = None


class SwapQuoteRequest(BaseModel):
    amount: str = Field(description="Amount text, validated like form input")
    from_symbol: str = Field(description="Symbol of the token being sent")
    to_symbol: str = Field(description="Symbol of the token being received")
    is_send_amount: bool = Field(default=True, description="True if amount is the send side")


class SwapQuoteResponse(BaseModel):
    from_symbol: str
    to_symbol: str
    rate: float
    send_amount: float
    receive_amount: float
    send_amount_formatted: str
    receive_amount_formatted: str
    rate_line: str


@router.post("/validate")
async def post_validate_amount(req: AmountValidationRequest) -> AmountValidationResponse:
    result = validate_amount(req.amount, settings.max_amount_input_length)
    return AmountValidationResponse(
        valid=result.ok,
        value=result.value,
        error=result.error,
        message=result.message,
    )


@router.post("/quote")
async def post_swap_quote(
    req: SwapQuoteRequest,
    loader: CatalogLoader = Depends(catalog_loader),
) -> SwapQuoteResponse:
    try:
        amount = parse_amount(req.amount, settings.max_amount_input_length)
    except AmountValidationError as e:
        raise HTTPException(status_code=422, detail={"error": e.kind, "message": e.message})

    result = await loader.load()
    if result is None:
        raise HTTPException(status_code=503, detail="Catalog load superseded, retry")
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)

    from_token = find_token_by_symbol(result.tokens, normalize_symbol(req.from_symbol))
    to_token = find_token_by_symbol(result.tokens, normalize_symbol(req.to_symbol))
    missing = [s for s, t in ((req.from_symbol, from_token), (req.to_symbol, to_token)) if t is None]
    if missing:
        raise HTTPException(status_code=404, detail=f"Unknown token: {', '.join(missing)}")

    try:
        require_distinct_tokens(from_token, to_token)
    except SameTokenError as e:
        raise HTTPException(status_code=409, detail=str(e))

    quote = build_quote(amount, from_token, to_token, req.is_send_amount)
    if quote is None:
        raise HTTPException(status_code=422, detail="No quote available for this pair")

    digits = settings.amount_fraction_digits
    return SwapQuoteResponse(
        from_symbol=from_token.symbol,
        to_symbol=to_token.symbol,
        rate=quote.rate,
        send_amount=quote.send_amount,
        receive_amount=quote.receive_amount,
        send_amount_formatted=format_amount(quote.send_amount, digits),
        receive_amount_formatted=format_amount(quote.receive_amount, digits),
        rate_line=format_rate_line(quote, from_token.symbol, to_token.symbol, settings.rate_fraction_digits),
    )
