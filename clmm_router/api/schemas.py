"""Request and response models for the routing API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from clmm_router.execution.envelope import ExecutionEnvelope
from clmm_router.models.pool_data import PoolBundlePayload
from clmm_router.models.types import U64, U128, Pubkey
from clmm_router.routing.types import RouteSelection


class RouteRequest(BaseModel):
    """Swap to route, with the candidate pools to route across."""

    input_mint: Pubkey = Field(alias="inputMint")
    output_mint: Pubkey = Field(alias="outputMint")
    amount: U64
    slippage_bps: int | None = Field(
        default=None,
        alias="slippageBps",
        description="Tolerance in bps; the configured default when omitted.",
    )
    sqrt_price_limit_x64: U128 = Field(default="0", alias="sqrtPriceLimitX64")
    pools: list[PoolBundlePayload] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    amount_in: U64 = Field(alias="amountIn")
    amount_out: U64 = Field(alias="amountOut")
    fee_paid: U64 = Field(alias="feePaid")
    sqrt_price_after: U128 = Field(alias="sqrtPriceAfter")
    tick_after: int = Field(alias="tickAfter")
    price_impact_bps: int = Field(alias="priceImpactBps")
    crossed_tick_array_starts: list[int] = Field(alias="crossedTickArrayStarts")

    model_config = {"populate_by_name": True}


class EnvelopeResponse(BaseModel):
    pool_id: str = Field(alias="poolId")
    exact_in: bool = Field(alias="exactIn")
    a_to_b: bool = Field(alias="aToB")
    amount: U64
    threshold_amount: U64 = Field(alias="thresholdAmount")
    sqrt_price_limit_x64: U128 = Field(alias="sqrtPriceLimitX64")
    slippage_bps: int = Field(alias="slippageBps")

    model_config = {"populate_by_name": True}


class ExclusionResponse(BaseModel):
    pool_id: str = Field(alias="poolId")
    reason: str
    detail: str | None = None

    model_config = {"populate_by_name": True}


class RouteResponse(BaseModel):
    """Selected pool, its quote and execution envelope, plus diagnostics."""

    pool_id: str = Field(alias="poolId")
    quote: QuoteResponse
    envelope: EnvelopeResponse
    execution_rate: str = Field(alias="executionRate")
    candidates_considered: int = Field(alias="candidatesConsidered")
    exclusions: list[ExclusionResponse] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_route(cls, selection: RouteSelection, envelope: ExecutionEnvelope) -> RouteResponse:
        quote = selection.quote
        return cls(
            pool_id=selection.pool_id,
            quote=QuoteResponse(
                amount_in=str(quote.amount_in),
                amount_out=str(quote.amount_out),
                fee_paid=str(quote.fee_paid),
                sqrt_price_after=str(quote.sqrt_price_after),
                tick_after=quote.tick_after,
                price_impact_bps=quote.price_impact_bps,
                crossed_tick_array_starts=list(quote.crossed_tick_array_starts),
            ),
            envelope=EnvelopeResponse(
                pool_id=envelope.pool_id,
                exact_in=envelope.is_exact_in,
                a_to_b=envelope.direction.a_to_b,
                amount=str(envelope.amount),
                threshold_amount=str(envelope.threshold_amount),
                sqrt_price_limit_x64=str(envelope.sqrt_price_limit_x64),
                slippage_bps=envelope.slippage_bps,
            ),
            execution_rate=str(selection.execution_rate()),
            candidates_considered=selection.candidates_considered,
            exclusions=[
                ExclusionResponse(pool_id=e.pool_id, reason=e.reason.value, detail=e.detail)
                for e in selection.exclusions
            ],
        )


__all__ = [
    "RouteRequest",
    "RouteResponse",
    "QuoteResponse",
    "EnvelopeResponse",
    "ExclusionResponse",
]
