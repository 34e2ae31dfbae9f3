"""API endpoints for the routing service."""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from clmm_router.api.schemas import RouteRequest, RouteResponse
from clmm_router.clmm.quote import SwapMode
from clmm_router.config import RouterConfig
from clmm_router.errors import (
    InvalidSlippageConfig,
    InvalidSnapshot,
    InvalidSwapAmount,
    NoLiquidityAvailable,
)
from clmm_router.execution.envelope import build_execution_envelope
from clmm_router.execution.slippage import SlippagePolicy
from clmm_router.ports.snapshot import InMemorySnapshotProvider
from clmm_router.routing.router import PoolRouter
from clmm_router.routing.types import SwapRequest

logger = structlog.get_logger()

router = APIRouter()


def get_router() -> PoolRouter:
    """Dependency provider for the pool router.

    Override this in tests to inject a router with a custom config:
        app.dependency_overrides[get_router] = lambda: PoolRouter(config=...)
    """
    return PoolRouter(config=RouterConfig.from_env())


@router.post("/route/{mode}", response_model=RouteResponse)
async def route(
    mode: SwapMode,
    body: RouteRequest,
    pool_router: PoolRouter = Depends(get_router),
) -> RouteResponse:
    """Route a swap across the pools in the request body.

    Error Handling:
        - Invalid request schema: 422 (Pydantic)
        - Invalid slippage, zero amount or inconsistent pool data: 422
        - No pool can fill the swap: 404
        - Unexpected failure: logged with traceback, 500
    """
    logger.info(
        "received_route_request",
        mode=mode.value,
        input_mint=body.input_mint,
        output_mint=body.output_mint,
        amount=body.amount,
        pool_count=len(body.pools),
    )

    try:
        bps = (
            body.slippage_bps
            if body.slippage_bps is not None
            else pool_router.config.default_slippage_bps
        )
        policy = SlippagePolicy(bps)
        provider = InMemorySnapshotProvider.from_payloads(
            body.pools, array_size=pool_router.config.tick_array_size
        )
        request = SwapRequest(
            input_mint=body.input_mint,
            output_mint=body.output_mint,
            mode=mode,
            amount=int(body.amount),
            sqrt_price_limit_x64=int(body.sqrt_price_limit_x64),
        )
        selection = await pool_router.route(provider, request)
        envelope = build_execution_envelope(selection, policy)
    except NoLiquidityAvailable as err:
        raise HTTPException(status_code=404, detail=str(err)) from err
    except (InvalidSlippageConfig, InvalidSwapAmount, InvalidSnapshot) as err:
        raise HTTPException(status_code=422, detail=str(err)) from err
    except Exception as err:
        logger.exception("route_error", mode=mode.value, pool_count=len(body.pools))
        raise HTTPException(status_code=500, detail="Internal routing error") from err

    return RouteResponse.from_route(selection, envelope)
