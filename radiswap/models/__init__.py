"""Pydantic models for pool state and HTTP payloads."""

from radiswap.models.pool import (
    AccountResponse,
    AddLiquidityRequest,
    AddLiquidityResponse,
    CreateResourceRequest,
    CreateResourceResponse,
    ErrorResponse,
    InstantiatePoolRequest,
    InstantiatePoolResponse,
    PoolState,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ResourceAmount,
    SwapRequest,
    SwapResponse,
)

__all__ = [
    "PoolState",
    "ResourceAmount",
    "ErrorResponse",
    "AccountResponse",
    "CreateResourceRequest",
    "CreateResourceResponse",
    "InstantiatePoolRequest",
    "InstantiatePoolResponse",
    "SwapRequest",
    "SwapResponse",
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
]
