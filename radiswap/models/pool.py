"""Pydantic models for pool state and the HTTP service payloads."""

from decimal import Decimal

from pydantic import BaseModel, Field

from radiswap.constants import DIVISIBILITY_MAXIMUM
from radiswap.math.safe_decimal import D
from radiswap.models.types import (
    AccountId,
    Amount,
    ComponentAddress,
    FeeRate,
    ResourceAddress,
)


class PoolState(BaseModel):
    """Snapshot of a pool's reserves and pool-unit supply."""

    resource_a: ResourceAddress
    resource_b: ResourceAddress
    reserve_a: Amount
    reserve_b: Amount
    fee: FeeRate
    pool_units_resource_address: ResourceAddress
    pool_unit_supply: Amount

    @property
    def k(self) -> Decimal:
        """The constant product invariant."""
        return (D(self.reserve_a) * self.reserve_b).value


class ResourceAmount(BaseModel):
    """A resource and an amount of it."""

    resource: ResourceAddress
    amount: Amount


class ErrorResponse(BaseModel):
    """Error payload returned for rejected requests."""

    error: str = Field(description="Error class name, e.g. 'UnsupportedAsset'")
    detail: str


# =============================================================================
# Accounts and resources
# =============================================================================


class AccountResponse(BaseModel):
    """An account and its non-zero balances."""

    account: AccountId
    balances: dict[str, Amount] = Field(default_factory=dict)


class CreateResourceRequest(BaseModel):
    """Create a fungible resource and deposit its supply into an account."""

    account: AccountId
    initial_supply: Amount
    divisibility: int = Field(default=DIVISIBILITY_MAXIMUM, ge=0, le=DIVISIBILITY_MAXIMUM)
    name: str | None = None
    symbol: str | None = None


class CreateResourceResponse(BaseModel):
    resource: ResourceAddress
    initial_supply: Amount


# =============================================================================
# Pools
# =============================================================================


class InstantiatePoolRequest(BaseModel):
    """Seed a new pool from an account's balances."""

    account: AccountId
    deposit_a: ResourceAmount
    deposit_b: ResourceAmount
    fee: FeeRate


class InstantiatePoolResponse(BaseModel):
    component: ComponentAddress
    pool_units: ResourceAmount
    state: PoolState


class SwapRequest(BaseModel):
    account: AccountId
    input: ResourceAmount


class SwapResponse(BaseModel):
    output: ResourceAmount
    state: PoolState


class AddLiquidityRequest(BaseModel):
    account: AccountId
    deposit_a: ResourceAmount
    deposit_b: ResourceAmount


class AddLiquidityResponse(BaseModel):
    leftover_a: ResourceAmount
    leftover_b: ResourceAmount
    pool_units: ResourceAmount
    state: PoolState


class RemoveLiquidityRequest(BaseModel):
    """Redeem pool units held by an account.

    `pool_units.resource` must be the pool's unit resource; anything else is
    rejected with WrongToken.
    """

    account: AccountId
    pool_units: ResourceAmount


class RemoveLiquidityResponse(BaseModel):
    output_a: ResourceAmount
    output_b: ResourceAmount
    state: PoolState
