"""API endpoints for Radiswap pools."""

import structlog
from fastapi import APIRouter, Depends

from radiswap.errors import UnknownComponent
from radiswap.ledger.resources import Bucket
from radiswap.ledger.runtime import Ledger
from radiswap.models.pool import (
    AccountResponse,
    AddLiquidityRequest,
    AddLiquidityResponse,
    CreateResourceRequest,
    CreateResourceResponse,
    InstantiatePoolRequest,
    InstantiatePoolResponse,
    PoolState,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ResourceAmount,
    SwapRequest,
    SwapResponse,
)
from radiswap.pool import Radiswap, instantiate_radiswap

logger = structlog.get_logger()

router = APIRouter()

_default_ledger = Ledger()


def get_ledger() -> Ledger:
    """Dependency provider for the ledger instance.

    Override this in tests to inject a fresh ledger:
        app.dependency_overrides[get_ledger] = lambda: Ledger()
    """
    return _default_ledger


def _pool(ledger: Ledger, address: str) -> Radiswap:
    component = ledger.component(address)
    if not isinstance(component, Radiswap):
        raise UnknownComponent(f"Component {address} is not a Radiswap pool")
    return component


def _resource_amount(bucket: Bucket) -> ResourceAmount:
    return ResourceAmount(resource=bucket.resource_address, amount=bucket.amount)


# =============================================================================
# Accounts and resources
# =============================================================================


@router.post("/accounts", status_code=201)
def create_account(ledger: Ledger = Depends(get_ledger)) -> AccountResponse:
    """Create an empty account."""
    with ledger.transaction():
        account = ledger.new_account()
    logger.info("account_created", account=account)
    return AccountResponse(account=account)


@router.get("/accounts/{account}")
def get_account(account: str, ledger: Ledger = Depends(get_ledger)) -> AccountResponse:
    """Balances held by an account."""
    with ledger.read():
        balances = ledger.balances(account)
    return AccountResponse(account=account, balances=balances)


@router.post("/resources", status_code=201)
def create_resource(
    request: CreateResourceRequest,
    ledger: Ledger = Depends(get_ledger),
) -> CreateResourceResponse:
    """Create a fixed-supply fungible resource owned by an account."""
    metadata = {
        key: value
        for key, value in (("name", request.name), ("symbol", request.symbol))
        if value is not None
    }
    with ledger.transaction():
        bucket = ledger.new_fungible(
            request.initial_supply,
            divisibility=request.divisibility,
            metadata=metadata,
        )
        resource = bucket.resource_address
        ledger.deposit(request.account, bucket)
    return CreateResourceResponse(resource=resource, initial_supply=request.initial_supply)


# =============================================================================
# Pools
# =============================================================================


@router.post("/pools", status_code=201)
def create_pool(
    request: InstantiatePoolRequest,
    ledger: Ledger = Depends(get_ledger),
) -> InstantiatePoolResponse:
    """Instantiate a pool seeded from an account and register it."""
    with ledger.transaction():
        bucket_a = ledger.withdraw(
            request.account, request.deposit_a.resource, request.deposit_a.amount
        )
        bucket_b = ledger.withdraw(
            request.account, request.deposit_b.resource, request.deposit_b.amount
        )
        component, pool_units = instantiate_radiswap(ledger, bucket_a, bucket_b, request.fee)
        units = _resource_amount(pool_units)
        ledger.deposit(request.account, pool_units)
        state = _pool(ledger, component).state()
    return InstantiatePoolResponse(component=component, pool_units=units, state=state)


@router.get("/pools/{component}")
def get_pool(component: str, ledger: Ledger = Depends(get_ledger)) -> PoolState:
    """Current pool state."""
    with ledger.read():
        return _pool(ledger, component).state()


@router.post("/pools/{component}/swap")
def swap(
    component: str,
    request: SwapRequest,
    ledger: Ledger = Depends(get_ledger),
) -> SwapResponse:
    """Swap an account's deposit of one pool resource for the other."""
    with ledger.transaction():
        pool = _pool(ledger, component)
        bucket = ledger.withdraw(request.account, request.input.resource, request.input.amount)
        output = pool.swap(bucket)
        result = _resource_amount(output)
        ledger.deposit(request.account, output)
        state = pool.state()
    return SwapResponse(output=result, state=state)


@router.post("/pools/{component}/add-liquidity")
def add_liquidity(
    component: str,
    request: AddLiquidityRequest,
    ledger: Ledger = Depends(get_ledger),
) -> AddLiquidityResponse:
    """Deposit both resources; leftovers and minted units go back to the account."""
    with ledger.transaction():
        pool = _pool(ledger, component)
        bucket_a = ledger.withdraw(
            request.account, request.deposit_a.resource, request.deposit_a.amount
        )
        bucket_b = ledger.withdraw(
            request.account, request.deposit_b.resource, request.deposit_b.amount
        )
        leftover_a, leftover_b, pool_units = pool.add_liquidity(bucket_a, bucket_b)
        response = AddLiquidityResponse(
            leftover_a=_resource_amount(leftover_a),
            leftover_b=_resource_amount(leftover_b),
            pool_units=_resource_amount(pool_units),
            state=pool.state(),
        )
        for bucket in (leftover_a, leftover_b, pool_units):
            ledger.deposit(request.account, bucket)
    return response


@router.post("/pools/{component}/remove-liquidity")
def remove_liquidity(
    component: str,
    request: RemoveLiquidityRequest,
    ledger: Ledger = Depends(get_ledger),
) -> RemoveLiquidityResponse:
    """Redeem an account's pool units for both reserves."""
    with ledger.transaction():
        pool = _pool(ledger, component)
        pool_units = ledger.withdraw(
            request.account, request.pool_units.resource, request.pool_units.amount
        )
        output_a, output_b = pool.remove_liquidity(pool_units)
        response = RemoveLiquidityResponse(
            output_a=_resource_amount(output_a),
            output_b=_resource_amount(output_b),
            state=pool.state(),
        )
        ledger.deposit(request.account, output_a)
        ledger.deposit(request.account, output_b)
    return response
