#!/usr/bin/env python3
"""Simulate random trading and liquidity activity against a Radiswap pool.

Seeds a pool, runs a sequence of random swaps and liquidity operations, and
reports how the constant product k and the value of one pool unit evolve.

Usage:
    python scripts/simulate_pool.py --steps 1000 --fee 0.003 --seed 7
"""

import argparse
import logging
import random
import sys
from decimal import Decimal
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from radiswap.errors import RadiswapError  # noqa: E402
from radiswap.ledger import Ledger  # noqa: E402
from radiswap.pool import Radiswap  # noqa: E402

logger = structlog.get_logger()


def run_simulation(steps: int, fee: Decimal, reserve: Decimal, seed: int) -> dict[str, Decimal]:
    """Run `steps` random operations and return summary statistics."""
    rng = random.Random(seed)
    ledger = Ledger()
    account = ledger.new_account()

    # Trader and liquidity provider share one account with deep balances
    supply = reserve * 1000
    token_a = ledger.new_fungible(supply, metadata={"name": "Token A", "symbol": "A"})
    token_b = ledger.new_fungible(supply, metadata={"name": "Token B", "symbol": "B"})
    resource_a, resource_b = token_a.resource_address, token_b.resource_address
    ledger.deposit(account, token_a)
    ledger.deposit(account, token_b)

    pool, pool_units = Radiswap.instantiate(
        ledger,
        ledger.withdraw(account, resource_a, reserve),
        ledger.withdraw(account, resource_b, reserve),
        fee,
    )
    ledger.deposit(account, pool_units)
    initial_k = pool.state().k
    counts = {"swap": 0, "add": 0, "remove": 0, "rejected": 0}

    for step in range(steps):
        action = rng.choices(["swap", "add", "remove"], weights=[8, 1, 1])[0]
        reserve_a, reserve_b = pool.reserves
        try:
            with ledger.transaction():
                if action == "swap":
                    resource, depth = rng.choice([(resource_a, reserve_a), (resource_b, reserve_b)])
                    amount = (depth * Decimal(rng.uniform(0.001, 0.1))).quantize(Decimal("0.000001"))
                    ledger.deposit(account, pool.swap(ledger.withdraw(account, resource, amount)))
                elif action == "add":
                    scale = Decimal(rng.uniform(0.01, 0.2))
                    amount_a = (reserve_a * scale).quantize(Decimal("0.000001"))
                    amount_b = (reserve_b * scale * Decimal(rng.uniform(0.9, 1.1))).quantize(
                        Decimal("0.000001")
                    )
                    for bucket in pool.add_liquidity(
                        ledger.withdraw(account, resource_a, amount_a),
                        ledger.withdraw(account, resource_b, amount_b),
                    ):
                        ledger.deposit(account, bucket)
                else:
                    held = ledger.balances(account).get(pool.pool_units_resource_address, Decimal(0))
                    units = (held * Decimal(rng.uniform(0.01, 0.2))).quantize(Decimal("0.000001"))
                    for bucket in pool.remove_liquidity(
                        ledger.withdraw(account, pool.pool_units_resource_address, units)
                    ):
                        ledger.deposit(account, bucket)
            counts[action] += 1
        except RadiswapError as err:
            counts["rejected"] += 1
            logger.debug("step_rejected", step=step, action=action, error=type(err).__name__)

    state = pool.state()
    return {
        "swaps": Decimal(counts["swap"]),
        "adds": Decimal(counts["add"]),
        "removes": Decimal(counts["remove"]),
        "rejected": Decimal(counts["rejected"]),
        "reserve_a": state.reserve_a,
        "reserve_b": state.reserve_b,
        "pool_unit_supply": state.pool_unit_supply,
        "k_growth": state.k / initial_k,
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Simulate activity against a Radiswap pool")
    parser.add_argument("--steps", type=int, default=1000, help="Operations to run (default: 1000)")
    parser.add_argument("--fee", type=Decimal, default=Decimal("0.003"), help="Fee rate")
    parser.add_argument(
        "--reserve", type=Decimal, default=Decimal("1000"), help="Seed reserve on each side"
    )
    parser.add_argument("--seed", type=int, default=0, help="Random seed")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )

    if not Decimal(0) <= args.fee <= Decimal(1):
        print(f"Error: fee must be between 0 and 1, got {args.fee}")
        return 1

    summary = run_simulation(args.steps, args.fee, args.reserve, args.seed)

    print("=" * 60)
    print("Radiswap pool simulation")
    print("=" * 60)
    for key, value in summary.items():
        print(f"{key:>18}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
