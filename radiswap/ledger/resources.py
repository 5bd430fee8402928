"""Fungible resources, buckets and badge proofs.

A Bucket is a transient container of one resource, moved between vaults
within a transaction. Putting a bucket somewhere drains it, so the same
amount can never be deposited twice.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

import structlog

from radiswap.errors import InvalidAmount, ResourceMismatch, Unauthorized
from radiswap.math.decimal_utils import fits_divisibility, to_decimal
from radiswap.math.safe_decimal import D, Underflow

logger = structlog.get_logger()


def validate_amount(amount: Decimal | int | str, divisibility: int) -> Decimal:
    """Parse and validate an amount against a resource's divisibility.

    Raises:
        InvalidAmount: If amount is negative, not a number, or has more
            fractional digits than the divisibility allows
    """
    try:
        value = to_decimal(amount)
    except (TypeError, ValueError) as err:
        raise InvalidAmount(str(err)) from err
    if value < 0:
        raise InvalidAmount(f"Amount cannot be negative: {value}")
    if not fits_divisibility(value, divisibility):
        raise InvalidAmount(f"Amount {value} exceeds divisibility {divisibility}")
    return value


@dataclass(frozen=True)
class Proof:
    """Evidence that the presenter holds a non-zero amount of a resource."""

    resource_address: str
    amount: Decimal


class Bucket:
    """A transient, movable amount of a single resource."""

    __slots__ = ("_resource_address", "_divisibility", "_amount")

    def __init__(self, resource_address: str, amount: Decimal, divisibility: int) -> None:
        self._resource_address = resource_address
        self._divisibility = divisibility
        self._amount = validate_amount(amount, divisibility)

    @property
    def resource_address(self) -> str:
        return self._resource_address

    @property
    def divisibility(self) -> int:
        return self._divisibility

    @property
    def amount(self) -> Decimal:
        return self._amount

    def is_empty(self) -> bool:
        return self._amount == 0

    def take(self, amount: Decimal | int | str) -> Bucket:
        """Split `amount` off into a new bucket.

        Raises:
            InvalidAmount: If amount is malformed or exceeds the bucket
        """
        value = validate_amount(amount, self._divisibility)
        try:
            remaining = (D(self._amount) - value).value
        except Underflow as err:
            raise InvalidAmount(
                f"Cannot take {value} from bucket holding {self._amount}"
            ) from err
        self._amount = remaining
        return Bucket(self._resource_address, value, self._divisibility)

    def put(self, other: Bucket) -> None:
        """Merge another bucket of the same resource into this one.

        Raises:
            ResourceMismatch: If the resources differ
        """
        if other.resource_address != self._resource_address:
            raise ResourceMismatch(
                f"Cannot put {other.resource_address} into bucket of {self._resource_address}"
            )
        self._amount = (D(self._amount) + other.drain()).value

    def drain(self) -> Decimal:
        """Empty the bucket, returning the amount it held."""
        amount = self._amount
        self._amount = Decimal(0)
        return amount

    def __repr__(self) -> str:
        return f"Bucket({self._resource_address!r}, {self._amount})"


@dataclass
class ResourceManager:
    """Issuer of a fungible resource.

    Tracks total supply; mint and burn require a proof of the configured
    badge resource when one is set, and are disabled otherwise.
    """

    address: str
    divisibility: int
    metadata: dict[str, str] = field(default_factory=dict)
    total_supply: Decimal = Decimal(0)
    # Badge resource whose proof authorizes mint/burn (None = fixed supply)
    mint_badge: str | None = None
    burn_badge: str | None = None

    def _require(self, badge: str | None, proof: Proof | None, action: str) -> None:
        if badge is None:
            raise Unauthorized(f"Resource {self.address} is not {action}able")
        if proof is None or proof.resource_address != badge or proof.amount <= 0:
            raise Unauthorized(f"{action.capitalize()} of {self.address} requires badge {badge}")

    def issue(self, amount: Decimal | int | str) -> Bucket:
        """Create the initial supply. Only the ledger calls this at creation."""
        bucket = Bucket(self.address, to_decimal(amount), self.divisibility)
        self.total_supply = (D(self.total_supply) + bucket.amount).value
        return bucket

    def mint(self, amount: Decimal | int | str, proof: Proof | None = None) -> Bucket:
        """Mint new units of this resource.

        Raises:
            Unauthorized: If the proof does not match the mint badge
            InvalidAmount: If amount is malformed
        """
        self._require(self.mint_badge, proof, "mint")
        bucket = Bucket(self.address, validate_amount(amount, self.divisibility), self.divisibility)
        self.total_supply = (D(self.total_supply) + bucket.amount).value
        logger.debug("resource_minted", resource=self.address, amount=str(bucket.amount))
        return bucket

    def burn(self, bucket: Bucket, proof: Proof | None = None) -> None:
        """Burn a bucket of this resource, shrinking total supply.

        Raises:
            Unauthorized: If the proof does not match the burn badge
            ResourceMismatch: If the bucket holds another resource
        """
        self._require(self.burn_badge, proof, "burn")
        if bucket.resource_address != self.address:
            raise ResourceMismatch(f"Cannot burn {bucket.resource_address} as {self.address}")
        amount = bucket.drain()
        self.total_supply = (D(self.total_supply) - amount).value
        logger.debug("resource_burned", resource=self.address, amount=str(amount))
