"""Vaults: persistent balance holders for a single resource."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import Decimal

from radiswap.errors import InsufficientBalance, ResourceMismatch, Unauthorized
from radiswap.ledger.resources import Bucket, Proof, validate_amount
from radiswap.math.safe_decimal import D


class Vault:
    """Holds a non-negative balance of one resource.

    Vaults are created through Ledger.new_vault so the ledger can restore
    their balances when a transaction aborts.
    """

    __slots__ = ("_resource_address", "_divisibility", "_amount")

    def __init__(self, resource_address: str, divisibility: int) -> None:
        self._resource_address = resource_address
        self._divisibility = divisibility
        self._amount = Decimal(0)

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

    def put(self, bucket: Bucket) -> None:
        """Deposit the whole bucket, draining it.

        Raises:
            ResourceMismatch: If the bucket holds another resource
        """
        if bucket.resource_address != self._resource_address:
            raise ResourceMismatch(
                f"Cannot put {bucket.resource_address} into vault of {self._resource_address}"
            )
        self._amount = (D(self._amount) + bucket.drain()).value

    def take(self, amount: Decimal | int | str) -> Bucket:
        """Withdraw `amount` into a new bucket.

        Raises:
            InvalidAmount: If amount is malformed
            InsufficientBalance: If amount exceeds the balance
        """
        value = validate_amount(amount, self._divisibility)
        if value > self._amount:
            raise InsufficientBalance(
                f"Cannot take {value} of {self._resource_address}: vault holds {self._amount}"
            )
        self._amount = (D(self._amount) - value).value
        return Bucket(self._resource_address, value, self._divisibility)

    def take_all(self) -> Bucket:
        return self.take(self._amount)

    @contextmanager
    def authorize(self) -> Iterator[Proof]:
        """Yield a proof of the held resource for the duration of the block.

        Raises:
            Unauthorized: If the vault is empty
        """
        if self.is_empty():
            raise Unauthorized(f"Vault of {self._resource_address} is empty")
        yield Proof(self._resource_address, self._amount)

    def _restore(self, amount: Decimal) -> None:
        self._amount = amount

    def __repr__(self) -> str:
        return f"Vault({self._resource_address!r}, {self._amount})"
