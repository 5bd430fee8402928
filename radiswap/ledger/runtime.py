"""In-memory ledger runtime.

Stands in for the host ledger a pool runs on: it issues resources, hands
out vaults, registers components under addresses, keeps account balances,
and provides the all-or-nothing transaction boundary.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import structlog

from radiswap.constants import DIVISIBILITY_MAXIMUM
from radiswap.errors import UnknownAccount, UnknownComponent, UnknownResource
from radiswap.ledger.resources import Bucket, ResourceManager
from radiswap.ledger.vault import Vault

logger = structlog.get_logger()


@dataclass
class _Snapshot:
    """Ledger state captured at transaction entry."""

    resources: dict[str, ResourceManager]
    supplies: dict[str, Decimal]
    components: dict[str, Any]
    accounts: dict[str, dict[str, Vault]]
    vaults: list[Vault]
    balances: list[Decimal]
    counter: int


class Ledger:
    """Registry of resources, components and accounts.

    All addresses are generated from a single counter, so a fresh ledger
    always hands out the same addresses in the same order.
    """

    def __init__(self) -> None:
        self._resources: dict[str, ResourceManager] = {}
        self._components: dict[str, Any] = {}
        self._accounts: dict[str, dict[str, Vault]] = {}
        self._vaults: list[Vault] = []
        self._counter = 0
        self._lock = threading.RLock()

    def _next_address(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}_{self._counter:040x}"

    # --- Resources ---

    def new_fungible(
        self,
        initial_supply: Decimal | int | str,
        *,
        divisibility: int = DIVISIBILITY_MAXIMUM,
        metadata: dict[str, str] | None = None,
        mint_badge: str | None = None,
        burn_badge: str | None = None,
    ) -> Bucket:
        """Create a fungible resource and return its initial supply.

        Args:
            initial_supply: Amount issued to the caller
            divisibility: Fractional digits allowed (0 = indivisible)
            metadata: Descriptive fields such as name and symbol
            mint_badge: Badge resource authorizing later mints
            burn_badge: Badge resource authorizing burns

        Returns:
            Bucket holding the initial supply
        """
        address = self._next_address("resource")
        manager = ResourceManager(
            address=address,
            divisibility=divisibility,
            metadata=dict(metadata or {}),
            mint_badge=mint_badge,
            burn_badge=burn_badge,
        )
        bucket = manager.issue(initial_supply)
        self._resources[address] = manager
        logger.info(
            "resource_created",
            resource=address,
            name=manager.metadata.get("name"),
            initial_supply=str(bucket.amount),
        )
        return bucket

    def resource_manager(self, address: str) -> ResourceManager:
        """Look up a resource by address.

        Raises:
            UnknownResource: If no resource has this address
        """
        try:
            return self._resources[address]
        except KeyError:
            raise UnknownResource(f"Unknown resource: {address}") from None

    def new_vault(self, resource_address: str) -> Vault:
        """Create an empty vault tracked by this ledger."""
        manager = self.resource_manager(resource_address)
        vault = Vault(resource_address, manager.divisibility)
        self._vaults.append(vault)
        return vault

    def vault_with_bucket(self, bucket: Bucket) -> Vault:
        """Create a vault and deposit `bucket` into it."""
        vault = self.new_vault(bucket.resource_address)
        vault.put(bucket)
        return vault

    # --- Components ---

    def globalize(self, component: Any) -> str:
        """Register a component and return its address."""
        address = self._next_address("component")
        self._components[address] = component
        logger.info("component_globalized", component=address, kind=type(component).__name__)
        return address

    def component(self, address: str) -> Any:
        """Look up a component by address.

        Raises:
            UnknownComponent: If no component has this address
        """
        try:
            return self._components[address]
        except KeyError:
            raise UnknownComponent(f"Unknown component: {address}") from None

    # --- Accounts ---

    def new_account(self) -> str:
        """Create an empty account and return its id."""
        account_id = self._next_address("account")
        self._accounts[account_id] = {}
        return account_id

    def _account(self, account_id: str) -> dict[str, Vault]:
        try:
            return self._accounts[account_id]
        except KeyError:
            raise UnknownAccount(f"Unknown account: {account_id}") from None

    def deposit(self, account_id: str, bucket: Bucket) -> None:
        """Deposit a bucket into an account, creating its vault on first use."""
        vaults = self._account(account_id)
        vault = vaults.get(bucket.resource_address)
        if vault is None:
            vault = self.new_vault(bucket.resource_address)
            vaults[bucket.resource_address] = vault
        vault.put(bucket)

    def withdraw(self, account_id: str, resource_address: str, amount: Decimal | int | str) -> Bucket:
        """Withdraw from an account.

        Raises:
            UnknownAccount: If the account does not exist
            InsufficientBalance: If the account holds less than `amount`
        """
        vaults = self._account(account_id)
        vault = vaults.get(resource_address)
        if vault is None:
            vault = self.new_vault(resource_address)
            vaults[resource_address] = vault
        return vault.take(amount)

    def balance(self, account_id: str, resource_address: str) -> Decimal:
        """Amount of one resource held by an account (zero if never held)."""
        vault = self._account(account_id).get(resource_address)
        return Decimal(0) if vault is None else vault.amount

    def balances(self, account_id: str) -> dict[str, Decimal]:
        """Non-zero balances held by an account, keyed by resource address."""
        return {
            address: vault.amount
            for address, vault in self._account(account_id).items()
            if not vault.is_empty()
        }

    # --- Transactions ---

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            resources=dict(self._resources),
            supplies={address: m.total_supply for address, m in self._resources.items()},
            components=dict(self._components),
            accounts={account: dict(vaults) for account, vaults in self._accounts.items()},
            vaults=list(self._vaults),
            balances=[vault.amount for vault in self._vaults],
            counter=self._counter,
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        self._resources = snapshot.resources
        for address, supply in snapshot.supplies.items():
            self._resources[address].total_supply = supply
        self._components = snapshot.components
        self._accounts = snapshot.accounts
        self._vaults = snapshot.vaults
        for vault, amount in zip(snapshot.vaults, snapshot.balances, strict=True):
            vault._restore(amount)
        self._counter = snapshot.counter

    @contextmanager
    def read(self) -> Iterator[Ledger]:
        """Hold the ledger lock so a block reads state between transactions."""
        with self._lock:
            yield self

    @contextmanager
    def transaction(self) -> Iterator[Ledger]:
        """Run a block with all-or-nothing semantics.

        Transactions on one ledger are serialized. If the block raises,
        every balance, supply and registration is restored to its state at
        entry and the exception propagates. Buckets are transaction-scoped:
        a bucket held outside the ledger is not restored.
        """
        with self._lock:
            snapshot = self._snapshot()
            try:
                yield self
            except BaseException:
                self._restore(snapshot)
                logger.info("transaction_aborted")
                raise
