"""Radiswap error classes.

Every error raised by the pool or the ledger derives from RadiswapError, so
callers (and the HTTP layer) can catch the whole family in one place.
"""


class RadiswapError(Exception):
    """Base error for pool and ledger operations."""

    pass


class InvalidInput(RadiswapError):
    """Malformed input: empty deposit, zero amount, or fee outside [0, 1]."""

    pass


class UnsupportedAsset(RadiswapError):
    """Deposited resource does not belong to the pool's asset pair."""

    pass


class WrongToken(RadiswapError):
    """Redemption presented a resource other than the pool's units."""

    pass


class PoolArithmeticError(RadiswapError, ArithmeticError):
    """Division by zero or underflow in amount arithmetic."""

    pass


class LedgerError(RadiswapError):
    """Base error for the in-memory ledger runtime."""

    pass


class InsufficientBalance(LedgerError):
    """Withdrawal exceeds the balance held."""

    pass


class ResourceMismatch(LedgerError):
    """A bucket was put into a container of a different resource."""

    pass


class Unauthorized(LedgerError):
    """Mint or burn attempted without the required badge proof."""

    pass


class InvalidAmount(LedgerError):
    """Negative amount, or more fractional digits than the divisibility allows."""

    pass


class UnknownResource(LedgerError):
    """No resource registered under the given address."""

    pass


class UnknownComponent(LedgerError):
    """No component registered under the given address."""

    pass


class UnknownAccount(LedgerError):
    """No account registered under the given id."""

    pass
