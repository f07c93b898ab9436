from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class InvalidAddressError(DomainError):
    """Token address is malformed."""


class InvalidAmountError(DomainError):
    """Swap amount is not a positive number."""


class PairNotFoundError(DomainError):
    """Factory has no pair for the requested tokens."""


class InsufficientLiquidityError(DomainError):
    """Pair reserves cannot satisfy a quote."""


class ChainUnreachableError(DomainError):
    """RPC provider could not be reached."""


class RpcCallFailedError(DomainError):
    """RPC call failed or returned data that could not be decoded."""
