from __future__ import annotations


class ReceivedAssetsError(Exception):
    """Base class for all SDK errors."""


class MissingProviderError(ReceivedAssetsError, RuntimeError):
    """Raised when an operation requires a web3 provider but none is configured."""


class InvalidAddressError(ReceivedAssetsError, ValueError):
    """Raised when a value cannot be interpreted as a 20-byte address."""


class InvalidIndexError(ReceivedAssetsError, ValueError):
    """Raised when an array index does not fit in uint128."""


class RecordDecodeError(ReceivedAssetsError, ValueError):
    """
    Raised when a map value cannot be decoded as ``bytes4 interfaceId ++ uint128 index``.

    Absent keys (empty values) are not an error: they decode to zero.
    """


class OracleCallError(ReceivedAssetsError, RuntimeError):
    """
    Raised when a balance lookup against an asset contract fails.

    This covers reverts and targets that do not implement ``balanceOf(address)``
    (including plain accounts with no code).
    """


class CallRevertedError(ReceivedAssetsError, RuntimeError):
    """
    Raised by a relayed sub-call to signal a revert.

    ``reason`` carries the revert payload, if the sub-call supplied one.
    """

    def __init__(self, reason: str | bytes | None = None) -> None:
        super().__init__(reason if reason is not None else "call reverted")
        self.reason = reason


class BatchCallError(ReceivedAssetsError, RuntimeError):
    """Raised when any sub-call of a batch fails; the whole batch is aborted."""

    def __init__(self, reason: str | bytes, *, index: int) -> None:
        super().__init__(reason)
        self.reason = reason
        self.index = index


class RegistryResolutionError(ReceivedAssetsError, RuntimeError):
    """Raised when the registry address or balance holder cannot be resolved from inputs."""


class UnknownNetworkError(ReceivedAssetsError, LookupError):
    """Raised when a network name is not in the known networks table."""
