from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..codec import AddressLike, to_address_bytes, to_checksum_address
from ..errors import OracleCallError

logger = logging.getLogger(__name__)


class BalancePolicy(enum.Enum):
    """
    How balance lookups that fail are handled.

    - STRICT: call `balanceOf` directly; any `OracleCallError` aborts the whole query
    - TOLERANT: skip entries without code, and treat a failing `balanceOf` as a zero balance
    """

    STRICT = "strict"
    TOLERANT = "tolerant"


@runtime_checkable
class BalanceOracle(Protocol):
    def has_code(self, account: AddressLike) -> bool: ...

    def balance_of(self, asset: AddressLike, holder: AddressLike) -> int:
        """
        Raises:
            OracleCallError: if the call reverts or the target has no `balanceOf(address)`.
        """
        ...


def check_balance(
    oracle: BalanceOracle,
    *,
    asset: AddressLike,
    holder: AddressLike,
    policy: BalancePolicy,
) -> bool:
    """
    Return True if `holder` has a positive balance of `asset`.

    Under TOLERANT, accounts without code and failing lookups yield False; only
    `OracleCallError` is absorbed.
    """
    if policy == BalancePolicy.STRICT:
        return oracle.balance_of(asset, holder) > 0

    if policy == BalancePolicy.TOLERANT:
        if not oracle.has_code(asset):
            logger.debug("Skipping balance check for %s: no code", asset)
            return False
        try:
            balance = oracle.balance_of(asset, holder)
        except OracleCallError as e:
            logger.warning("balanceOf failed for %s, treating as zero: %s", asset, e)
            return False
        return balance > 0

    raise ValueError(f"Unknown BalancePolicy: {policy}")


@dataclass(slots=True)
class InMemoryBalanceOracle:
    """
    Balance oracle over plain mappings.

    - `balances`: asset -> holder -> amount
    - `contracts`: addresses that host code; `balance_of` on anything else fails
      like a call to a plain account would
    - `reverting`: contracts whose `balanceOf` reverts
    """

    balances: dict[bytes, dict[bytes, int]] = field(default_factory=dict)
    contracts: set[bytes] = field(default_factory=set)
    reverting: set[bytes] = field(default_factory=set)

    def has_code(self, account: AddressLike) -> bool:
        return to_address_bytes(account) in self.contracts

    def balance_of(self, asset: AddressLike, holder: AddressLike) -> int:
        a = to_address_bytes(asset)
        if a not in self.contracts:
            raise OracleCallError(
                f"{to_checksum_address(a)} has no code; balanceOf is not callable"
            )
        if a in self.reverting:
            raise OracleCallError(f"balanceOf reverted on {to_checksum_address(a)}")
        return self.balances.get(a, {}).get(to_address_bytes(holder), 0)

    def add_asset(
        self,
        asset: AddressLike,
        holdings: Mapping[AddressLike, int] | None = None,
        *,
        reverts: bool = False,
    ) -> None:
        a = to_address_bytes(asset)
        self.contracts.add(a)
        if reverts:
            self.reverting.add(a)
        per_holder = self.balances.setdefault(a, {})
        for holder, amount in (holdings or {}).items():
            per_holder[to_address_bytes(holder)] = int(amount)
