from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..codec import (
    AddressLike,
    decode_address,
    decode_uint128,
    same_address,
    to_checksum_address,
)
from ..errors import RegistryResolutionError
from ..models import ReceivedAssetMetadata, ReceivedAssetRecord, RegistryKeys
from ..store import KeyValueStore, read_many
from .balance import BalanceOracle, BalancePolicy, check_balance

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexedRegistryRead:
    """
    Read API over an LSP2 array of addresses and its per-address companion mapping.

    With the default keys this reads LSP5 Received Assets; with `RegistryKeys.lsp10()`
    it reads LSP10 Received Vaults.

    Every call re-reads the store. Nothing is cached, so two calls may observe
    different state if the store changes in between.
    """

    store: KeyValueStore
    keys: RegistryKeys = field(default_factory=RegistryKeys.lsp5)
    holder: str | None = None

    def _require_holder(self, *, holder: AddressLike | None) -> str:
        resolved = holder if holder is not None else self.holder
        if resolved is None:
            resolved = getattr(self.store, "address", None)
        if resolved is None:
            raise RegistryResolutionError(
                "Balance holder is not configured and was not provided"
            )
        return to_checksum_address(resolved)

    # ------------------------------------------------------------------
    # Array
    # ------------------------------------------------------------------

    def count(self) -> int:
        return decode_uint128(self.store.get_data(self.keys.length_key))

    def entry_at(self, index: int) -> str:
        """
        Return the address stored at `index`.

        The index is not checked against `count()`: an unset position reads as the
        zero address.
        """
        return decode_address(self.store.get_data(self.keys.element_key(index)))

    def entries_at(self, indices: Iterable[int]) -> list[str]:
        keys = [self.keys.element_key(i) for i in indices]
        return [decode_address(v) for v in read_many(self.store, keys)]

    def all_entries(self) -> list[str]:
        n = self.count()
        logger.debug("Reading %d registry entries", n)
        return self.entries_at(range(n))

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def metadata_of(self, address: AddressLike) -> ReceivedAssetMetadata:
        return ReceivedAssetMetadata.from_bytes(
            self.store.get_data(self.keys.map_key(address))
        )

    def type_of(self, address: AddressLike) -> bytes:
        return self.metadata_of(address).type_tag

    def index_of(self, address: AddressLike) -> int:
        return self.metadata_of(address).index

    def records(self) -> list[ReceivedAssetRecord]:
        """Every array position joined with the metadata of the address stored there."""
        entries = self.all_entries()
        values = read_many(self.store, [self.keys.map_key(a) for a in entries])
        return [
            ReceivedAssetRecord(
                position=i,
                address=a,
                metadata=ReceivedAssetMetadata.from_bytes(v),
            )
            for i, (a, v) in enumerate(zip(entries, values))
        ]

    # ------------------------------------------------------------------
    # Validation (detection only; nothing is repaired)
    # ------------------------------------------------------------------

    def is_at_correct_index(self, address: AddressLike) -> bool:
        """True iff the array slot named by `address`'s recorded index holds `address`."""
        return same_address(self.entry_at(self.index_of(address)), address)

    def contains(self, address: AddressLike) -> bool:
        """True if `address` has a map record and is found at the index it records."""
        metadata = self.metadata_of(address)
        if metadata.is_empty:
            return False
        if metadata.index >= self.count():
            return False
        return same_address(self.entry_at(metadata.index), address)

    def validate_all_indices(self) -> list[bool]:
        """For each position `i`, True iff the entry's own recorded index equals `i`."""
        return [r.is_consistent for r in self.records()]

    # ------------------------------------------------------------------
    # Balances
    # ------------------------------------------------------------------

    def validate_balances(
        self,
        oracle: BalanceOracle,
        *,
        holder: AddressLike | None = None,
        policy: BalancePolicy = BalancePolicy.STRICT,
    ) -> list[bool]:
        """
        Return one flag per position of `all_entries()`: True if the holder has a
        positive balance of that entry.

        Raises:
            OracleCallError: under STRICT, if any lookup fails.
        """
        resolved = self._require_holder(holder=holder)
        return [
            check_balance(oracle, asset=a, holder=resolved, policy=policy)
            for a in self.all_entries()
        ]

    def entries_with_balance(
        self,
        oracle: BalanceOracle,
        *,
        holder: AddressLike | None = None,
        policy: BalancePolicy = BalancePolicy.STRICT,
    ) -> list[str]:
        """Entries with a positive balance, in their original relative order."""
        resolved = self._require_holder(holder=holder)
        return [
            a
            for a in self.all_entries()
            if check_balance(oracle, asset=a, holder=resolved, policy=policy)
        ]
