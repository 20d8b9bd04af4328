from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from . import constants as const
from .codec import (
    AddressLike,
    decode_uint128,
    encode_map_value,
    encode_uint128,
    fixed_bytes,
    to_address_bytes,
)
from .models import RegistryKeys


@runtime_checkable
class KeyValueStore(Protocol):
    """
    ERC725Y-style key-value store.

    An unset key returns empty bytes; it is never an error.
    """

    def get_data(self, key: bytes) -> bytes: ...


@runtime_checkable
class BatchKeyValueStore(KeyValueStore, Protocol):
    def get_data_batch(self, keys: Sequence[bytes]) -> list[bytes]: ...


@runtime_checkable
class Checkpointable(Protocol):
    """A host whose state can be snapshotted and restored (used by the batch relay)."""

    def checkpoint(self) -> Any: ...

    def rollback(self, token: Any) -> None: ...


def read_many(store: KeyValueStore, keys: Sequence[bytes]) -> list[bytes]:
    """
    Read several keys, in one round-trip when the store supports ``get_data_batch``.
    """
    if not keys:
        return []
    if isinstance(store, BatchKeyValueStore):
        values = store.get_data_batch(list(keys))
        if len(values) != len(keys):
            raise RuntimeError(
                f"get_data_batch returned {len(values)} values for {len(keys)} keys"
            )
        return [bytes(v) for v in values]
    return [bytes(store.get_data(k)) for k in keys]


@dataclass(slots=True)
class InMemoryKeyValueStore:
    """
    Dict-backed key-value store.

    Mirrors ERC725Y semantics (unset key -> ``b""``) and supports checkpoint/rollback so
    it can act as the host of a batch relay.
    """

    address: str | None = None
    data: dict[bytes, bytes] = field(default_factory=dict)

    def get_data(self, key: bytes) -> bytes:
        return self.data.get(bytes(key), b"")

    def get_data_batch(self, keys: Sequence[bytes]) -> list[bytes]:
        return [self.get_data(k) for k in keys]

    def set_data(self, key: bytes, value: bytes) -> None:
        if len(key) != const.BYTES32_SIZE:
            raise ValueError(f"key must be {const.BYTES32_SIZE} bytes")
        if value:
            self.data[bytes(key)] = bytes(value)
        else:
            self.data.pop(bytes(key), None)

    def checkpoint(self) -> dict[bytes, bytes]:
        return copy.copy(self.data)

    def rollback(self, token: dict[bytes, bytes]) -> None:
        self.data = copy.copy(token)

    # ------------------------------------------------------------------
    # Seeding helpers
    # ------------------------------------------------------------------

    def write_registry(
        self,
        entries: Sequence[AddressLike],
        *,
        metadata: Mapping[AddressLike, tuple[bytes, int]] | None = None,
        keys: RegistryKeys | None = None,
        default_type_tag: bytes = const.INTERFACEID_LSP7,
    ) -> None:
        """
        Lay out `entries` as an LSP2 array with its companion mapping.

        Each entry's map value defaults to ``(default_type_tag, position)``; pass `metadata`
        to override individual records (e.g. to store a wrong index).

        Any registry previously written under the same keys is cleared first, so no
        stale element or map record survives a shorter rewrite.
        """
        k = keys or RegistryKeys.lsp5()
        overrides = {to_address_bytes(a): v for a, v in (metadata or {}).items()}
        self.clear_registry(k)

        self.set_data(k.length_key, encode_uint128(len(entries)))
        for i, entry in enumerate(entries):
            raw = to_address_bytes(entry)
            self.set_data(k.element_key(i), raw)
            type_tag, index = overrides.get(raw, (default_type_tag, i))
            self.set_data(k.map_key(raw), encode_map_value(type_tag, index))

    def clear_registry(self, keys: RegistryKeys | None = None) -> None:
        """Delete the length, element and map records of the registry under `keys`."""
        k = keys or RegistryKeys.lsp5()
        for i in range(decode_uint128(self.get_data(k.length_key))):
            element = self.get_data(k.element_key(i))
            if element:
                self.set_data(
                    k.map_key(fixed_bytes(element, const.ADDRESS_SIZE)), b""
                )
            self.set_data(k.element_key(i), b"")
        self.set_data(k.length_key, b"")

    @classmethod
    def from_entries(
        cls,
        entries: Sequence[AddressLike],
        *,
        address: str | None = None,
        metadata: Mapping[AddressLike, tuple[bytes, int]] | None = None,
        keys: RegistryKeys | None = None,
    ) -> InMemoryKeyValueStore:
        store = cls(address=address)
        store.write_registry(entries, metadata=metadata, keys=keys)
        return store
