from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from . import constants as const
from .codec import (
    AddressLike,
    array_element_key,
    compute_array_key,
    compute_mapping_prefix,
    decode_map_value,
    mapping_key,
)


class AssetStandard(enum.Enum):
    """Standard advertised by the interface id stored in a map value."""

    LSP7 = "lsp7"
    LSP8 = "lsp8"
    LSP9 = "lsp9"
    UNKNOWN = "unknown"

    @staticmethod
    def from_type_tag(type_tag: bytes) -> AssetStandard:
        tag = bytes(type_tag)
        if tag == const.INTERFACEID_LSP7 or tag in const.LEGACY_INTERFACEIDS_LSP7:
            return AssetStandard.LSP7
        if tag == const.INTERFACEID_LSP8 or tag in const.LEGACY_INTERFACEIDS_LSP8:
            return AssetStandard.LSP8
        if tag == const.INTERFACEID_LSP9:
            return AssetStandard.LSP9
        return AssetStandard.UNKNOWN


@dataclass(frozen=True, slots=True)
class RegistryKeys:
    """
    Key-derivation scheme for one indexed registry (an LSP2 array + its companion mapping).

    - `array_key`: 32-byte key holding the array length; its first 16 bytes prefix element keys
    - `map_prefix`: 12-byte prefix of the per-address mapping keys
    """

    array_key: bytes
    map_prefix: bytes

    def __post_init__(self) -> None:
        if len(self.array_key) != const.BYTES32_SIZE:
            raise ValueError(f"array_key must be {const.BYTES32_SIZE} bytes")
        if len(self.map_prefix) != const.LSP2_MAPPING_PREFIX_SIZE:
            raise ValueError(
                f"map_prefix must be {const.LSP2_MAPPING_PREFIX_SIZE} bytes"
            )

    @staticmethod
    def lsp5() -> RegistryKeys:
        return RegistryKeys(
            array_key=const.LSP5_RECEIVED_ASSETS_ARRAY_KEY,
            map_prefix=const.LSP5_RECEIVED_ASSETS_MAP_KEY_PREFIX,
        )

    @staticmethod
    def lsp10() -> RegistryKeys:
        return RegistryKeys(
            array_key=const.LSP10_VAULTS_ARRAY_KEY,
            map_prefix=const.LSP10_VAULTS_MAP_KEY_PREFIX,
        )

    @staticmethod
    def from_names(array_name: str, map_name: str) -> RegistryKeys:
        """Derive keys from LSP2 schema names, e.g. ``("LSP5ReceivedAssets[]", "LSP5ReceivedAssetsMap")``."""
        return RegistryKeys(
            array_key=compute_array_key(array_name),
            map_prefix=compute_mapping_prefix(map_name),
        )

    @property
    def length_key(self) -> bytes:
        return self.array_key

    def element_key(self, index: int) -> bytes:
        return array_element_key(self.array_key, index)

    def map_key(self, address: AddressLike) -> bytes:
        return mapping_key(self.map_prefix, address)


@dataclass(frozen=True, slots=True)
class ReceivedAssetMetadata:
    type_tag: bytes  # 4 bytes, ERC165 interface id
    index: int  # uint128

    @property
    def standard(self) -> AssetStandard:
        return AssetStandard.from_type_tag(self.type_tag)

    @property
    def is_empty(self) -> bool:
        """True if the map value was absent (all-zero)."""
        return self.type_tag == const.ZERO_BYTES4 and self.index == 0

    @staticmethod
    def from_bytes(value: bytes) -> ReceivedAssetMetadata:
        type_tag, index = decode_map_value(value)
        return ReceivedAssetMetadata(type_tag=type_tag, index=index)

    @staticmethod
    def from_tuple(value: Sequence[object]) -> ReceivedAssetMetadata:
        if len(value) != 2:
            raise ValueError("Expected (type_tag, index)")
        type_tag, index = value
        if not isinstance(type_tag, (bytes, bytearray)) or len(type_tag) != 4:
            raise TypeError("type_tag must be 4 bytes")
        if not isinstance(index, int) or not 0 <= index <= const.MAX_UINT128:
            raise ValueError("index must fit in uint128")
        return ReceivedAssetMetadata(type_tag=bytes(type_tag), index=index)


@dataclass(frozen=True, slots=True)
class ReceivedAssetRecord:
    """One array position joined with the metadata stored for the address found there."""

    position: int
    address: str
    metadata: ReceivedAssetMetadata

    @property
    def type_tag(self) -> bytes:
        return self.metadata.type_tag

    @property
    def index(self) -> int:
        return self.metadata.index

    @property
    def is_consistent(self) -> bool:
        return self.metadata.index == self.position
