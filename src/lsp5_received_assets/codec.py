from __future__ import annotations

from web3 import Web3

from . import constants as const
from .errors import InvalidAddressError, InvalidIndexError, RecordDecodeError

AddressLike = str | bytes


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


def to_address_bytes(address: AddressLike) -> bytes:
    """
    Normalize an address into its 20 raw bytes.

    Accepts raw bytes or a 0x-prefixed hex string (any casing; mixed casing must be
    a valid EIP-55 checksum).
    """
    if isinstance(address, (bytes, bytearray)):
        if len(address) != const.ADDRESS_SIZE:
            raise InvalidAddressError(
                f"address must be {const.ADDRESS_SIZE} bytes, got {len(address)}"
            )
        return bytes(address)
    if isinstance(address, str):
        if not address.startswith(("0x", "0X")) or not Web3.is_address(address):
            raise InvalidAddressError(f"Not a valid address: {address!r}")
        return bytes(Web3.to_bytes(hexstr=address))
    raise InvalidAddressError("address must be str or bytes")


def to_checksum_address(address: AddressLike) -> str:
    """Render an address in EIP-55 checksum form."""
    raw = to_address_bytes(address)
    return Web3.to_checksum_address("0x" + raw.hex())


def same_address(a: AddressLike, b: AddressLike) -> bool:
    return to_address_bytes(a) == to_address_bytes(b)


# ---------------------------------------------------------------------------
# Fixed-width decoding
# ---------------------------------------------------------------------------


def fixed_bytes(value: bytes, size: int) -> bytes:
    """
    Convert a dynamic byte value to ``bytes<size>`` the way Solidity does.

    Longer values are truncated, shorter values (including the empty value returned
    for an unset key) are right-padded with zero bytes.
    """
    return bytes(value[:size]).ljust(size, b"\x00")


def decode_uint128(value: bytes) -> int:
    """Decode ``uint128(bytes16(value))``."""
    return int.from_bytes(fixed_bytes(value, const.UINT128_SIZE), "big", signed=False)


def encode_uint128(value: int) -> bytes:
    if value < 0 or value > const.MAX_UINT128:
        raise InvalidIndexError("value must fit in uint128")
    return int(value).to_bytes(const.UINT128_SIZE, "big", signed=False)


def decode_address(value: bytes) -> str:
    """Decode ``address(bytes20(value))`` into a checksummed address."""
    return to_checksum_address(fixed_bytes(value, const.ADDRESS_SIZE))


def decode_map_value(value: bytes) -> tuple[bytes, int]:
    """
    Decode a map value ``bytes4 interfaceId ++ bytes16 uint128 index``.

    Returns:
        ``(type_tag, index)``. An empty value decodes to ``(0x00000000, 0)``.

    Raises:
        RecordDecodeError: if the value is non-empty but too short to hold both fields.
    """
    if len(value) == 0:
        return const.ZERO_BYTES4, 0
    if len(value) < const.MAP_VALUE_SIZE:
        raise RecordDecodeError(
            f"map value must be {const.MAP_VALUE_SIZE} bytes, got {len(value)}"
        )
    type_tag = bytes(
        value[
            const.IDX_MAP_VALUE_TYPE : const.IDX_MAP_VALUE_TYPE
            + const.MAP_VALUE_TYPE_SIZE
        ]
    )
    index = int.from_bytes(
        value[
            const.IDX_MAP_VALUE_INDEX : const.IDX_MAP_VALUE_INDEX
            + const.MAP_VALUE_INDEX_SIZE
        ],
        "big",
        signed=False,
    )
    return type_tag, index


def encode_map_value(type_tag: bytes, index: int) -> bytes:
    if len(type_tag) != const.BYTES4_SIZE:
        raise ValueError(f"type_tag must be {const.BYTES4_SIZE} bytes")
    return bytes(type_tag) + encode_uint128(index)


# ---------------------------------------------------------------------------
# LSP2 key derivation
# ---------------------------------------------------------------------------


def keccak256(data: bytes) -> bytes:
    return bytes(Web3.keccak(data))


def compute_array_key(name: str) -> bytes:
    """
    LSP2 Array key: ``keccak256("<Name>[]")``.

    The value stored under this key is the array length.
    """
    if not name.endswith("[]"):
        raise ValueError("LSP2 array key names must end with '[]'")
    return bytes(Web3.keccak(text=name))


def compute_mapping_prefix(name: str) -> bytes:
    """LSP2 Mapping prefix: ``bytes10(keccak256("<FirstWord>")) ++ 0x0000``."""
    word = bytes(Web3.keccak(text=name))[: const.LSP2_MAPPING_WORD_SIZE]
    return word + const.LSP2_MAPPING_SEPARATOR


def array_element_key(array_key: bytes, index: int) -> bytes:
    """
    Derive the key holding element ``index`` of an LSP2 array.

    Layout: ``bytes16(array_key) ++ bytes16(uint128(index))``.
    """
    if len(array_key) != const.BYTES32_SIZE:
        raise ValueError(f"array_key must be {const.BYTES32_SIZE} bytes")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidIndexError("index must be int")
    if index < 0 or index > const.MAX_UINT128:
        raise InvalidIndexError("index must fit in uint128")
    return array_key[: const.LSP2_ARRAY_PREFIX_SIZE] + encode_uint128(index)


def mapping_key(prefix: bytes, address: AddressLike) -> bytes:
    """
    Derive the LSP2 Mapping key for ``address``.

    Layout: ``bytes12(prefix) ++ bytes20(address)``.
    """
    if len(prefix) != const.LSP2_MAPPING_PREFIX_SIZE:
        raise ValueError(f"prefix must be {const.LSP2_MAPPING_PREFIX_SIZE} bytes")
    return bytes(prefix) + to_address_bytes(address)
