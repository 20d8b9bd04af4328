"""LSP2 / LSP5 / LSP10 constants used by the received assets reader."""

from typing import Final

# ---------------------------------------------------------------------------
# Solidity / ABI sizes
# ---------------------------------------------------------------------------
BYTES4_SIZE: Final[int] = 4
BYTES10_SIZE: Final[int] = 10
BYTES12_SIZE: Final[int] = 12
BYTES16_SIZE: Final[int] = 16
BYTES32_SIZE: Final[int] = 32

ADDRESS_SIZE: Final[int] = 20
UINT128_SIZE: Final[int] = BYTES16_SIZE

MAX_UINT128: Final[int] = 2**128 - 1
MAX_UINT256: Final[int] = 2**256 - 1

ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"
ZERO_BYTES4: Final[bytes] = b"\x00" * BYTES4_SIZE


# ---------------------------------------------------------------------------
# LSP2 ERC725Y JSON Schema key layouts
# ---------------------------------------------------------------------------
# Array:   keccak256("<Name>[]") holds the length (uint128, 16 bytes)
#          bytes16(keccak256("<Name>[]")) ++ bytes16(uint128(index)) holds element i
# Mapping: bytes10(keccak256("<FirstWord>")) ++ 0x0000 ++ bytes20(<address>)
LSP2_ARRAY_PREFIX_SIZE: Final[int] = BYTES16_SIZE
LSP2_ARRAY_INDEX_SIZE: Final[int] = UINT128_SIZE
LSP2_MAPPING_WORD_SIZE: Final[int] = BYTES10_SIZE
LSP2_MAPPING_PREFIX_SIZE: Final[int] = BYTES12_SIZE
LSP2_MAPPING_SEPARATOR: Final[bytes] = b"\x00\x00"


# ---------------------------------------------------------------------------
# LSP5 Received Assets
# ---------------------------------------------------------------------------
LSP5_RECEIVED_ASSETS_ARRAY_NAME: Final[str] = "LSP5ReceivedAssets[]"
LSP5_RECEIVED_ASSETS_MAP_NAME: Final[str] = "LSP5ReceivedAssetsMap"

LSP5_RECEIVED_ASSETS_ARRAY_KEY: Final[bytes] = bytes.fromhex(
    "6460ee3c0aac563ccbf76d6e1d07bada78e3a9514e6382b736ed3f478ab7b90b"
)
LSP5_RECEIVED_ASSETS_MAP_KEY_PREFIX: Final[bytes] = bytes.fromhex(
    "812c4334633eb816c80d0000"
)


# ---------------------------------------------------------------------------
# LSP10 Received Vaults (same layout as LSP5)
# ---------------------------------------------------------------------------
LSP10_VAULTS_ARRAY_NAME: Final[str] = "LSP10Vaults[]"
LSP10_VAULTS_MAP_NAME: Final[str] = "LSP10VaultsMap"

LSP10_VAULTS_ARRAY_KEY: Final[bytes] = bytes.fromhex(
    "55482936e01da86729a45d2b87a6b1d3bc582bea0ec00e38bdb340e3af6f9f06"
)
LSP10_VAULTS_MAP_KEY_PREFIX: Final[bytes] = bytes.fromhex("192448c3c0f88c7f238c0000")


# ---------------------------------------------------------------------------
# Map value layout: bytes4 interfaceId ++ uint128 index
# ---------------------------------------------------------------------------
MAP_VALUE_TYPE_SIZE: Final[int] = BYTES4_SIZE
MAP_VALUE_INDEX_SIZE: Final[int] = UINT128_SIZE
MAP_VALUE_SIZE: Final[int] = MAP_VALUE_TYPE_SIZE + MAP_VALUE_INDEX_SIZE

IDX_MAP_VALUE_TYPE: Final[int] = 0
IDX_MAP_VALUE_INDEX: Final[int] = IDX_MAP_VALUE_TYPE + MAP_VALUE_TYPE_SIZE


# ---------------------------------------------------------------------------
# ERC165 interface ids
# ---------------------------------------------------------------------------
INTERFACEID_ERC725Y: Final[bytes] = bytes.fromhex("629aa694")
INTERFACEID_LSP7: Final[bytes] = bytes.fromhex("c52d6008")
INTERFACEID_LSP8: Final[bytes] = bytes.fromhex("3a271706")
INTERFACEID_LSP9: Final[bytes] = bytes.fromhex("28af17e6")

# Earlier releases of the LSP7 / LSP8 standards registered these ids.
LEGACY_INTERFACEIDS_LSP7: Final[tuple[bytes, ...]] = (
    bytes.fromhex("b3c4928f"),
    bytes.fromhex("daa746b7"),
)
LEGACY_INTERFACEIDS_LSP8: Final[tuple[bytes, ...]] = (
    bytes.fromhex("ecad9f75"),
    bytes.fromhex("30dc5278"),
)


# ---------------------------------------------------------------------------
# Batch relay
# ---------------------------------------------------------------------------
BATCH_GENERIC_REVERT_REASON: Final[str] = "batch call reverted"
