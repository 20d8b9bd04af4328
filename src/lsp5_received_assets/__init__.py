# ruff: noqa: RUF022
"""
LSP5 Received Assets Python SDK.

Public entrypoints:
- :class:`lsp5_received_assets.registry.ReceivedAssetsRegistry`
- :class:`lsp5_received_assets.read.reader.IndexedRegistryRead`
- :func:`lsp5_received_assets.batch.relay_batch`

This SDK reads the LSP5 (and LSP10) registries stored in an ERC725Y contract, either
on-chain through web3 or from any object implementing `get_data(key) -> bytes`.
"""

from __future__ import annotations

from . import constants
from .batch import relay_batch
from .codec import (
    array_element_key,
    compute_array_key,
    compute_mapping_prefix,
    mapping_key,
    to_checksum_address,
)
from .errors import (
    BatchCallError,
    CallRevertedError,
    InvalidAddressError,
    InvalidIndexError,
    MissingProviderError,
    OracleCallError,
    ReceivedAssetsError,
    RecordDecodeError,
    RegistryResolutionError,
    UnknownNetworkError,
)
from .models import (
    AssetStandard,
    ReceivedAssetMetadata,
    ReceivedAssetRecord,
    RegistryKeys,
)
from .networks import DEFAULT_NETWORKS, NetworkDeployment, get_network
from .provider import Web3BalanceOracle, Web3DataStore
from .read.balance import BalanceOracle, BalancePolicy, InMemoryBalanceOracle
from .read.reader import IndexedRegistryRead
from .registry import ReceivedAssetsRegistry, RegistryConfig
from .store import InMemoryKeyValueStore, KeyValueStore

__all__ = [
    # Networks
    "DEFAULT_NETWORKS",
    "NetworkDeployment",
    "get_network",
    # Facade
    "ReceivedAssetsRegistry",
    "RegistryConfig",
    # Read
    "IndexedRegistryRead",
    "BalanceOracle",
    "BalancePolicy",
    # Batch
    "relay_batch",
    # Stores / oracles
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "InMemoryBalanceOracle",
    "Web3DataStore",
    "Web3BalanceOracle",
    # Codec
    "array_element_key",
    "compute_array_key",
    "compute_mapping_prefix",
    "mapping_key",
    "to_checksum_address",
    # Errors
    "ReceivedAssetsError",
    "BatchCallError",
    "CallRevertedError",
    "InvalidAddressError",
    "InvalidIndexError",
    "MissingProviderError",
    "OracleCallError",
    "RecordDecodeError",
    "RegistryResolutionError",
    "UnknownNetworkError",
    # Models
    "AssetStandard",
    "ReceivedAssetMetadata",
    "ReceivedAssetRecord",
    "RegistryKeys",
    # Constants
    "constants",
]
