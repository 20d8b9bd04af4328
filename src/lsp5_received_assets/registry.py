from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from web3 import Web3

from .codec import to_checksum_address
from .errors import MissingProviderError, RegistryResolutionError
from .models import RegistryKeys
from .networks import get_network
from .provider import BlockIdentifier, Web3BalanceOracle, Web3DataStore
from .read.balance import BalanceOracle, BalancePolicy
from .read.reader import IndexedRegistryRead
from .store import KeyValueStore

logger = logging.getLogger(__name__)

ENV_RPC_URL = "LSP5_RPC_URL"
ENV_WEB3_PROVIDER_URI = "WEB3_PROVIDER_URI"
ENV_NETWORK = "LSP5_NETWORK"
ENV_ADDRESS = "LSP5_ADDRESS"


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """
    Configuration for reading the received assets of one ERC725Y contract
    (typically a Universal Profile).
    """

    address: str | None = None
    keys: RegistryKeys = field(default_factory=RegistryKeys.lsp5)
    block_identifier: BlockIdentifier = "latest"


class ReceivedAssetsRegistry:
    """
    Facade over the LSP5 read API.

    Construct using one of the helpers:
    - `from_store(...)` (any `KeyValueStore`, e.g. the in-memory store)
    - `from_web3(...)` / `from_rpc_url(...)` / `from_network(...)` (on-chain reads)
    - `from_environment()` (RPC URL and address taken from environment variables)
    """

    def __init__(
        self,
        *,
        config: RegistryConfig,
        store: KeyValueStore | None = None,
        w3: Web3 | None = None,
        oracle: BalanceOracle | None = None,
    ) -> None:
        if config.address is not None:
            config = RegistryConfig(
                address=to_checksum_address(config.address),
                keys=config.keys,
                block_identifier=config.block_identifier,
            )
        self.config = config
        self.w3 = w3

        if store is None:
            if w3 is None:
                raise RegistryResolutionError(
                    "Either a key-value store or a web3 instance must be provided"
                )
            if config.address is None:
                raise RegistryResolutionError(
                    "Registry address is required to read through web3"
                )
            store = Web3DataStore(
                w3=w3,
                address=config.address,
                block_identifier=config.block_identifier,
            )
        self.store = store

        if oracle is None and w3 is not None:
            oracle = Web3BalanceOracle(w3=w3, block_identifier=config.block_identifier)
        self._oracle = oracle

        self.read = IndexedRegistryRead(
            store=self.store, keys=config.keys, holder=config.address
        )

    @property
    def oracle(self) -> BalanceOracle:
        if self._oracle is None:
            raise MissingProviderError(
                "Balance queries require a balance oracle or a web3 instance"
            )
        return self._oracle

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_store(
        cls,
        store: KeyValueStore,
        *,
        address: str | None = None,
        oracle: BalanceOracle | None = None,
        keys: RegistryKeys | None = None,
    ) -> ReceivedAssetsRegistry:
        # Fall back to the store's own address (the ERC725Y contract holding the data).
        resolved = address if address is not None else getattr(store, "address", None)
        return cls(
            config=RegistryConfig(
                address=resolved, keys=keys or RegistryKeys.lsp5()
            ),
            store=store,
            oracle=oracle,
        )

    @classmethod
    def from_web3(
        cls,
        w3: Web3,
        *,
        address: str,
        block_identifier: BlockIdentifier = "latest",
        keys: RegistryKeys | None = None,
    ) -> ReceivedAssetsRegistry:
        return cls(
            config=RegistryConfig(
                address=address,
                keys=keys or RegistryKeys.lsp5(),
                block_identifier=block_identifier,
            ),
            w3=w3,
        )

    @classmethod
    def from_rpc_url(
        cls,
        rpc_url: str,
        *,
        address: str,
        block_identifier: BlockIdentifier = "latest",
        keys: RegistryKeys | None = None,
    ) -> ReceivedAssetsRegistry:
        w3 = Web3(Web3.HTTPProvider(rpc_url))
        return cls.from_web3(
            w3, address=address, block_identifier=block_identifier, keys=keys
        )

    @classmethod
    def from_network(
        cls,
        network: str,
        *,
        address: str,
        block_identifier: BlockIdentifier = "latest",
        keys: RegistryKeys | None = None,
    ) -> ReceivedAssetsRegistry:
        deployment = get_network(network)
        return cls.from_rpc_url(
            deployment.rpc_url,
            address=address,
            block_identifier=block_identifier,
            keys=keys,
        )

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        keys: RegistryKeys | None = None,
    ) -> ReceivedAssetsRegistry:
        """
        Build a registry from environment variables.

        - `LSP5_ADDRESS` (required): the ERC725Y contract to read
        - `LSP5_RPC_URL`, else `WEB3_PROVIDER_URI`, else the RPC of `LSP5_NETWORK`
        """
        env = os.environ if environ is None else environ

        address = env.get(ENV_ADDRESS)
        if not address:
            raise RegistryResolutionError(f"{ENV_ADDRESS} is not set")

        rpc_url = env.get(ENV_RPC_URL) or env.get(ENV_WEB3_PROVIDER_URI)
        if not rpc_url:
            network = env.get(ENV_NETWORK)
            if not network:
                raise RegistryResolutionError(
                    f"Set {ENV_RPC_URL}, {ENV_WEB3_PROVIDER_URI} or {ENV_NETWORK}"
                )
            rpc_url = get_network(network).rpc_url

        logger.debug("Registry for %s via %s", address, rpc_url)
        return cls.from_rpc_url(rpc_url, address=address, keys=keys)

    # ------------------------------------------------------------------
    # Convenience
    # ------------------------------------------------------------------

    def received_assets(self) -> list[str]:
        return self.read.all_entries()

    def received_vaults(self) -> IndexedRegistryRead:
        """A reader over the same store using the LSP10 Received Vaults keys."""
        return IndexedRegistryRead(
            store=self.store, keys=RegistryKeys.lsp10(), holder=self.config.address
        )

    def assets_with_balance(
        self, *, policy: BalancePolicy = BalancePolicy.TOLERANT
    ) -> list[str]:
        return self.read.entries_with_balance(self.oracle, policy=policy)

    def validate_balances(
        self, *, policy: BalancePolicy = BalancePolicy.TOLERANT
    ) -> list[bool]:
        return self.read.validate_balances(self.oracle, policy=policy)
