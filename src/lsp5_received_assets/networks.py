from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final, Literal

from .errors import UnknownNetworkError

# ---------------------------------------------------------------------------
# Network constants
# ---------------------------------------------------------------------------
LUKSO_MAINNET_CHAIN_ID: Final[int] = 42
LUKSO_TESTNET_CHAIN_ID: Final[int] = 4201

LUKSO_MAINNET_RPC_URL: Final[str] = "https://rpc.mainnet.lukso.network"
LUKSO_TESTNET_RPC_URL: Final[str] = "https://rpc.testnet.lukso.network"
LOCALNET_RPC_URL: Final[str] = "http://127.0.0.1:8545"


@dataclass(frozen=True, slots=True)
class NetworkDeployment:
    """
    A known network on which Universal Profiles (and their LSP5 data) live.

    The table is data-only so it can be updated without touching the rest of the SDK.
    """

    network: Literal["mainnet", "testnet", "localnet"]
    chain_id: int | None
    rpc_url: str

    def __post_init__(self) -> None:
        if self.network != "localnet" and self.chain_id is None:
            raise ValueError(
                "`NetworkDeployment.chain_id` is required for non-localnet networks"
            )


DEFAULT_NETWORKS: Final[Mapping[str, NetworkDeployment]] = {
    "localnet": NetworkDeployment(
        network="localnet",
        chain_id=None,
        rpc_url=LOCALNET_RPC_URL,
    ),
    "testnet": NetworkDeployment(
        network="testnet",
        chain_id=LUKSO_TESTNET_CHAIN_ID,
        rpc_url=LUKSO_TESTNET_RPC_URL,
    ),
    "mainnet": NetworkDeployment(
        network="mainnet",
        chain_id=LUKSO_MAINNET_CHAIN_ID,
        rpc_url=LUKSO_MAINNET_RPC_URL,
    ),
}


def get_network(name: str) -> NetworkDeployment:
    try:
        return DEFAULT_NETWORKS[name.lower()]
    except KeyError as e:
        raise UnknownNetworkError(
            f"Unknown network {name!r}; expected one of {sorted(DEFAULT_NETWORKS)}"
        ) from e
