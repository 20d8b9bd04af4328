"""
Unit tests for lsp5_received_assets.networks.
"""

import pytest

from lsp5_received_assets import (
    DEFAULT_NETWORKS,
    NetworkDeployment,
    UnknownNetworkError,
    get_network,
)
from lsp5_received_assets import networks


class TestNetworks:
    """Tests for the known networks table and get_network."""

    def test_known_networks(self) -> None:
        """The table holds localnet, testnet and mainnet with their chain ids."""
        assert set(DEFAULT_NETWORKS) == {"localnet", "testnet", "mainnet"}
        assert get_network("mainnet").chain_id == networks.LUKSO_MAINNET_CHAIN_ID
        assert get_network("testnet").chain_id == networks.LUKSO_TESTNET_CHAIN_ID
        assert get_network("localnet").chain_id is None

    def test_lookup_is_case_insensitive(self) -> None:
        """Network names are matched regardless of case."""
        assert get_network("MAINNET") is DEFAULT_NETWORKS["mainnet"]

    def test_unknown_network(self) -> None:
        """An unknown name raises UnknownNetworkError."""
        with pytest.raises(UnknownNetworkError, match="Unknown network 'goerli'"):
            get_network("goerli")

    def test_chain_id_required_off_localnet(self) -> None:
        """Only localnet may omit the chain id."""
        with pytest.raises(ValueError, match="chain_id"):
            NetworkDeployment(network="mainnet", chain_id=None, rpc_url="http://x")
