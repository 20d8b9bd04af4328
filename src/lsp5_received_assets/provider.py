from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from web3 import Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from . import constants as const
from .abi import BALANCE_OF_ABI, ERC725Y_ABI
from .codec import AddressLike, to_checksum_address
from .errors import OracleCallError

if TYPE_CHECKING:  # pragma: no cover
    from web3.contract import Contract

logger = logging.getLogger(__name__)

BlockIdentifier = str | int


@dataclass(slots=True)
class Web3DataStore:
    """
    ERC725Y key-value store backed by `eth_call` through web3.

    The only required contract methods are:
    - `getData(bytes32)`
    - `getDataBatch(bytes32[])` (optional; disable with `use_batch=False`, and turned
      off automatically the first time the contract rejects it)

    Pin `block_identifier` to a block number to make a multi-read enumeration
    observe a single state.
    """

    w3: Web3
    address: str
    block_identifier: BlockIdentifier = "latest"
    use_batch: bool = True
    _contract: Contract = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.address = to_checksum_address(self.address)
        self._contract = self.w3.eth.contract(address=self.address, abi=ERC725Y_ABI)

    def get_data(self, key: bytes) -> bytes:
        value = self._contract.functions.getData(bytes(key)).call(
            block_identifier=self.block_identifier
        )
        return bytes(value)

    def get_data_batch(self, keys: Sequence[bytes]) -> list[bytes]:
        if not self.use_batch:
            return [self.get_data(k) for k in keys]
        logger.debug("getDataBatch on %s for %d keys", self.address, len(keys))
        try:
            values = self._contract.functions.getDataBatch(
                [bytes(k) for k in keys]
            ).call(block_identifier=self.block_identifier)
        except (ContractLogicError, BadFunctionCallOutput) as e:
            # Contract has no getDataBatch; read key by key from now on.
            logger.debug("getDataBatch unavailable on %s: %s", self.address, e)
            self.use_batch = False
            return [self.get_data(k) for k in keys]
        return [bytes(v) for v in values]

    def supports_erc725y(self) -> bool:
        """ERC165 check; False if the contract does not answer `supportsInterface`."""
        try:
            return bool(
                self._contract.functions.supportsInterface(
                    const.INTERFACEID_ERC725Y
                ).call(block_identifier=self.block_identifier)
            )
        except (ContractLogicError, BadFunctionCallOutput):
            return False


@dataclass(slots=True)
class Web3BalanceOracle:
    """
    Balance lookups via `balanceOf(address)` on each asset contract (LSP7, LSP8 and ERC20
    all expose it).

    Reverts and undecodable (empty) return data are reported as `OracleCallError`; any
    other provider error propagates unchanged.
    """

    w3: Web3
    block_identifier: BlockIdentifier = "latest"

    def has_code(self, account: AddressLike) -> bool:
        code = self.w3.eth.get_code(
            to_checksum_address(account), block_identifier=self.block_identifier
        )
        return len(code) > 0

    def balance_of(self, asset: AddressLike, holder: AddressLike) -> int:
        contract: Any = self.w3.eth.contract(
            address=to_checksum_address(asset), abi=BALANCE_OF_ABI
        )
        try:
            value = contract.functions.balanceOf(to_checksum_address(holder)).call(
                block_identifier=self.block_identifier
            )
        except (ContractLogicError, BadFunctionCallOutput) as e:
            raise OracleCallError(
                f"balanceOf failed on {to_checksum_address(asset)}: {e}"
            ) from e
        return int(value)
