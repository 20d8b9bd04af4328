"""Minimal ABI fragments for the contract calls the SDK makes."""

from typing import Any, Final

ERC725Y_ABI: Final[list[dict[str, Any]]] = [
    {
        "type": "function",
        "name": "getData",
        "stateMutability": "view",
        "inputs": [{"name": "dataKey", "type": "bytes32"}],
        "outputs": [{"name": "dataValue", "type": "bytes"}],
    },
    {
        "type": "function",
        "name": "getDataBatch",
        "stateMutability": "view",
        "inputs": [{"name": "dataKeys", "type": "bytes32[]"}],
        "outputs": [{"name": "dataValues", "type": "bytes[]"}],
    },
    {
        "type": "function",
        "name": "supportsInterface",
        "stateMutability": "view",
        "inputs": [{"name": "interfaceId", "type": "bytes4"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
]

BALANCE_OF_ABI: Final[list[dict[str, Any]]] = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "tokenOwner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]
