from .balance import BalanceOracle, BalancePolicy, InMemoryBalanceOracle, check_balance
from .reader import IndexedRegistryRead

__all__ = [
    "BalanceOracle",
    "BalancePolicy",
    "InMemoryBalanceOracle",
    "IndexedRegistryRead",
    "check_balance",
]
