__all__ = [
    # Configuration
    "ConfigError",
    "Settings",
    # Chain
    "ContractReference",
    "RpcClient",
    "RpcError",
    "load_abi",
    # Pi Network
    "PiNetworkAccessor",
    "QueryResult",
    "get_node_count",
    "get_node_by_address",
    "get_pi_balance",
    "is_node_active",
]

from .config import ConfigError, Settings
from .chain.abi import load_abi
from .chain.contract import ContractReference
from .chain.rpc import RpcClient, RpcError
from .pi_network import (
    PiNetworkAccessor,
    QueryResult,
    get_node_by_address,
    get_node_count,
    get_pi_balance,
    is_node_active,
)
