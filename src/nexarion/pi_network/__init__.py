"""
Pi Network - read-only queries against the Pi Network contract.

Module-level helpers use a process-wide accessor built lazily from
``Settings.from_env()``. Build a PiNetworkAccessor directly to query a
different endpoint or contract.
"""

from __future__ import annotations

from typing import Any, Optional

from ..config import Settings
from ..chain.rpc import RpcClient
from .accessor import PiNetworkAccessor, QueryResult

__all__ = [
    "PiNetworkAccessor",
    "QueryResult",
    "default_accessor",
    "reset_default_accessor",
    "get_node_count",
    "get_node_by_address",
    "get_pi_balance",
    "is_node_active",
]

_default: Optional[PiNetworkAccessor] = None


def default_accessor() -> PiNetworkAccessor:
    """Return the shared accessor, building it from the environment on first use.

    Raises:
        ConfigError: If RPC_ENDPOINT or CONTRACT_ADDRESS is missing
    """
    global _default
    if _default is None:
        settings = Settings.from_env()
        _default = PiNetworkAccessor(
            settings.contract_reference(),
            rpc=RpcClient(settings.rpc_endpoint, timeout=settings.rpc_timeout),
        )
    return _default


def reset_default_accessor() -> None:
    global _default
    _default = None


async def get_node_count() -> QueryResult[int]:
    return await default_accessor().get_node_count()


async def get_node_by_address(node_address: str) -> QueryResult[dict[str, Any]]:
    return await default_accessor().get_node_by_address(node_address)


async def get_pi_balance(user_address: str) -> QueryResult[int]:
    return await default_accessor().get_pi_balance(user_address)


async def is_node_active(node_address: str) -> QueryResult[bool]:
    return await default_accessor().is_node_active(node_address)
