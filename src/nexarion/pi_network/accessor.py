"""
Pi Network contract accessor.

Four read-only queries against the deployed Pi Network contract. Every query
is one eth_call; any failure is logged once and folded into a failed
QueryResult instead of propagating, so callers always get a value back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from ..chain.contract import ContractReference
from ..chain.rpc import RpcClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """
    Outcome of one contract query.

    ``value`` is None (the absent sentinel) when the call failed, and
    ``error`` then holds the caught exception. Use ``ok`` rather than the
    truthiness of ``value``: a successful ``False`` or ``0`` is a real answer.
    """

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        if self.ok:
            return self.value  # type: ignore[return-value]
        return default

    @classmethod
    def success(cls, value: T) -> "QueryResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "QueryResult[T]":
        return cls(error=error)


class PiNetworkAccessor:
    """
    Read-only accessor bound to one ContractReference.

    Args:
        reference: Endpoint, address and ABI of the contract
        rpc: RPC client to use (default: one built for reference.endpoint)
    """

    def __init__(self, reference: ContractReference, *, rpc: Optional[RpcClient] = None) -> None:
        self.reference = reference
        self.rpc = rpc or RpcClient(reference.endpoint)

    def __repr__(self) -> str:
        return f"PiNetworkAccessor(address={self.reference.address!r}, endpoint={self.reference.endpoint!r})"

    async def _query(self, function_name: str, *args: Any) -> QueryResult[Any]:
        try:
            value = await self.rpc.call(
                self.reference.address,
                self.reference.abi,
                function_name,
                list(args),
            )
        except Exception as exc:
            logger.exception("%s call on %s failed: %s", function_name, self.reference.address, exc)
            return QueryResult.failure(exc)
        return QueryResult.success(value)

    async def get_node_count(self) -> QueryResult[int]:
        """Total number of registered nodes."""
        return await self._query("getNodeCount")

    async def get_node_by_address(self, node_address: str) -> QueryResult[dict[str, Any]]:
        """
        Node record registered for ``node_address``.

        The record is a dict keyed by the struct field names in the ABI.
        A contract revert for an unknown node is reported as a failure,
        like any transport error.
        """
        return await self._query("getNodeByAddress", node_address)

    async def get_pi_balance(self, user_address: str) -> QueryResult[int]:
        """Pi balance held by ``user_address``, in the contract's base units."""
        return await self._query("getPiBalance", user_address)

    async def is_node_active(self, node_address: str) -> QueryResult[bool]:
        return await self._query("isNodeActive", node_address)
