"""
Async JSON-RPC client for read-only contract calls.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Each request opens its own AsyncClient scope, so one RpcClient can serve any
number of concurrent calls without coordination.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx
from eth_abi import decode, encode
from eth_hash.auto import keccak

from .abi import find_function, function_signature, input_types, label_outputs, output_types

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class RpcError(RuntimeError):
    """JSON-RPC level failure: an ``error`` object or unusable return data."""

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.data = data


def keccak256(data: bytes) -> bytes:
    # NOTE: Keccak-256 != SHA3-256 (NIST). Never use hashlib.sha3_256 here.
    return keccak(data)


def encode_function_call(abi: Sequence[dict[str, Any]], function_name: str, args: Sequence[Any]) -> str:
    """
    ABI-encode a function call.

    Args:
        abi: Contract ABI
        function_name: Function name to call
        args: Function arguments

    Returns:
        0x-prefixed hex encoded calldata
    """
    func = find_function(abi, function_name)
    selector = keccak256(function_signature(func).encode("utf-8"))[:4]

    types = input_types(func)
    encoded_args = encode(types, list(args)) if types else b""

    return "0x" + selector.hex() + encoded_args.hex()


def decode_function_result(abi: Sequence[dict[str, Any]], function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Args:
        abi: Contract ABI
        function_name: Function name
        data: 0x-prefixed hex encoded return data

    Returns:
        Decoded result: single value, dict for structs, tuple for multiple outputs

    Raises:
        RpcError: If the function has outputs but the node returned no data
    """
    func = find_function(abi, function_name)
    types = output_types(func)
    if not types:
        return None

    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    if not raw:
        # Calls to an address without code (or a silent revert) come back as "0x"
        raise RpcError(f"Empty return data for {function_name}")

    return label_outputs(func, decode(types, raw))


class RpcClient:
    """
    Minimal async JSON-RPC 2.0 client bound to one node endpoint.

    Args:
        endpoint: HTTP(S) URL of the node
        timeout: Per-request timeout in seconds, enforced by httpx
        transport: Optional httpx transport (tests inject httpx.MockTransport)
    """

    def __init__(
        self,
        endpoint: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"RpcClient(endpoint={self.endpoint!r})"

    async def request(self, method: str, params: list) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses
            RpcError: If the response carries an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params,
            "id": 1,
        }
        logger.debug("rpc %s -> %s", method, self.endpoint)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
            data = response.json()

        if "error" in data:
            error = data["error"] or {}
            raise RpcError(
                f"RPC error: {error.get('message', error)}",
                code=error.get("code"),
                data=error.get("data"),
            )

        return data.get("result")

    async def call(
        self,
        contract_address: str,
        abi: Sequence[dict[str, Any]],
        function_name: str,
        args: Optional[Sequence[Any]] = None,
        block: str = "latest",
    ) -> Any:
        """
        Read from a smart contract (eth_call).

        Args:
            contract_address: 0x-prefixed contract address
            abi: Contract ABI
            function_name: Function to call
            args: Function arguments (default: none)
            block: Block tag or hex block number

        Returns:
            Decoded return value(s)
        """
        calldata = encode_function_call(abi, function_name, args or [])
        result = await self.request(
            "eth_call",
            [{"to": contract_address, "data": calldata}, block],
        )
        if result is None:
            raise RpcError(f"No result for {function_name}")
        return decode_function_result(abi, function_name, result)

    async def chain_id(self) -> int:
        """Chain ID reported by the node."""
        result = await self.request("eth_chainId", [])
        return int(result, 16)
