"""Shared fixtures: a fake JSON-RPC node served through httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest
from eth_abi import encode

from nexarion.chain.abi import find_function, load_abi, output_types
from nexarion.chain.contract import ContractReference
from nexarion.chain.rpc import RpcClient, encode_function_call
from nexarion.pi_network.accessor import PiNetworkAccessor

RPC_URL = "https://rpc.test.invalid"
CONTRACT = "0x" + "ab" * 20
NODE = "0x" + "11" * 20
USER = "0x" + "22" * 20

Responder = Callable[[httpx.Request], Any]


class FakeNode:
    """
    Minimal eth_call responder for the Pi Network ABI.

    ``returns`` maps a contract function name to the Python values it
    returns; they are ABI-encoded on the way out. ``override`` lets a test
    take over a function entirely (raise, return an error object, ...).
    """

    def __init__(self, abi: tuple[dict[str, Any], ...]) -> None:
        self.abi = abi
        self.returns: dict[str, list[Any]] = {}
        self.override: dict[str, Responder] = {}
        self.calls: list[dict[str, Any]] = []
        self.chain_id = "0x14a34"
        self._selectors = {}
        for entry in abi:
            if entry.get("type") != "function":
                continue
            args = [NODE] * len(entry.get("inputs", []))
            self._selectors[encode_function_call(abi, entry["name"], args)[:10]] = entry["name"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append(payload)

        if payload["method"] == "eth_chainId":
            return _ok(self.chain_id)

        data = payload["params"][0]["data"]
        name = self._selectors[data[:10]]
        if name in self.override:
            result = self.override[name](request)
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json=result)

        types = output_types(find_function(self.abi, name))
        return _ok("0x" + encode(types, self.returns[name]).hex())

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def _ok(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def rpc_error(code: int, message: str, data: Optional[str] = None) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": 1, "error": error}


@pytest.fixture()
def abi() -> tuple[dict[str, Any], ...]:
    return load_abi()


@pytest.fixture()
def node(abi: tuple[dict[str, Any], ...]) -> FakeNode:
    fake = FakeNode(abi)
    fake.returns = {
        "getNodeCount": [5],
        "getNodeByAddress": [(NODE, "alpha", 3_000, 1_700_000_000, True)],
        "getPiBalance": [42 * 10**18],
        "isNodeActive": [True],
    }
    return fake


@pytest.fixture()
def reference(abi: tuple[dict[str, Any], ...]) -> ContractReference:
    return ContractReference(endpoint=RPC_URL, address=CONTRACT, abi=abi)


@pytest.fixture()
def accessor(reference: ContractReference, node: FakeNode) -> PiNetworkAccessor:
    return PiNetworkAccessor(reference, rpc=RpcClient(RPC_URL, transport=node.transport()))
