"""
ABI Loader - Loads the Pi Network contract ABI from a JSON artifact.

Accepts either a bare ABI list or a compiler artifact (Truffle, Hardhat,
Foundry) carrying the ABI under its "abi" key. The bundled artifact under
nexarion/abis/ is used when no path is configured.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Sequence

DEFAULT_ABI_PATH = Path(__file__).resolve().parent.parent / "abis" / "PiNetworkContract.json"


@lru_cache(maxsize=16)
def _load_abi_cached(path: Path) -> tuple[dict[str, Any], ...]:
    if not path.exists():
        raise FileNotFoundError(f"ABI not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        artifact = json.load(f)

    abi = artifact.get("abi") if isinstance(artifact, dict) else artifact
    if not isinstance(abi, list):
        raise ValueError(f"No ABI list in artifact: {path}")

    return tuple(abi)


def load_abi(path: Optional[Path | str] = None) -> tuple[dict[str, Any], ...]:
    """
    Load a contract ABI from a JSON artifact.

    Args:
        path: Artifact path (default: bundled PiNetworkContract.json)

    Returns:
        ABI entries as an immutable tuple of dicts

    Raises:
        FileNotFoundError: If the artifact does not exist
        ValueError: If the artifact holds no ABI list
    """
    resolved = Path(path).expanduser().resolve() if path else DEFAULT_ABI_PATH
    return _load_abi_cached(resolved)


def find_function(abi: Sequence[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """Return the ABI entry for ``function_name``.

    Raises:
        ValueError: If the ABI has no such function
    """
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def canonical_type(param: dict[str, Any]) -> str:
    """
    Canonical Solidity type of an ABI parameter.

    Tuples are expanded from their components, keeping any array suffix:
    ``tuple[]`` with (address, bool) components becomes ``(address,bool)[]``.
    """
    type_str = param["type"]
    if not type_str.startswith("tuple"):
        return type_str
    inner = ",".join(canonical_type(c) for c in param.get("components", []))
    return f"({inner}){type_str[len('tuple'):]}"


def function_signature(entry: dict[str, Any]) -> str:
    input_types = [canonical_type(inp) for inp in entry.get("inputs", [])]
    return f"{entry['name']}({','.join(input_types)})"


def input_types(entry: dict[str, Any]) -> list[str]:
    return [canonical_type(inp) for inp in entry.get("inputs", [])]


def output_types(entry: dict[str, Any]) -> list[str]:
    return [canonical_type(out) for out in entry.get("outputs", [])]


def _label(param: dict[str, Any], value: Any) -> Any:
    type_str = param["type"]
    components = param.get("components")
    if not type_str.startswith("tuple") or not components:
        return value

    if type_str != "tuple":
        # tuple[] / tuple[N]: label each element with the element type
        element = dict(param, type=type_str[: type_str.rindex("[")])
        return [_label(element, item) for item in value]

    if not all(c.get("name") for c in components):
        return tuple(_label(c, v) for c, v in zip(components, value))
    return {c["name"]: _label(c, v) for c, v in zip(components, value)}


def label_outputs(entry: dict[str, Any], values: Sequence[Any]) -> Any:
    """
    Attach ABI component names to decoded return values.

    Struct outputs become dicts keyed by component name (nested structs
    nest, struct arrays become lists of dicts). A single output is
    unwrapped; multiple outputs come back as a tuple.
    """
    outputs = entry.get("outputs", [])
    labelled = tuple(_label(p, v) for p, v in zip(outputs, values))
    if len(labelled) == 1:
        return labelled[0]
    return labelled
