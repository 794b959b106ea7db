from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ContractReference:
    """Endpoint, address and ABI of one deployed contract. Never mutated."""

    endpoint: str
    address: str
    abi: tuple[dict[str, Any], ...]

    def __post_init__(self) -> None:
        # Freeze list ABIs handed in by callers
        if not isinstance(self.abi, tuple):
            object.__setattr__(self, "abi", tuple(self.abi))

    def function_names(self) -> list[str]:
        return [e["name"] for e in self.abi if e.get("type") == "function"]
