"""
Runtime configuration for the Pi Network accessor.

Values come from the environment, after a ``.env`` file in the working
directory has been loaded (real environment variables win):

- RPC_ENDPOINT:     node URL (required)
- CONTRACT_ADDRESS: deployed Pi Network contract (required)
- PI_NETWORK_ABI:   ABI artifact path (default: bundled artifact)
- RPC_TIMEOUT:      request timeout in seconds (default: 30)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .chain.abi import load_abi
from .chain.contract import ContractReference
from .chain.rpc import DEFAULT_TIMEOUT

ENV_RPC_ENDPOINT = "RPC_ENDPOINT"
ENV_CONTRACT_ADDRESS = "CONTRACT_ADDRESS"
ENV_ABI_PATH = "PI_NETWORK_ABI"
ENV_RPC_TIMEOUT = "RPC_TIMEOUT"

# Values shipped as "replace me" markers in deployment templates
PLACEHOLDER_MARKERS = ("YOUR_PROJECT_ID", "<", "changeme")
PLACEHOLDER_ADDRESSES = {"0x", "0x..."}


class ConfigError(ValueError):
    pass


def _is_placeholder(value: str) -> bool:
    if value in PLACEHOLDER_ADDRESSES:
        return True
    return any(marker.lower() in value.lower() for marker in PLACEHOLDER_MARKERS)


def _required(env: Mapping[str, str], name: str) -> str:
    value = (env.get(name) or "").strip()
    if not value:
        raise ConfigError(f"{name} is not set. Export it or add it to .env")
    if _is_placeholder(value):
        raise ConfigError(f"{name} still holds a placeholder value: {value}")
    return value


@dataclass(frozen=True)
class Settings:
    rpc_endpoint: str
    contract_address: str
    abi_path: Optional[Path] = None
    rpc_timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, dotenv_path: Optional[Path] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read instead of os.environ (skips .env loading)
            dotenv_path: Explicit .env file (default: search from cwd)

        Raises:
            ConfigError: If a required value is missing or a placeholder
        """
        if env is None:
            found = dotenv_path or find_dotenv(usecwd=True)
            if found:
                load_dotenv(found, override=False)
            env = os.environ

        abi_path = (env.get(ENV_ABI_PATH) or "").strip()
        timeout_raw = (env.get(ENV_RPC_TIMEOUT) or "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigError(f"{ENV_RPC_TIMEOUT} must be a number, got {timeout_raw!r}") from None

        return cls(
            rpc_endpoint=_required(env, ENV_RPC_ENDPOINT),
            contract_address=_required(env, ENV_CONTRACT_ADDRESS),
            abi_path=Path(abi_path) if abi_path else None,
            rpc_timeout=timeout,
        )

    def contract_reference(self) -> ContractReference:
        return ContractReference(
            endpoint=self.rpc_endpoint,
            address=self.contract_address,
            abi=load_abi(self.abi_path),
        )
