"""
Nexarion CLI

Command-line interface for read-only Pi Network contract queries.

Commands:
  node-count   - Total number of registered nodes
  node         - Node record for an address
  balance      - Pi balance of an address
  node-active  - Whether a node is active
  info         - Show endpoint, contract and chain information
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Optional

import click
from dotenv import find_dotenv, load_dotenv

from .config import (
    ENV_ABI_PATH,
    ENV_CONTRACT_ADDRESS,
    ENV_RPC_ENDPOINT,
    ENV_RPC_TIMEOUT,
    ConfigError,
    Settings,
)
from .chain.rpc import RpcClient
from .pi_network.accessor import PiNetworkAccessor, QueryResult


# ============ Constants ============

VERSION = "0.1.0"

EXIT_QUERY_FAILED = 1
EXIT_CONFIG_ERROR = 2


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="nexarion")
@click.option("--rpc-url", envvar=ENV_RPC_ENDPOINT, help="Node RPC endpoint URL")
@click.option("--contract", envvar=ENV_CONTRACT_ADDRESS, help="Pi Network contract address")
@click.option(
    "--abi",
    "abi_path",
    envvar=ENV_ABI_PATH,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Contract ABI artifact (default: bundled)",
)
@click.option("--timeout", envvar=ENV_RPC_TIMEOUT, type=float, default=None, help="RPC timeout in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    contract: Optional[str],
    abi_path: Optional[Path],
    timeout: Optional[float],
    verbose: bool,
) -> None:
    """Nexarion: read-only Pi Network contract queries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {
        ENV_RPC_ENDPOINT: rpc_url or "",
        ENV_CONTRACT_ADDRESS: contract or "",
        ENV_ABI_PATH: str(abi_path) if abi_path else "",
        ENV_RPC_TIMEOUT: str(timeout) if timeout is not None else "",
    }
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Queries ============


@cli.command("node-count")
@click.pass_context
def node_count(ctx: click.Context) -> None:
    """Show the total number of registered nodes."""
    accessor = _build_accessor(ctx)
    result = _run(accessor.get_node_count())
    click.echo(f"Node count: {_require(result, 'getNodeCount')}")


@cli.command()
@click.argument("address")
@click.pass_context
def node(ctx: click.Context, address: str) -> None:
    """Show the node record registered for ADDRESS."""
    accessor = _build_accessor(ctx)
    result = _run(accessor.get_node_by_address(address))
    record = _require(result, "getNodeByAddress")
    click.echo(json.dumps(record, indent=2, default=_json_default))


@cli.command()
@click.argument("address")
@click.pass_context
def balance(ctx: click.Context, address: str) -> None:
    """Show the Pi balance of ADDRESS."""
    accessor = _build_accessor(ctx)
    result = _run(accessor.get_pi_balance(address))
    click.echo(f"Balance: {_require(result, 'getPiBalance')}")


@cli.command("node-active")
@click.argument("address")
@click.pass_context
def node_active(ctx: click.Context, address: str) -> None:
    """Show whether the node at ADDRESS is active."""
    accessor = _build_accessor(ctx)
    result = _run(accessor.is_node_active(address))
    active = _require(result, "isNodeActive")
    if active:
        click.secho("Active: yes", fg="green")
    else:
        click.secho("Active: no", fg="yellow")


# ============ Info ============


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show endpoint, contract and chain information."""
    accessor = _build_accessor(ctx)
    reference = accessor.reference

    click.echo(click.style("  Endpoint:  ", dim=True) + reference.endpoint)
    click.echo(click.style("  Contract:  ", dim=True) + reference.address)
    click.echo(click.style("  Functions: ", dim=True) + ", ".join(reference.function_names()))

    try:
        chain_id = _run(accessor.rpc.chain_id())
        click.echo(click.style("  Chain ID:  ", dim=True) + str(chain_id))
    except Exception:
        click.echo(click.style("  Chain ID:  ", dim=True) + "(unable to read)")


# ============ Helper Functions ============


def _build_accessor(ctx: click.Context) -> PiNetworkAccessor:
    try:
        settings = Settings.from_env(env=ctx.obj)
        reference = settings.contract_reference()
    except (ConfigError, FileNotFoundError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    return PiNetworkAccessor(
        reference,
        rpc=RpcClient(settings.rpc_endpoint, timeout=settings.rpc_timeout),
    )


def _run(coro: Awaitable[Any]) -> Any:
    return asyncio.run(coro)  # type: ignore[arg-type]


def _require(result: QueryResult[Any], function_name: str) -> Any:
    if not result.ok:
        click.secho(f"ERROR: {function_name} failed: {result.error}", fg="red", err=True)
        sys.exit(EXIT_QUERY_FAILED)
    return result.value


def _json_default(value: Any) -> Any:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return str(value)


# ============ Entry Points ============


def main() -> None:
    """Nexarion CLI entry point."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=False)
    cli()


if __name__ == "__main__":
    main()
