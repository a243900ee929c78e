"""CLI for onchain transfers and staking balances."""

import asyncio
import json
import logging
import os
from enum import StrEnum
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from onchain_transfers.core import OnchainTransfersError, StakingBalance, Transfer
from onchain_transfers.data import get_supported_networks, get_wait_defaults, load_settings
from onchain_transfers.integrations import CDPClient
from onchain_transfers.signing import LocalAccountSigner

# Install rich traceback handler
install(show_locals=False)

WAIT_INTERVAL, WAIT_TIMEOUT = get_wait_defaults()

app = typer.Typer(
    name="onchain-transfers",
    help="Broadcast transfers, wait for confirmation, and list staking balance history",
    add_completion=False,
)

console = Console()


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _make_client() -> CDPClient:
    return CDPClient.from_settings()


def _run(coro: Any, debug: bool) -> Any:
    """Run a coroutine, turning package and input errors into a non-zero exit."""
    try:
        return asyncio.run(coro)
    except (OnchainTransfersError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        if debug:
            raise
        raise typer.Exit(1) from e


def _transfer_data(transfer: Transfer) -> dict[str, Any]:
    return {
        "transfer_id": transfer.id,
        "network_id": transfer.network_id,
        "wallet_id": transfer.wallet_id,
        "from_address_id": transfer.from_address_id,
        "destination_address_id": transfer.destination_address_id,
        "asset_id": transfer.asset_id,
        "amount": str(transfer.amount) if transfer.model.asset.decimals is not None else None,
        "atomic_amount": str(transfer.atomic_amount),
        "status": transfer.status.value if transfer.status else None,
        "transaction_hash": transfer.transaction_hash,
        "transaction_link": transfer.transaction_link,
        "gasless": transfer.model.gasless,
    }


def _output_transfer(transfer: Transfer, format: OutputFormat) -> None:
    data = _transfer_data(transfer)
    if format == OutputFormat.JSON:
        console.print_json(json.dumps(data))
        return

    table = Table(title=f"Transfer {transfer.id}", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value", style="white")
    for key, value in data.items():
        table.add_row(key, "-" if value is None else str(value))
    console.print(table)


async def _show_transfer(
    wallet_id: str,
    address_id: str,
    transfer_id: str,
    wait: bool,
    interval: float,
    timeout: float,
) -> Transfer:
    async with _make_client() as client:
        transfer = await Transfer.fetch(client, wallet_id, address_id, transfer_id)
        if wait:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(f"Waiting for transfer {transfer_id}...", total=None)
                await transfer.wait(interval_seconds=interval, timeout_seconds=timeout)
                progress.update(task, description=f"✓ Transfer {transfer.status}")
        return transfer


async def _broadcast_transfer(
    wallet_id: str,
    address_id: str,
    transfer_id: str,
    signer: LocalAccountSigner,
    wait: bool,
    interval: float,
    timeout: float,
) -> Transfer:
    async with _make_client() as client:
        transfer = await Transfer.fetch(client, wallet_id, address_id, transfer_id)
        transfer.sign(signer)
        await transfer.broadcast()
        console.print(f"[green]✓ Broadcast transfer {transfer.id}[/green]")
        if wait:
            await transfer.wait(interval_seconds=interval, timeout_seconds=timeout)
        return transfer


async def _list_staking_balances(
    network_id: str,
    asset_id: str,
    address_id: str,
    start: str,
    end: str,
) -> list[StakingBalance]:
    async with _make_client() as client:
        return await StakingBalance.list(client, network_id, asset_id, address_id, start, end)


@app.command()
def transfer(
    wallet_id: str = typer.Argument(..., help="Wallet that owns the source address"),
    address_id: str = typer.Argument(..., help="Source address"),
    transfer_id: str = typer.Argument(..., help="Transfer identifier"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Poll until the transfer completes or fails"),
    interval: float = typer.Option(WAIT_INTERVAL, "--interval", help="Seconds between polls"),
    timeout: float = typer.Option(WAIT_TIMEOUT, "--timeout", help="Seconds before giving up"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Show a transfer, optionally waiting for it to reach a terminal status.

    Examples:

        onchain-transfers transfer WALLET 0xABC... TRANSFER_ID --wait
    """
    _configure_logging(debug)
    result = _run(_show_transfer(wallet_id, address_id, transfer_id, wait, interval, timeout), debug)
    _output_transfer(result, format)


@app.command()
def broadcast(
    wallet_id: str = typer.Argument(..., help="Wallet that owns the source address"),
    address_id: str = typer.Argument(..., help="Source address"),
    transfer_id: str = typer.Argument(..., help="Transfer identifier"),
    key_env: str = typer.Option("PRIVATE_KEY", "--key-env", help="Environment variable holding the private key"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Poll until the transfer completes or fails"),
    interval: float = typer.Option(WAIT_INTERVAL, "--interval", help="Seconds between polls"),
    timeout: float = typer.Option(WAIT_TIMEOUT, "--timeout", help="Seconds before giving up"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Sign a transfer with a local key and broadcast it."""
    _configure_logging(debug)

    private_key = os.environ.get(key_env)
    if not private_key:
        console.print(f"[bold red]Missing private key:[/bold red] set the {key_env} environment variable")
        raise typer.Exit(1)

    try:
        signer = LocalAccountSigner.from_key(private_key)
    except ValueError as e:
        console.print(f"[bold red]Invalid private key in {key_env}:[/bold red] {escape(str(e))}")
        raise typer.Exit(1) from e

    result = _run(
        _broadcast_transfer(wallet_id, address_id, transfer_id, signer, wait, interval, timeout),
        debug,
    )
    _output_transfer(result, format)


@app.command()
def staking_balances(
    network_id: str = typer.Argument(..., help="Network (e.g., ethereum-mainnet)"),
    asset_id: str = typer.Argument(..., help="Staked asset (e.g., eth)"),
    address_id: str = typer.Argument(..., help="Onchain address"),
    start: str = typer.Option(..., "--start", help="ISO 8601 start time"),
    end: str = typer.Option(..., "--end", help="ISO 8601 end time"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """List the daily staking balances of an address between two times."""
    _configure_logging(debug)
    balances = _run(_list_staking_balances(network_id, asset_id, address_id, start, end), debug)

    if format == OutputFormat.JSON:
        data = [
            {
                "date": balance.date.isoformat(),
                "address_id": balance.address_id,
                "participate_type": balance.participate_type,
                "bonded_stake": str(balance.bonded_stake.amount),
                "unbonded_stake": str(balance.unbonded_stake.amount),
                "total_delegation": str(balance.total_delegation.amount),
            }
            for balance in balances
        ]
        console.print_json(json.dumps(data))
        return

    if not balances:
        console.print("\n[yellow]No staking balances found[/yellow]")
        return

    table = Table(title=f"Staking balances for {address_id}", show_header=True, header_style="bold magenta")
    table.add_column("Date", style="cyan")
    table.add_column("Type", style="yellow")
    table.add_column("Bonded", style="green", justify="right")
    table.add_column("Unbonded", style="white", justify="right")
    table.add_column("Delegation", style="white", justify="right")

    for balance in balances:
        table.add_row(
            balance.date.date().isoformat(),
            balance.participate_type,
            f"{balance.bonded_stake.amount:,.6f}",
            f"{balance.unbonded_stake.amount:,.6f}",
            f"{balance.total_delegation.amount:,.6f}",
        )

    console.print(table)
    console.print(f"[bold]Total records:[/bold] {len(balances)}")


@app.command()
def list_networks() -> None:
    """List all supported networks."""
    networks = load_settings()["networks"]

    table = Table(title="Supported Networks", show_header=True, header_style="bold magenta")
    table.add_column("Network", style="cyan")
    table.add_column("Chain ID", style="green")
    table.add_column("Native Asset", style="yellow")

    for network_id in get_supported_networks():
        config = networks[network_id] or {}
        table.add_row(network_id, str(config.get("chain_id", "-")), config.get("native_asset", "-"))

    console.print(table)


if __name__ == "__main__":
    app()
