# Author: Green Mountain Systems AI Inc.
# Donated to IAB Tech Lab

"""CLI for exercising the bid adapter outside a host."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ...adapter.bid_adapter import BidAdapter
from ...adapter.request_builder import AmbientSignals
from ...adapter.response_interpreter import ResponseError
from ...clients.tracking_client import TrackingClient
from ...config.settings import settings
from ...environment.static import StaticRuntime

app = typer.Typer(
    name="stroeer-core",
    help="Stroeer core bid adapter CLI - validate bids, build vendor requests, interpret responses",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main() -> None:
    """Configure logging for every command."""
    logging.basicConfig(level=settings.log_level)


def _load_json(path: Path) -> Any:
    """Read a JSON file, exiting with an error on invalid content."""
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error parsing {path}:[/red] {e}")
        raise typer.Exit(1)


def _bids_of(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        return list(data.get("bids", []))
    return list(data)


@app.command()
def validate(
    bids_file: Path = typer.Argument(
        ...,
        help="JSON file with a list of bid requests or a bidder request",
        exists=True,
        readable=True,
    ),
) -> None:
    """Check bid requests against the adapter's acceptance rules."""
    adapter = BidAdapter(StaticRuntime.single())
    bids = _bids_of(_load_json(bids_file))

    table = Table(title="Bid Validation")
    table.add_column("Bid ID", style="cyan")
    table.add_column("Slot", style="magenta")
    table.add_column("Valid", justify="center")

    for bid in bids:
        valid = adapter.is_bid_request_valid(bid)
        params = bid.get("params")
        sid = params.get("sid") if isinstance(params, dict) else None
        table.add_row(
            str(bid.get("bidId", "-")),
            str(sid if sid is not None else "-"),
            "[green]yes[/green]" if valid else "[red]no[/red]",
        )

    console.print(table)


@app.command()
def build(
    bidder_request_file: Path = typer.Argument(
        ...,
        help="JSON file with the bidder request (auctionId, bids, timeout, auctionStart)",
        exists=True,
        readable=True,
    ),
    env_file: Optional[Path] = typer.Option(
        None,
        "--env",
        "-e",
        help="JSON description of the frame chain (defaults to one https top-level page)",
        exists=True,
        readable=True,
    ),
    ab: Optional[str] = typer.Option(
        None,
        "--ab",
        help="A/B testing key values as a JSON object",
    ),
    yield_test: bool = typer.Option(
        False,
        "--yield-test",
        help="Behave as if the persisted yield test flag is set",
    ),
    now: Optional[int] = typer.Option(
        None,
        "--now",
        help="Current time in epoch millis used for the remaining timeout",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Save the request to a JSON file",
    ),
) -> None:
    """Build the vendor request for the valid bids of a bidder request."""
    bidder_request = _load_json(bidder_request_file)
    runtime = StaticRuntime.from_dict(_load_json(env_file)) if env_file else StaticRuntime.single()

    ab_values = None
    if ab:
        try:
            ab_values = json.loads(ab)
        except json.JSONDecodeError as e:
            console.print(f"[red]Error parsing --ab:[/red] {e}")
            raise typer.Exit(1)

    ambient = AmbientSignals(yield_test="1" if yield_test else None, ab=ab_values)
    adapter = BidAdapter(runtime, clock=(lambda: now) if now is not None else None)

    valid = [bid for bid in _bids_of(bidder_request) if adapter.is_bid_request_valid(bid)]
    if not valid:
        console.print("[yellow]No valid bid requests, nothing to send.[/yellow]")
        raise typer.Exit(1)

    request = adapter.build_requests(valid, bidder_request, ambient).to_wire()

    console.print(
        Panel(
            f"[bold]{request['method']}[/bold] {request['url']}\n"
            f"[bold]Bids:[/bold] {len(request['data']['bids'])}",
            title="Vendor Request",
        )
    )
    console.print(Syntax(json.dumps(request["data"], indent=2), "json"))

    if output:
        with open(output, "w") as f:
            json.dump(request, f, indent=2)
        console.print(f"\n[green]Request saved to {output}[/green]")


@app.command()
def interpret(
    response_file: Path = typer.Argument(
        ...,
        help="JSON file with the vendor response body",
        exists=True,
        readable=True,
    ),
    no_tracking: bool = typer.Option(
        False,
        "--no-tracking",
        help="Do not call the tracking endpoint of the response",
    ),
) -> None:
    """Interpret a vendor response body into normalized bids."""
    body = _load_json(response_file)

    with TrackingClient() as tracker:
        adapter = BidAdapter(StaticRuntime.single(), tracker=None if no_tracking else tracker)
        try:
            bids = adapter.interpret_response({"body": body})
        except ResponseError as e:
            console.print(f"[red]Error interpreting response:[/red] {e}")
            raise typer.Exit(1)

    if not bids:
        console.print("[yellow]No bids in response.[/yellow]")
        return

    table = Table(title="Normalized Bids")
    table.add_column("Request ID", style="cyan")
    table.add_column("CPM", justify="right", style="green")
    table.add_column("Size", justify="right")
    table.add_column("Currency")
    table.add_column("TTL", justify="right")
    table.add_column("Extra")

    standard = {"requestId", "cpm", "width", "height", "ad", "ttl", "currency", "netRevenue", "creativeId"}
    for bid in bids:
        extra = {k: v for k, v in bid.items() if k not in standard}
        table.add_row(
            str(bid["requestId"]),
            f"{bid['cpm']:.2f}",
            f"{bid['width']}x{bid['height']}",
            bid["currency"],
            str(bid["ttl"]),
            json.dumps(extra) if extra else "",
        )

    console.print(table)


@app.command()
def syncs(
    iframe: bool = typer.Option(
        True,
        "--iframe/--no-iframe",
        help="Whether the host allows iframe syncs",
    ),
    responses: int = typer.Option(
        1,
        "--responses",
        "-r",
        help="Number of responses received so far",
    ),
) -> None:
    """Show the user syncs the adapter would request."""
    adapter = BidAdapter(StaticRuntime.single())
    descriptors = adapter.get_user_syncs({"iframeEnabled": iframe}, [{}] * responses)

    if not descriptors:
        console.print("[yellow]No user syncs.[/yellow]")
        return

    for descriptor in descriptors:
        console.print(f"[cyan]{descriptor['type']}[/cyan] {descriptor['url']}")


if __name__ == "__main__":
    app()
