"""Command line entry point: ``pricewatch``."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from pricewatch.core.config import get_settings
from pricewatch.core.observability.error_codes import ErrorCode, get_error_info
from pricewatch.core.observability.logging import setup_logging
from pricewatch.interfaces.bootstrap import price_tracker_service
from pricewatch.modules.price_tracker.errors import PriceTrackerError
from pricewatch.modules.price_tracker.notifier import format_price
from pricewatch.modules.price_tracker.service import RefreshReport
from pricewatch.modules.price_tracker.urls import store_display_name

console = Console()
app = typer.Typer(help="Track product prices and get e-mailed when they drop.")


def _setup() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")


def _items_table(items: list) -> Table:
    table = Table(title="Tracked items")
    table.add_column("ID", justify="right")
    table.add_column("Store")
    table.add_column("Title")
    table.add_column("Original", justify="right")
    table.add_column("Current", justify="right")
    for item in items:
        current = format_price(item.current_price)
        if (
            item.current_price is not None
            and item.original_price is not None
            and item.current_price < item.original_price
        ):
            current = f"[green]{current}[/green]"
        table.add_row(
            str(item.id),
            store_display_name(item.store_domain),
            item.title or "",
            format_price(item.original_price),
            current,
        )
    return table


def _hint(code: str | None) -> str:
    try:
        error_code = ErrorCode(code)
    except ValueError:
        error_code = ErrorCode.UNKNOWN
    return get_error_info(error_code).recovery_hint


def _print_report(report: RefreshReport) -> None:
    console.print(_items_table(report.items))
    failed = [outcome for outcome in report.outcomes if not outcome.success]
    for outcome in failed:
        console.print(f"[red]Item {outcome.item_id}: {outcome.error}[/red]")
        console.print(f"  [dim]{_hint(outcome.error_code)}[/dim]")
    console.print(
        f"{len(report.outcomes) - len(failed)} refreshed, {len(failed)} failed, "
        f"{report.drop_count} new drop(s)"
        + (" (e-mail sent)" if report.notified else "")
    )


@app.command()
def serve() -> None:
    """Start the HTTP API."""
    from pricewatch.interfaces.http.app import run

    run()


@app.command()
def add(url: str = typer.Argument(..., help="Product page URL to track.")) -> None:
    """Start tracking a product."""
    _setup()

    async def _add() -> None:
        async with price_tracker_service(get_settings()) as service:
            item = await service.add_item(url)
        console.print(
            f"[green]Tracking[/green] {item.title} at {format_price(item.current_price)}"
            f" (id {item.id})"
        )

    try:
        asyncio.run(_add())
    except PriceTrackerError as exc:
        console.print(f"[red]{exc.message}[/red]")
        console.print(f"[dim]{get_error_info(exc.code).recovery_hint}[/dim]")
        raise typer.Exit(code=1) from exc


@app.command()
def remove(item_id: int = typer.Argument(..., help="ID of the item to stop tracking.")) -> None:
    """Stop tracking a product."""
    _setup()

    async def _remove() -> None:
        async with price_tracker_service(get_settings()) as service:
            await service.delete_item(item_id)

    try:
        asyncio.run(_remove())
    except PriceTrackerError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"Removed item {item_id}")


@app.command()
def items() -> None:
    """List tracked items."""
    _setup()

    async def _list() -> list:
        async with price_tracker_service(get_settings()) as service:
            return await service.list_items()

    tracked = asyncio.run(_list())
    if not tracked:
        console.print("No items tracked yet.")
        return
    console.print(_items_table(tracked))


@app.command()
def refresh() -> None:
    """Run one refresh cycle and e-mail any new price drops."""
    _setup()

    async def _refresh() -> RefreshReport:
        async with price_tracker_service(get_settings()) as service:
            return await service.run_refresh_cycle()

    _print_report(asyncio.run(_refresh()))


if __name__ == "__main__":  # pragma: no cover
    app()
