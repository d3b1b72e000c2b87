"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.snapshot_loader import SnapshotLoader
from ..config import AppConfig, load_config
from ..domain.exceptions import SalonSlotsError
from ..domain.models import Weekday
from ..domain.slot_generator import SlotGenerator
from ..domain.timemath import parse_date
from ..services.booking import BookingService

app = typer.Typer(
    name="salonslots",
    help="Inspect staff availability and bookable slots from a data snapshot",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]
DataOption = Annotated[
    Optional[Path],
    typer.Option("--data", help="Snapshot file (JSON or YAML). Defaults to data_file from config")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    salonslots command line interface.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_service(config: AppConfig, data_file: Optional[Path]) -> BookingService:
    """Load the snapshot and wire up the booking service."""
    path = data_file or config.data_file
    if path is None:
        console.print("[bold red]Error:[/bold red] No snapshot file given (--data or data_file in config)")
        raise typer.Exit(1)

    snapshot = SnapshotLoader(path).load()
    service = BookingService(
        snapshot,
        slot_generator=SlotGenerator(config.defaults.slot_duration_minutes),
        active_statuses=config.active_appointment_statuses,
    )

    for warning in service.integrity_warnings():
        console.print(f"[yellow]⚠ {warning}[/yellow]")

    return service


def _resolve_day(config: AppConfig, day: Optional[str]):
    if day:
        return parse_date(day)
    return pendulum.today(config.timezone).date()


@app.command()
def slots(
    employee: Annotated[str, typer.Argument(help="Staff member ID")],
    day: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD). Defaults to today")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List bookable slots for a staff member on a date.

    Examples:

        salonslots slots stylist-1 --date 2024-11-25 --data snapshot.json

        salonslots slots stylist-1 --date 2024-11-25 --duration 45 --data snapshot.json
    """
    try:
        config = load_config(config_file)
        service = _build_service(config, data_file)
        target = _resolve_day(config, day)

        availability = service.effective_availability(employee, target)
        free_slots = service.bookable_slots(employee, target, duration)

        weekday = Weekday.from_date(target)
        console.print(
            f"\n[bold cyan]{employee}[/bold cyan] on {weekday} {target.isoformat()}"
        )

        if not availability.is_available:
            console.print("[yellow]⚠ Not available (no schedule or on approved leave).[/yellow]\n")
            return

        windows = ", ".join(str(w) for w in availability.windows)
        console.print(f"   Windows: {windows}")

        if not free_slots:
            console.print("[yellow]⚠ No free slots left on this date.[/yellow]\n")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Start", style="bold yellow")
        table.add_column("End")
        table.add_column("Minutes", justify="right", style="dim")

        for slot in free_slots:
            table.add_row(slot.start, slot.end, str(slot.duration))

        console.print(table)
        console.print(f"[green]✓ {len(free_slots)} free slot(s)[/green]\n")

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def week(
    employee: Annotated[str, typer.Argument(help="Staff member ID")],
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    Show a staff member's weekly recurring schedule.
    """
    try:
        config = load_config(config_file)
        service = _build_service(config, data_file)

        table = Table(
            title=f"Weekly schedule: {employee}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Day", style="bold yellow")
        table.add_column("Windows")

        for weekday, windows in service.index.weekly_windows(employee).items():
            table.add_row(
                str(weekday),
                ", ".join(str(w) for w in windows) if windows else "[dim]off[/dim]"
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def staff(
    day: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD). Defaults to today")] = None,
    config_file: ConfigOption = None,
    data_file: DataOption = None,
):
    """
    List staff members available on a date after approved leave.
    """
    try:
        config = load_config(config_file)
        service = _build_service(config, data_file)
        target = _resolve_day(config, day)

        available = service.available_staff(target)

        if not available:
            console.print(f"[yellow]⚠ Nobody is available on {target.isoformat()}.[/yellow]")
            return

        console.print(f"\n[bold green]✓ {len(available)} staff available on {target.isoformat()}:[/bold green]")
        for employee_id in available:
            console.print(f"  {employee_id}")
        console.print()

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
