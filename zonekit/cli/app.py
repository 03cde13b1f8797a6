"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.reference_tables import ReferenceTables
from ..config import ZoneKitSettings
from ..domain.exceptions import ZoneKitError
from ..domain.models import TimeRange
from ..domain.offsets import format_offset, parse_offset_designator
from ..services.toolkit import ZoneToolkit

app = typer.Typer(
    name="zonekit",
    help="Resolve timezones, convert times and find meeting slots across zones",
    add_completion=False
)

console = Console()

DATETIME_FORMAT = "YYYY-MM-DD HH:mm"
DATE_FORMAT = "YYYY-MM-DD"


class _State:
    settings: ZoneKitSettings = ZoneKitSettings()
    toolkit: Optional[ZoneToolkit] = None


state = _State()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _toolkit() -> ZoneToolkit:
    if state.toolkit is None:
        if state.settings.data_dir:
            state.toolkit = ZoneToolkit(ReferenceTables.load(state.settings.data_dir))
        else:
            state.toolkit = ZoneToolkit()
    return state.toolkit


def _fail(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(1)


def _parse_datetime(text: Optional[str]) -> pendulum.DateTime:
    """Parse ``YYYY-MM-DD HH:mm`` (UTC); defaults to now."""
    if not text:
        return pendulum.now("UTC")
    try:
        return pendulum.from_format(text, DATETIME_FORMAT, tz="UTC")
    except ValueError as e:
        _fail(f"Could not parse time '{text}' (expected {DATETIME_FORMAT}): {e}")


def _parse_date(text: Optional[str]):
    if not text:
        return pendulum.now("UTC").date()
    try:
        return pendulum.from_format(text, DATE_FORMAT, tz="UTC").date()
    except ValueError as e:
        _fail(f"Could not parse date '{text}' (expected {DATE_FORMAT}): {e}")


def _zone_id(toolkit: ZoneToolkit, text: str) -> str:
    """Parse free-form zone input into the resolved zone name."""
    return toolkit.parse_timezone(text).name


@app.callback()
def main(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./zonekit.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    zonekit - timezone toolkit.
    """
    try:
        state.settings = ZoneKitSettings.load_or_default(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    state.toolkit = None
    _configure_logging("DEBUG" if verbose else state.settings.log_level)


@app.command()
def parse(
    text: Annotated[str, typer.Argument(help="Zone id, abbreviation, city, display name or offset (e.g. 'GMT+5:30')")],
):
    """
    Parse any timezone input and show what it resolves to.
    """
    try:
        toolkit = _toolkit()
        zone_id = _zone_id(toolkit, text)
        now = pendulum.now("UTC")

        console.print(f"\n[bold cyan]{text}[/bold cyan] → [bold]{zone_id}[/bold]")
        console.print(f"   Name: {toolkit.friendly_name(zone_id)}")
        console.print(f"   Current offset: UTC{format_offset(toolkit.offset_at(zone_id, now))}")
        console.print(f"   Observes DST: {'yes' if toolkit.supports_dst(zone_id) else 'no'}")
        alternate_id = toolkit.canonical_to_alternate(zone_id)
        if alternate_id:
            console.print(f"   Alternate id: {alternate_id}")
        console.print()
    except ZoneKitError as e:
        _fail(str(e))


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Text to look for in ids, names, abbreviations and cities")],
):
    """
    Search timezones.
    """
    toolkit = _toolkit()
    results = sorted(toolkit.search_timezones(query))

    if not results:
        console.print(f"[yellow]No timezones match '{query}'.[/yellow]")
        return

    table = Table(
        title=f"Timezones matching '{query}'",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Zone", style="bold yellow")
    table.add_column("Name", style="dim")

    for zone_id in results:
        table.add_row(zone_id, toolkit.friendly_name(zone_id))

    console.print()
    console.print(table)
    console.print()


@app.command()
def convert(
    to_zone: Annotated[str, typer.Argument(help="Target zone")],
    at: Annotated[Optional[str], typer.Option("--at", help=f"Time ({DATETIME_FORMAT}). Defaults to now (UTC).")] = None,
    from_zone: Annotated[Optional[str], typer.Option("--from", help="Read --at as local time in this zone instead of UTC")] = None,
):
    """
    Convert a time into another zone.

    Examples:

        zonekit convert Asia/Tokyo --at "2025-01-28 15:00"

        zonekit convert "London" --from EST --at "2025-01-28 10:00"
    """
    value = _parse_datetime(at)

    try:
        toolkit = _toolkit()
        target = _zone_id(toolkit, to_zone)
        if from_zone:
            source = _zone_id(toolkit, from_zone)
            result = toolkit.convert(value, source, target)
            console.print(f"{value.format(DATETIME_FORMAT)} {source} → {result.format(DATETIME_FORMAT)} {target}")
        else:
            result = toolkit.convert(value, target)
            console.print(f"{value.format(DATETIME_FORMAT)} UTC → {result.format(DATETIME_FORMAT)} {target}")
    except ZoneKitError as e:
        _fail(str(e))


@app.command()
def country(
    code: Annotated[str, typer.Argument(help="ISO 3166 country code, e.g. US")],
):
    """
    List the timezones of a country.
    """
    toolkit = _toolkit()
    found, zone_ids = toolkit.try_zones_by_country(code)
    if not found:
        _fail(f"Country code not found: {code}")

    console.print(f"\n[bold cyan]{code.upper()}[/bold cyan] ({len(zone_ids)} zones)")
    for zone_id in zone_ids:
        console.print(f"  {zone_id}")
    console.print()


@app.command()
def offset(
    value: Annotated[str, typer.Argument(help="Base offset such as +05:30, -5 or UTC+9")],
):
    """
    List timezones whose standard offset equals the given one exactly.
    """
    text = value.strip()
    if text[:1] in ("+", "-"):
        text = f"UTC{text}"
    base_offset = parse_offset_designator(text)
    if base_offset is None:
        _fail(f"Invalid offset: {value}")

    zone_ids = _toolkit().zones_by_offset(base_offset)
    if not zone_ids:
        console.print(f"[yellow]No timezones with base offset UTC{format_offset(base_offset)}.[/yellow]")
        return

    console.print(f"\n[bold cyan]UTC{format_offset(base_offset)}[/bold cyan]")
    for zone_id in zone_ids:
        console.print(f"  {zone_id}")
    console.print()


@app.command()
def common():
    """
    List commonly used timezones.
    """
    toolkit = _toolkit()
    table = Table(
        title="Common timezones",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Zone", style="bold yellow")
    table.add_column("Name", style="dim")

    for zone_id in toolkit.common_zones():
        table.add_row(zone_id, toolkit.friendly_name(zone_id))

    console.print()
    console.print(table)
    console.print()


@app.command()
def business(
    zone: Annotated[str, typer.Argument(help="Zone to check")],
    at: Annotated[Optional[str], typer.Option("--at", help=f"Time in UTC ({DATETIME_FORMAT}). Defaults to now.")] = None,
    start_hour: Annotated[Optional[int], typer.Option("--start-hour", help="Opening hour (local)")] = None,
    end_hour: Annotated[Optional[int], typer.Option("--end-hour", help="Closing hour (local)")] = None,
):
    """
    Check whether it is business time in a zone, and when it opens next.
    """
    defaults = state.settings.business
    start_hour = start_hour if start_hour is not None else defaults.start_hour
    end_hour = end_hour if end_hour is not None else defaults.end_hour
    value = _parse_datetime(at)

    try:
        toolkit = _toolkit()
        zone_id = _zone_id(toolkit, zone)
        local = toolkit.convert(value, zone_id)

        if toolkit.is_business_hour(value, zone_id, start_hour, end_hour):
            console.print(f"[green]✓ Open[/green] in {zone_id} ({local.format('ddd ' + DATETIME_FORMAT)})")
            return

        console.print(f"[yellow]✗ Closed[/yellow] in {zone_id} ({local.format('ddd ' + DATETIME_FORMAT)})")
        next_open = toolkit.next_business_hour(
            value, zone_id, start_hour, end_hour, max_days=defaults.horizon_days
        )
        if next_open is None:
            console.print(f"   No business hours within {defaults.horizon_days} days.")
        else:
            local_open = next_open.in_timezone(zone_id)
            console.print(
                f"   Opens {local_open.format('ddd ' + DATETIME_FORMAT)} local "
                f"({next_open.format(DATETIME_FORMAT)} UTC)"
            )
    except ZoneKitError as e:
        _fail(str(e))


@app.command()
def meeting(
    zones: Annotated[Optional[List[str]], typer.Argument(help="Participating zones. Defaults to meeting_zones from the config.")] = None,
    day: Annotated[Optional[str], typer.Option("--date", help=f"UTC day ({DATE_FORMAT}). Defaults to today.")] = None,
    start_hour: Annotated[Optional[int], typer.Option("--start-hour", help="Local opening hour in every zone")] = None,
    end_hour: Annotated[Optional[int], typer.Option("--end-hour", help="Local closing hour in every zone")] = None,
):
    """
    Find UTC hours when every zone is within working hours.

    Examples:

        zonekit meeting America/New_York Europe/London --date 2025-01-28

        zonekit meeting EST Tokyo --start-hour 8 --end-hour 20
    """
    settings = state.settings
    zone_args = list(zones or settings.meeting_zones)
    if not zone_args:
        _fail("No zones given and no meeting_zones configured.")

    meeting_day = _parse_date(day)

    try:
        toolkit = _toolkit()
        zone_ids = [_zone_id(toolkit, z) for z in zone_args]
        if start_hour is None and end_hour is None:
            working_hours = settings.business.as_time_range()
        else:
            working_hours = TimeRange(
                start_hour if start_hour is not None else settings.business.start_hour,
                end_hour if end_hour is not None else settings.business.end_hour,
            )
    except ZoneKitError as e:
        _fail(str(e))

    slots = toolkit.find_meeting_time(zone_ids, working_hours, meeting_day)

    console.print()
    if not slots:
        console.print(
            f"[yellow]⚠ No common working hours on {meeting_day.isoformat()}.[/yellow]\n"
            "Try a wider range of hours or fewer zones."
        )
        console.print()
        return

    console.print(f"[bold green]✓ {len(slots)} slot(s) found:[/bold green]\n")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("UTC", style="bold yellow")
    for zone_id in zone_ids:
        table.add_column(zone_id)

    display_zone = settings.display_timezone
    for slot in slots:
        row = [str(slot)]
        for zone_id in zone_ids:
            row.append(
                f"{slot.start_in_zone(zone_id).format('HH:mm')} - {slot.end_in_zone(zone_id).format('HH:mm')}"
            )
        table.add_row(*row)

    console.print(table)
    if display_zone != "UTC":
        console.print(f"\nFirst slot starts {slots[0].start_in_zone(display_zone).format('ddd ' + DATETIME_FORMAT)} {display_zone}")
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]zonekit[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
