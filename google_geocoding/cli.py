"""
Command-line front end for the geocoding client.

Usage:
    google-geocoding geocode "1600 Amphitheatre Parkway, Mountain View, CA"
    google-geocoding reverse 40.714224 -73.961452 --format xml --raw
    google-geocoding parse response.xml --format xml
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .errors import GeocodingError
from .models import GeocodeResponse, ResponseFormat
from .parsing import parse as parse_response
from .service import Geocoder, GeocodingClient

app = typer.Typer(help="Google Maps geocoding client")
console = Console()


def get_geocoder() -> GeocodingClient:
    """Build the geocoder used by commands (GOOGLE_MAPS_API_KEY)"""
    return Geocoder.from_settings()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Geocode addresses and reverse geocode coordinates"""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def render_response(response: GeocodeResponse, title: str) -> None:
    border = "green" if response.ok else "yellow"
    console.print(Panel(f"Status: {response.status}", title=title, border_style=border))
    if response.error_message:
        console.print(f"[red]{escape(response.error_message)}[/red]")
    if not response.results:
        return

    table = Table()
    table.add_column("Formatted address")
    table.add_column("Latitude", justify="right")
    table.add_column("Longitude", justify="right")
    table.add_column("Location type")
    for result in response.results:
        location = result.geometry.location
        table.add_row(
            result.formatted_address,
            str(location.lat),
            str(location.lng),
            result.geometry.location_type or "",
        )
    console.print(table)


def print_raw(text: str, response_format: ResponseFormat) -> None:
    if response_format is ResponseFormat.JSON:
        console.print(JSON(text))
    else:
        console.print(text, markup=False, highlight=False)


@app.command()
def geocode(
    address: str,
    response_format: ResponseFormat = typer.Option(ResponseFormat.JSON, "--format", "-f", help="Response format"),
    raw: bool = typer.Option(False, "--raw", help="Print the response body unparsed"),
) -> None:
    """Convert an address to coordinates"""
    try:
        geocoder = get_geocoder()
        if raw:
            print_raw(geocoder.geocode_raw(address, response_format), response_format)
        else:
            render_response(geocoder.geocode(address, response_format), title=address)
    except GeocodingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


# Negative coordinates must not be mistaken for options
@app.command(context_settings={"ignore_unknown_options": True})
def reverse(
    latitude: float = typer.Argument(..., help="Latitude in decimal degrees"),
    longitude: float = typer.Argument(..., help="Longitude in decimal degrees"),
    response_format: ResponseFormat = typer.Option(ResponseFormat.JSON, "--format", "-f", help="Response format"),
    raw: bool = typer.Option(False, "--raw", help="Print the response body unparsed"),
) -> None:
    """Convert coordinates to an address"""
    try:
        geocoder = get_geocoder()
        if raw:
            print_raw(geocoder.reverse_geocode_raw(latitude, longitude, response_format), response_format)
        else:
            title = Geocoder.format_latlng(latitude, longitude)
            render_response(geocoder.reverse_geocode(latitude, longitude, response_format), title=title)
    except GeocodingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def parse(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved response body"),
    response_format: ResponseFormat = typer.Option(ResponseFormat.JSON, "--format", "-f", help="Response format"),
) -> None:
    """Parse a saved response body without any network call"""
    try:
        response = parse_response(path.read_text(encoding="utf-8"), response_format)
    except GeocodingError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    render_response(response, title=path.name)


if __name__ == "__main__":
    app()
