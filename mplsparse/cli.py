"""parse_mpls CLI: print the length and chapters of Blu-ray playlists."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from mplsparse.bdmv.mpls import parse_mpls
from mplsparse.errors import MplsError
from mplsparse.export import export_json, playlist_report
from mplsparse.log import setup_logging
from mplsparse.model import Playlist

app = typer.Typer(name="parse_mpls", help="Blu-ray MPLS playlist decoder")
console = Console(stderr=True)


@app.command()
def main(
    files: list[str] = typer.Argument(..., help="MPLS file(s) to decode"),
    json_output: bool = typer.Option(
        False, "--json", help="Print one JSON document for all files instead of text"
    ),
    pretty: bool = typer.Option(True, "--pretty/--compact"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Trace clips and marks on stderr"),
):
    """Decode each playlist and print its length and chapter start times.

    Stops with exit code 1 at the first file that fails to decode.
    """
    setup_logging(verbose, console=console)

    playlists: list[Playlist] = []
    for file in files:
        try:
            playlist = parse_mpls(Path(file))
        except MplsError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
            raise typer.Exit(1)
        if json_output:
            playlists.append(playlist)
        else:
            typer.echo(playlist_report(playlist))

    if json_output:
        typer.echo(export_json(playlists, pretty=pretty))


if __name__ == "__main__":
    app()
