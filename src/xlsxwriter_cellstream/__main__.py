import logging
from pathlib import Path
from typing import Optional

import typer

from . import demo, reader

app = typer.Typer(
    add_completion=False,
    help="Read and write spreadsheets with a cell stream.",
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages.")):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def sheets(filename: Path = typer.Argument(..., help="Workbook to inspect.")):
    """List the sheets of a workbook."""
    typer.echo(f"Sheets of {filename}")
    for name in reader.list_sheet_names(filename):
        typer.echo(name)


@app.command()
def read(
        filename: Path = typer.Argument(..., help="Workbook to read."),
        sheet: Optional[str] = typer.Option(None, "--sheet", "-s", help="Sheet to read, the first one by default."),
):
    """Print the content of a sheet, one tab-separated row per line."""
    if sheet is None:
        typer.echo("Content of the first sheet:")
    else:
        typer.echo(f"Content of sheet {sheet}:")
    for row in reader.iter_sheet(filename, sheet):
        typer.echo("\t".join(row))


@app.command("demo")
def write_demo(
        filename: Path = typer.Argument(Path("demo_file.xlsx"), help="Workbook to create."),
        image: Optional[Path] = typer.Option(None, "--image", help="Image to insert after the last vector."),
):
    """Write the demo workbook."""
    cursor = demo.write_demo(filename, image_path=image and str(image))
    typer.echo(f"Demo written to {filename}, final cursor (col, row) = {cursor}")


@app.command()
def pwd():
    """Print the current working directory."""
    typer.echo(demo.pwd())


if __name__ == "__main__":
    app()
