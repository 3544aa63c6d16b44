from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer

from datagen.config import get_settings
from datagen.errors import DatagenError
from datagen.generator import Generator
from datagen.loader import load_config
from datagen.reporter import print_summary
from datagen.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Generate a batch-insert SQL script from a YAML schema.")
log = get_logger(__name__)


@app.command()
def generate(
    config_path: Path = typer.Argument(
        ...,
        metavar="CONFIG",
        help="Path to the YAML config file.",
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed the random generator for reproducible output.",
    ),
    output_dir: Path = typer.Option(
        Path("."),
        "--output-dir",
        "-o",
        help="Directory for <table_name>.sql (default: current directory).",
    ),
    summary: bool = typer.Option(
        False,
        "--summary/--no-summary",
        help="Print a summary table after generation.",
    ),
) -> None:
    """
    Write <table_name>.sql from the schema in CONFIG.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    try:
        config = load_config(config_path)
        result = Generator(config, seed=seed, output_dir=output_dir).generate()
    except (DatagenError, OSError) as exc:
        log.debug("Generation failed", exc_info=True)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if summary:
        print_summary(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
