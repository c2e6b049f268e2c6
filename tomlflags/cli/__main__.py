from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from ..core.config_loader import ConfigLoader
from ..core.errors import TomlflagsError
from ..core.flatten import flatten
from ..core.paths import split_key
from ..core.types import FlatPair, FlattenOptions
from ..sources import open_source

app = typer.Typer(help="Flatten TOML and YAML configuration files into flag pairs")


def _options(
    config: Optional[Path], delimiter: Optional[str], skip: Optional[List[str]]
) -> FlattenOptions:
    opts = ConfigLoader(config).options()
    if delimiter is not None:
        opts = opts.with_delimiter(delimiter)
    for entry in skip or []:
        opts = opts.with_skip(*split_key(entry, opts.delimiter))
    return opts


def _load_pairs(
    file: Path,
    config: Optional[Path],
    delimiter: Optional[str],
    skip: Optional[List[str]],
    verbose: bool,
) -> List[FlatPair]:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        opts = _options(config, delimiter, skip)
        return flatten(open_source(file).load(), opts)
    except (TomlflagsError, ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("flatten")
def flatten_cmd(
    file: Path = typer.Argument(..., help="TOML or YAML document"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Key segment separator"),
    skip: Optional[List[str]] = typer.Option(None, "--skip", help="Subtree to exclude, segments joined with the delimiter (e.g. a.b)"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON array of [key, value]"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to tomlflags.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    pairs = _load_pairs(file, config, delimiter, skip, verbose)
    if as_json:
        typer.echo(json.dumps([list(p) for p in pairs], indent=2, ensure_ascii=False))
        return
    for key, value in pairs:
        typer.echo(f"{key}={value}")


@app.command("args")
def args_cmd(
    file: Path = typer.Argument(..., help="TOML or YAML document"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Key segment separator"),
    skip: Optional[List[str]] = typer.Option(None, "--skip", help="Subtree to exclude, segments joined with the delimiter (e.g. a.b)"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to tomlflags.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    # one token per line so shells can read them with mapfile
    for key, value in _load_pairs(file, config, delimiter, skip, verbose):
        typer.echo(f"--{key}={value}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
