"""refsweep usages / refilter commands."""

import asyncio
import json
from pathlib import Path

import click
from rich.console import Console

from refsweep.cli.utils import find_project_root, parse_location
from refsweep.config.loader import load_config
from refsweep.config.models import RefSweepConfig
from refsweep.core.errors import RefSweepError
from refsweep.core.formatting import format_path_list, pluralize
from refsweep.core.logging import configure_logging, get_log_file_path
from refsweep.semantic.merlin import MerlinService
from refsweep.usages.ops import UsageOps, UsageResult


def _load(root_opt: Path | None, location: str, verbose: bool) -> tuple[Path, RefSweepConfig]:
    root = root_opt.resolve() if root_opt else find_project_root(Path(location.split(":")[0]))
    try:
        config = load_config(root)
    except RefSweepError as e:
        raise click.ClickException(str(e)) from e
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    return root, config


def _fail(error: RefSweepError) -> click.ClickException:
    """Convert a lookup error, pointing at the log file when one is configured."""
    message = str(error)
    log_file = get_log_file_path()
    if log_file:
        message = f"{message}. See {log_file} for details."
    return click.ClickException(message)


def _service(config: RefSweepConfig) -> MerlinService:
    service = MerlinService(config.semantic)
    if not service.available():
        raise click.ClickException(
            f"{config.semantic.executable} not found on PATH. "
            "Install merlin (opam install merlin) or set semantic.executable."
        )
    return service


def _emit(result: UsageResult, root: Path, output: Path | None, as_json: bool) -> None:
    listing = result.listing(root)
    if output is not None:
        listing.write(output)

    if as_json:
        click.echo(json.dumps(result.to_dict(root), indent=2))
        return

    listing.print(Console(highlight=False))
    if result.confirmed:
        summary = (
            f"{pluralize(len(result.confirmed), 'usage')} in "
            f"{format_path_list(result.files)}"
        )
    else:
        summary = "no usages confirmed"
    click.echo(summary, err=True)
    if output is not None:
        click.echo(f"Listing written to {output}", err=True)


@click.command()
@click.argument("location")
@click.option(
    "--root",
    "root_opt",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root (default: nearest dune-project/.merlin/.git ancestor)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the listing to this file",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def usages_command(
    ctx: click.Context,
    location: str,
    root_opt: Path | None,
    output: Path | None,
    as_json: bool,
) -> None:
    """Locate every usage of the identifier at LOCATION.

    LOCATION is path:line:column with a 1-based column, as grep tools print it.
    """
    root, config = _load(root_opt, location, ctx.obj.get("verbose", False))
    cursor = parse_location(location, root)
    ops = UsageOps(root, _service(config), config=config)
    try:
        result = asyncio.run(ops.locate_usages(cursor))
    except RefSweepError as e:
        raise _fail(e) from e
    _emit(result, root, output, as_json)


@click.command()
@click.argument("listing", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("location")
@click.option(
    "--root",
    "root_opt",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root (default: nearest dune-project/.merlin/.git ancestor)",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the refiltered listing to this file",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def refilter_command(
    ctx: click.Context,
    listing: Path,
    location: str,
    root_opt: Path | None,
    output: Path | None,
    as_json: bool,
) -> None:
    """Re-check a saved LISTING against the identifier at LOCATION.

    Lines that no longer resolve to the same definition are dropped.
    """
    root, config = _load(root_opt, location, ctx.obj.get("verbose", False))
    cursor = parse_location(location, root)
    ops = UsageOps(root, _service(config), config=config)
    try:
        result = asyncio.run(ops.refilter(listing.read_text(encoding="utf-8"), cursor))
    except RefSweepError as e:
        raise _fail(e) from e
    _emit(result, root, output, as_json)
