"""refsweep CLI - refsweep command."""

import click

from refsweep.cli.usages import refilter_command, usages_command
from refsweep.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="refsweep")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """refsweep - confirm project-wide identifier usages with Merlin."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(usages_command, name="usages")
cli.add_command(refilter_command, name="refilter")


if __name__ == "__main__":
    cli()
