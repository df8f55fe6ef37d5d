"""CLI utilities."""

from pathlib import Path

import click

from refsweep.config.constants import PROJECT_ROOT_MARKERS
from refsweep.semantic.models import Position


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the project root from the given path.

    Walks up the directory tree looking for any of PROJECT_ROOT_MARKERS.
    If start_path is None, uses the current working directory.

    Raises:
        click.ClickException: If no marker is found up to the filesystem root
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        if any((current / marker).exists() for marker in PROJECT_ROOT_MARKERS):
            return current
        if current == current.parent:
            break
        current = current.parent

    raise click.ClickException(
        f"No project root found above {start_path}\n"
        f"Expected one of: {', '.join(PROJECT_ROOT_MARKERS)}. Pass --root explicitly."
    )


def parse_location(location: str, root: Path) -> Position:
    """Parse a ``path:line:column`` CLI argument into an absolute Position.

    Relative paths are taken from the current directory, then re-rooted so the
    position shares the project root's form.
    """
    path_part, _, rest = location.rpartition(":")
    file_part, _, line_part = path_part.rpartition(":")
    if not file_part or not line_part.isdigit() or not rest.isdigit():
        raise click.BadParameter(
            f"Expected path:line:column, got {location!r}", param_hint="LOCATION"
        )

    file = Path(file_part)
    if not file.is_absolute():
        file = Path.cwd() / file
    file = file.resolve()
    if not file.is_relative_to(root):
        raise click.BadParameter(f"{file} is outside project root {root}", param_hint="LOCATION")
    if not file.is_file():
        raise click.BadParameter(f"No such file: {file}", param_hint="LOCATION")

    try:
        return Position.parse(f"{file.relative_to(root).as_posix()}:{line_part}:{rest}", root)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="LOCATION") from e
