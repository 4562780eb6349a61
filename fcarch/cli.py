"""CLI interface for fcarch."""

import logging
import sys
from pathlib import Path

import click

from fcarch.config import Config
from fcarch.finalizer import FinalizeError
from fcarch.identity import IdentityError
from fcarch.pipeline import ArchiveBuilder, ArchiveRun
from fcarch.timestamp import TimestampError


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directory", type=click.Path(path_type=Path), required=False)
@click.option(
    "--notouching",
    is_flag=True,
    help="Only write the descriptor: no date resolution, no rename, no timestamp changes",
)
@click.option("--device-name", help="Device name to record instead of prompting for it")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    directory: Path | None,
    notouching: bool,
    device_name: str | None,
    verbose: bool,
) -> None:
    """Convert DIRECTORY of media files into a Final Cut Pro archive (.fcarch).

    Writes FCArchMetadata.plist into DIRECTORY, then renames it with the
    .fcarch suffix, sets its modification time to the earliest clip date and
    hides the extension in Finder.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = Config()

    if directory is None:
        click.echo("Error: DIRECTORY is required.", err=True)
        click.echo(ctx.get_usage(), err=True)
        sys.exit(1)

    if not directory.is_dir():
        click.echo(f"Error: Directory not found: {directory}", err=True)
        sys.exit(1)

    builder = ArchiveBuilder(config.archive)

    descriptor_path = builder.descriptor_path(directory)
    if descriptor_path.exists():
        if not click.confirm(f"{descriptor_path} already exists. Overwrite?", default=False):
            click.echo("Aborted. Existing descriptor left unchanged.")
            return

    if device_name is None:
        device_name = click.prompt("Device name", default="", show_default=False)

    try:
        run = builder.build(directory, device_name=device_name, touch=not notouching)
    except (TimestampError, IdentityError, FinalizeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        sys.exit(130)

    _print_summary(run)


def _print_summary(run: ArchiveRun) -> None:
    click.echo("Archive Complete:")
    click.echo(f"  Archive ID: {run.archive_id}")
    if run.archive_date is not None:
        click.echo(f"  Archive date: {run.archive_date.descriptor_format()}")
    click.echo(f"  Clips: {len(run.clips):,}")
    if run.touch:
        click.echo(f"  Dates from file names: {run.stats.filename_dates:,}")
        click.echo(f"  Dates from metadata: {run.stats.metadata_dates:,}")
        click.echo(f"  Epoch fallbacks: {run.stats.fallback_dates:,}")
    click.echo(f"  Descriptor: {run.descriptor_path}")
    click.echo(f"  Archive: {run.final_directory}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        cli.main(standalone_mode=False)  # pylint: disable=no-value-for-parameter
    except click.UsageError as e:
        e.show()
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
