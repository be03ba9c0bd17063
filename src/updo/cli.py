"""updo CLI - Markdown TODO list maintainer."""

import logging
import sys

import click

from .adapters.git_cli import RepositoryError
from .config import load_config
from .core import InvalidTitleError, RenderError
from .workflows import STDIN, commit_file, read_input, update_document, write_output


@click.command()
@click.version_option(package_name="updo")
@click.option("-n", "--next", "next_day", is_flag=True, help="Start a new day")
@click.option("-t", "--title", default=None, help="Set the title for the new day")
@click.option("-i", "--in-place", is_flag=True, help="Write the result back to INPUT")
@click.option("-c", "--commit", is_flag=True, help="Commit INPUT to its git repository (implies --in-place)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.argument("path", metavar="INPUT", required=False, default=STDIN)
def main(next_day: bool, title: str | None, in_place: bool, commit: bool, debug: bool, path: str):
    """Sort the TODO file INPUT, unfinished tasks first.

    Reads standard input when INPUT is - or missing.
    """
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    in_place = in_place or commit
    if in_place and path == STDIN:
        flag = "--commit" if commit else "--in-place"
        raise click.UsageError(f"{flag} needs an INPUT file, not standard input")

    config = load_config()
    title = title if title is not None else config.default_title

    try:
        text = read_input(path)
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        output = update_document(text, next_day=next_day, title=title)
    except (InvalidTitleError, RenderError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not in_place:
        click.echo(output, nl=False)
        return

    try:
        write_output(path, output)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if commit:
        try:
            if not commit_file(path, config):
                click.echo("Nothing to commit.", err=True)
        except RepositoryError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)


if __name__ == "__main__":
    main()
