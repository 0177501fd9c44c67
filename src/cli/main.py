"""Support centre command-line entry point."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import (  # noqa: E402
    clear,
    comment,
    comments,
    feedback,
    interests,
    recommend,
    search,
    serve,
    track,
    vote,
)
from cli.config import load_config_model  # noqa: E402
from cli.logging_config import setup_logging  # noqa: E402


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Support Centre - resource directory, personal recommendations and feedback."""
    try:
        log_cfg = load_config_model().logging
        level, json_mode = log_cfg.level, log_cfg.json_output
    except ValueError as e:
        click.echo(f"Config error: {e}", err=True)
        level, json_mode = "INFO", False
    setup_logging(json_mode=json_mode, level="DEBUG" if verbose else level)


for command in (serve, track, interests, recommend, clear, search, feedback, vote, comment, comments):
    cli.add_command(command)


if __name__ == "__main__":
    cli()
