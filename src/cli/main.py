"""CLI entry point for obsidian-sync."""

import sys
from pathlib import Path

import click

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.commands import check, hook, import_notes, sweep
from cli.logging_config import setup_logging


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: .claude/obsidian-sync.json in cwd, then home)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None):
    """Sync coding-assistant sessions into an Obsidian vault."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    setup_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(hook)
cli.add_command(check)
cli.add_command(sweep)
cli.add_command(import_notes)


if __name__ == "__main__":
    cli()
