"""Shared CLI utilities."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cli.config import config_locations, load_config_model
from sync_config import SyncConfig

console = Console()


def require_config(config_path: Optional[Path]) -> SyncConfig:
    """Load config or fail the command with a readable message."""
    try:
        config = load_config_model(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    if config is None:
        searched = ", ".join(str(p) for p in config_locations())
        raise click.ClickException(f"No obsidian-sync config found. Looked in: {searched}")
    return config


def build_accumulator(config: SyncConfig):
    from session import SessionAccumulator, SessionStore

    return SessionAccumulator(
        SessionStore(config.state_dir),
        tracked_tools=config.tracked_tools,
        locale=config.locale,
        summary_timeout=config.summary.timeout_seconds,
    )
