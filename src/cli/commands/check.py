"""Check CLI command: validate config and vault, show effective settings."""

import click
from rich.table import Table

from cli.utils import console, require_config


@click.command()
@click.pass_context
def check(ctx: click.Context):
    """Validate the config file and vault path."""
    from notes.paths import observations_root, summaries_root
    from vault import ConfigError, create_vault_sync

    config = require_config((ctx.obj or {}).get("config_path"))

    table = Table(title="obsidian-sync")
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    table.add_row("Vault", config.vault_path)
    table.add_row("Observations", str(observations_root(config)))
    table.add_row("Summaries", str(summaries_root(config)))
    table.add_row("Enabled", str(config.enabled))
    table.add_row("Sync observations", str(config.sync_observations))
    table.add_row("Sync summaries", str(config.sync_summaries))
    table.add_row("Tracked tools", ", ".join(config.tracked_tools))
    table.add_row("Locale", config.locale.value)
    table.add_row("State dir", str(config.state_dir))
    console.print(table)

    try:
        sync = create_vault_sync(config)
    except ConfigError as e:
        console.print(f"[red]Config error:[/] {e}")
        ctx.exit(1)

    if sync.is_enabled():
        console.print("[green]OK[/] vault is ready")
    else:
        console.print("[yellow]Sync is disabled[/]")
