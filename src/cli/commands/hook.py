"""Hook CLI command: one assistant event per invocation, read from stdin."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import structlog

from cli.config import load_config_model
from cli.logging_config import bind_hook_context, setup_logging
from cli.utils import build_accumulator
from observability import log_run_summary

logger = structlog.get_logger(source="hook")


def run_hook(raw_input: str, config_path: Optional[Path] = None) -> None:
    """Fold a tool event into session state, or flush the session on stop.

    Raises on bad config or bad input; the command wrapper logs and
    swallows that so the host assistant is never disrupted.
    """
    from session import NullTextGenerator, ToolUseEvent, create_text_generator, parse_event
    from vault import ConfigError, create_vault_sync

    config = load_config_model(config_path)
    if config is None:
        logger.debug("no_config_found")
        return

    setup_logging(
        json_mode=config.log_file is not None,
        level=config.stdlib_log_level,
        log_file=config.log_file,
    )

    if not raw_input.strip():
        logger.warning("empty_hook_input")
        return

    event = parse_event(json.loads(raw_input))
    bind_hook_context(session_id=event.session_id, hook_event=event.hook_event_name)
    logger.debug("hook_event_received")

    accumulator = build_accumulator(config)
    accumulator.store.sweep()

    if isinstance(event, ToolUseEvent):
        accumulator.record(event)
        return

    try:
        sync = create_vault_sync(config)
    except ConfigError:
        accumulator.store.delete(event.session_id)
        raise

    if event.transcript_summary:
        generator = NullTextGenerator()
    else:
        generator = create_text_generator(config.summary)

    report = asyncio.run(accumulator.close(event, sync, generator))
    log_run_summary(session_id=report.session_id, written=report.written, failed=report.failed)


@click.command()
@click.pass_context
def hook(ctx: click.Context):
    """Process one hook event JSON from stdin. Always exits 0."""
    config_path = (ctx.obj or {}).get("config_path")
    try:
        run_hook(sys.stdin.read(), config_path)
    except Exception as e:
        logger.error("hook_failed", error=str(e), error_type=type(e).__name__, exc_info=e)
