"""
Handles the 'clear-failures' command: reset the circuit breaker.
"""

import click

from ..cli_utils import get_dotsync
from ..exit_codes import CommandError, STATE_ERROR


@click.command(name='clear-failures')
@click.pass_context
def clear_failures_handler(ctx):
    """Delete the failure ledger and re-enable sync."""
    ds = get_dotsync(ctx)
    try:
        cleared = ds.clear_failures()
    except OSError as e:
        raise CommandError(f"Could not remove {ds.ledger_backend.describe()}: {e}", STATE_ERROR)

    if cleared:
        click.echo("✓ Sync Manager: Failure state cleared, sync re-enabled")
    else:
        click.echo("ℹ️  Sync Manager: No failures to clear")
