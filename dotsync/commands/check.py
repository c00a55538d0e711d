"""
Handles the 'check' command: one orchestration pass.

This is what the shell's precmd hook runs, so it must never leave the
shell unusable: unexpected errors are logged and the command still exits
0 unless --strict is given.
"""

import json
import logging

import click

from ..cli_utils import get_dotsync
from ..exit_codes import (
    CommandError,
    INTERRUPTED,
    PARTIAL_FAILURE,
    SYNC_DISABLED,
    get_exit_code_for_exception,
)

logger = logging.getLogger(__name__)


@click.command(name='check')
@click.option('--force', is_flag=True, help='Check now even if the interval has not elapsed')
@click.option('--json', 'json_output', is_flag=True, help='Print the pass report as JSON')
@click.option('--strict', is_flag=True, help='Exit non-zero when a domain fails or an error occurs')
@click.pass_context
def check_handler(ctx, force, json_output, strict):
    """Check tracked repositories for drift and offer to fix it.

    \b
    Runs at most once per interval (4h by default). Does nothing while
    SYNC_DISABLED (or a per-domain *_SYNC_DISABLED) is set or after the
    circuit breaker tripped; see 'dotsync clear-failures'.

    Examples:

    \b
        dotsync check            # What the prompt hook runs
        dotsync check --force    # Ignore the interval
        dotsync check --json     # Machine-readable report
    """
    try:
        ds = get_dotsync(ctx)
        report = ds.check(force=force)
    except KeyboardInterrupt:
        click.echo("", err=True)
        if strict:
            ctx.exit(INTERRUPTED)
        return
    except Exception as e:
        logger.warning(f"dotsync check failed: {e}")
        logger.debug("dotsync check failed", exc_info=True)
        if strict:
            raise CommandError(str(e), get_exit_code_for_exception(e))
        return

    if json_output:
        print(json.dumps(report.to_dict()))
    elif force and not report.ran:
        click.echo(f"Sync skipped: {report.skip_reason}", err=True)

    if strict:
        if not report.ran and report.skip_reason.startswith("disabled"):
            ctx.exit(SYNC_DISABLED)
        if report.failed:
            ctx.exit(PARTIAL_FAILURE)
