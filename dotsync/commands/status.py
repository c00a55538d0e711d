"""
Handles the 'status' command: interval, breaker and domain overview.
"""

import json

import click
from rich.console import Console
from rich.table import Table

from ..cli_utils import get_dotsync, format_epoch

console = Console()


@click.command(name='status')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSON')
@click.pass_context
def status_handler(ctx, json_output):
    """Show sync state: last check, next due time, failures, domains.

    Examples:

    \b
        dotsync status
        dotsync status --json
    """
    ds = get_dotsync(ctx)
    info = ds.status()

    if json_output:
        print(json.dumps(info))
        return

    if info['env_disabled']:
        console.print(f"[yellow]Sync disabled by {info['env_disabled']}[/yellow]")
    elif info['breaker_tripped']:
        console.print(f"[red]Sync disabled by circuit breaker: {info['breaker_reason']}[/red]")
        console.print("Run 'dotsync clear-failures' to re-enable")
    else:
        console.print("[green]Sync enabled[/green]")

    due = "now" if info['due'] else format_epoch(info['next_check_due'])
    console.print(f"Last check:     {format_epoch(info['last_check'])}")
    console.print(f"Next check due: {due}")
    console.print(f"Failures (last hour): {info['recent_failures']}")
    console.print(f"[dim]State: {info['state_file']}[/dim]")
    console.print(f"[dim]Ledger: {info['ledger_file']}[/dim]")

    table = Table(title="Domains")
    table.add_column("Domain", style="cyan")
    table.add_column("Path")
    table.add_column("Upstream")
    table.add_column("Clone URL", style="dim")

    for domain in info['domains']:
        table.add_row(
            domain['name'],
            domain['path'] or "[dim]not set[/dim]",
            f"{domain['remote']}/{domain['branch']}",
            domain['clone_url'] or "",
        )

    console.print(table)

    if info['failures']:
        failures = Table(title="Recorded failures")
        failures.add_column("Time")
        failures.add_column("Domain", style="cyan")
        failures.add_column("Message")
        for record in info['failures']:
            failures.add_row(format_epoch(record['timestamp']), record['domain'], record['message'])
        console.print(failures)
