#!/usr/bin/env python3

import sys

import click

from dotsync import __version__
from dotsync.exit_codes import CommandError
from dotsync.commands.check import check_handler
from dotsync.commands.status import status_handler
from dotsync.commands.clear import clear_failures_handler
from dotsync.commands.hook import hook_handler
from dotsync.commands.config import config_cmd


@click.group()
@click.version_option(version=__version__, prog_name="dotsync")
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """dotsync - Keep dotfiles and agent config repos in sync from your prompt.

    Hook 'dotsync check' into your shell prompt (see 'dotsync hook') and it
    will offer to commit, push or pull when a tracked repository drifts.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


cli.add_command(check_handler)
cli.add_command(status_handler)
cli.add_command(clear_failures_handler)
cli.add_command(hook_handler)
cli.add_command(config_cmd)


def main():
    try:
        rv = cli(standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as e:
        e.show()
        return e.exit_code
    except CommandError as e:
        click.echo(f"Error: {e}", err=True)
        return e.exit_code
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
