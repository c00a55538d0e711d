"""
Shared helpers for dotsync CLI commands.
"""

import click

from .config import configure_logging


def get_dotsync(ctx: click.Context):
    """
    Build (once per invocation) the DotSync instance for a command.

    The factory lives in ``ctx.obj`` so tests can hand the CLI a
    pre-wired instance with in-memory stores.
    """
    obj = ctx.ensure_object(dict)
    if 'dotsync' not in obj:
        from .api import create
        factory = obj.get('factory') or create
        ds = factory()
        configure_logging(ds.config, verbose=obj.get('verbose', False))
        obj['dotsync'] = ds
    return obj['dotsync']


def format_epoch(value):
    """Render an epoch second as local time, or '-' if unset."""
    if value is None:
        return "-"
    from datetime import datetime
    return datetime.fromtimestamp(value).strftime("%Y-%m-%d %H:%M:%S")
