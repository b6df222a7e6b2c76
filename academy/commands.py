"""
Maintenance commands, run with ``flask --app app <command>``.
"""

import click
from flask import Flask

from academy.storage import get_storage


def register_commands(app: Flask):

    @app.cli.command('purge-sessions')
    def purge_sessions():
        """Delete expired server-side sessions."""
        removed = get_storage().sessions.purge_expired()
        click.echo(f'Removed {removed} expired session(s)')
