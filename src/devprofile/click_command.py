"""Custom Click command with automatic help display on usage errors.

A missing or malformed argument prints the error followed by the full
command help instead of Click's one-line usage hint.
"""

from typing import Any

import click


class DevprofileCommand(click.Command):
    """Click command that shows its help when the command line is invalid."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Parse arguments, displaying help on usage errors."""
        try:
            return super().parse_args(ctx, args)
        except (
            click.exceptions.UsageError,
            click.exceptions.BadParameter,
            click.exceptions.MissingParameter,
        ) as e:
            # Show the error message first
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("", err=True)
            click.echo(ctx.get_help(), err=True)
            # Use ctx.exit() to properly handle Click's testing mode
            ctx.exit(e.exit_code if hasattr(e, "exit_code") else 2)
            return []  # Explicit return for code clarity (never reached)

    def invoke(self, ctx: click.Context) -> Any:
        """Invoke the callback, handling late parameter errors with help."""
        try:
            return super().invoke(ctx)
        except click.exceptions.BadParameter as e:
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo("", err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(e.exit_code)
            return None  # Explicit return for code clarity (never reached)
