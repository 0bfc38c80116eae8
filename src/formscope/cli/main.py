"""formscope CLI entry point."""

import click

from formscope.config import ManagerConfig, configure_logging
from formscope.errors import ConfigurationError


@click.group()
@click.option(
    "--log-level",
    default=None,
    help="Log level (default: FORMSCOPE_LOG_LEVEL or WARNING).",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None):
    """formscope: scoped validation CLI."""
    try:
        config = ManagerConfig.from_env()
    except ConfigurationError as e:
        raise click.UsageError(str(e))
    configure_logging(log_level or config.log_level)
    ctx.obj = config


# Register subcommands
from formscope.cli.check_cmd import check  # noqa: E402
from formscope.cli.profiles_cmd import profiles  # noqa: E402

cli.add_command(check)
cli.add_command(profiles)
