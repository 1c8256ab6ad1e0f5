"""CLI error handling helpers."""

import click
import structlog

from spendlog.domain.errors import DomainError

logger = structlog.get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print ``Error: <message>`` to stderr and exit 1."""
    logger.info(
        "command_failed",
        command=ctx.info_name,
        error_type=type(error).__name__,
        error=str(error),
    )
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
