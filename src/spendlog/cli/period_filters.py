"""CLI helpers for filter window resolution."""

import click

from spendlog.domain.entities import FilterMode


def resolve_cli_period(ctx, *, period_flags: dict[str, bool]) -> FilterMode:
    """Resolve the filter window from mutually exclusive period flags.

    No flag means all expenses.
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            "Error: Only one period option (--daily, --weekly, --monthly) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if not selected:
        return FilterMode.ALL
    return FilterMode(selected[0])


def period_options(func):
    """Attach --daily/--weekly/--monthly flags to a command."""
    func = click.option("--monthly", is_flag=True, help="Only expenses from this month")(func)
    func = click.option("--weekly", is_flag=True, help="Only expenses from this week (from Sunday)")(func)
    func = click.option("--daily", is_flag=True, help="Only expenses from today")(func)
    return func
