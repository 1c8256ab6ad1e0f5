"""Statistics command."""

from datetime import datetime

import click

from spendlog.cli.period_filters import period_options, resolve_cli_period
from spendlog.domain.aggregation import (
    category_totals,
    daily_totals,
    highest_day,
    lowest_day,
    summarize,
)
from spendlog.domain.expense import ExpenseService
from spendlog.domain.filters import filter_by_period
from spendlog.utils.amount_parser import format_amount
from spendlog.utils.date_parser import format_short_date


@click.command("stats")
@period_options
@click.pass_context
def show_stats(ctx, daily: bool, weekly: bool, monthly: bool):
    """Show totals by category and by day for the selected window."""
    mode = resolve_cli_period(
        ctx, period_flags={"daily": daily, "weekly": weekly, "monthly": monthly}
    )
    service = ExpenseService(ctx.obj["store"])
    expenses = filter_by_period(service.list_expenses(), mode, datetime.now())

    if not expenses:
        click.echo("No expenses found.")
        return

    stats = summarize(expenses)
    click.echo(f"Total spent:   {format_amount(stats.total)}")
    click.echo(f"Average:       {format_amount(stats.average)}")
    click.echo(f"Transactions:  {stats.count}")
    if stats.top_category is not None:
        click.echo(
            f"Top category:  {stats.top_category.category} "
            f"({format_amount(stats.top_category.total)})"
        )

    click.echo("\nBy category:")
    for item in category_totals(expenses):
        share = item.total / stats.total * 100
        click.echo(f"  {item.category:<25} {format_amount(item.total):>14} {share:>6.1f}%")

    days = daily_totals(expenses)
    click.echo("\nLast active days:")
    for day in days:
        click.echo(f"  {format_short_date(day.date):<25} {format_amount(day.total):>14}")

    high = highest_day(days)
    low = lowest_day(days)
    if high is not None and low is not None:
        click.echo(f"\nHighest day:   {format_short_date(high.date)} ({format_amount(high.total)})")
        click.echo(f"Lowest day:    {format_short_date(low.date)} ({format_amount(low.total)})")


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(show_stats)
