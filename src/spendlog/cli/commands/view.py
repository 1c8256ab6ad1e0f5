"""Expense viewing commands."""

from datetime import datetime

import click

from spendlog.cli.period_filters import period_options, resolve_cli_period
from spendlog.domain.entities import ALL_CATEGORIES, CATEGORIES, SortField, SortOrder
from spendlog.domain.expense import ExpenseService
from spendlog.domain.filters import filter_by_period
from spendlog.domain.query import list_categories, query_expenses
from spendlog.domain.split import share_of
from spendlog.utils.amount_parser import format_amount
from spendlog.utils.date_parser import format_short_date


@click.command("list")
@period_options
@click.option("--category", default=ALL_CATEGORIES, help="Only this category ('all' for every category)")
@click.option("--search", default="", help="Case-insensitive text matched against category and note")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice([field.value for field in SortField]),
    default=SortField.DATE.value,
    show_default=True,
)
@click.option(
    "--order",
    "sort_order",
    type=click.Choice([order.value for order in SortOrder]),
    default=SortOrder.DESC.value,
    show_default=True,
)
@click.option("--verbose", "-v", is_flag=True, help="Show split and email details")
@click.pass_context
def list_expenses(
    ctx,
    daily: bool,
    weekly: bool,
    monthly: bool,
    category: str,
    search: str,
    sort_by: str,
    sort_order: str,
    verbose: bool,
):
    """List expenses with optional window, category, search and sort."""
    mode = resolve_cli_period(
        ctx, period_flags={"daily": daily, "weekly": weekly, "monthly": monthly}
    )
    service = ExpenseService(ctx.obj["store"])

    windowed = filter_by_period(service.list_expenses(), mode, datetime.now())
    result = query_expenses(
        windowed,
        category=category,
        search=search,
        sort_by=SortField(sort_by),
        sort_order=SortOrder(sort_order),
    )

    if not result.expenses:
        click.echo("No expenses found.")
        return

    plural = "" if result.count == 1 else "s"
    click.echo(f"\n{result.count} expense{plural} - Total: {format_amount(result.total)}")
    click.echo("-" * 90)
    click.echo(f"{'ID':<15} {'Date':<13} {'Amount':>12}  {'Category':<20} {'Note':<25}")
    click.echo("-" * 90)

    for exp in result.expenses:
        note = (exp.note or "")[:25]
        click.echo(
            f"{exp.id:<15} {format_short_date(exp.date):<13} {format_amount(exp.amount):>12}  "
            f"{exp.category:<20} {note:<25}"
        )
        if verbose:
            if exp.split is not None:
                click.echo(
                    f"{'':<15} Split {exp.split.total_people} ways, paid by {exp.split.paid_by.value}, "
                    f"{format_amount(share_of(exp))} each"
                )
            if exp.shared_via_email:
                sent = f" on {exp.email_sent_at:%Y-%m-%d %H:%M}" if exp.email_sent_at else ""
                click.echo(f"{'':<15} Shared with {exp.email_recipient}{sent}")


@click.command("categories")
@click.pass_context
def show_categories(ctx):
    """Show built-in categories and custom labels in use."""
    service = ExpenseService(ctx.obj["store"])
    in_use = list_categories(service.list_expenses())

    click.echo("Categories:")
    for name in CATEGORIES:
        click.echo(f"  {name}")

    custom = [name for name in in_use if name not in CATEGORIES]
    if custom:
        click.echo("\nCustom labels:")
        for name in custom:
            click.echo(f"  {name}")


def register_commands(cli):
    """Register viewing commands with main CLI."""
    cli.add_command(list_expenses)
    cli.add_command(show_categories)
