"""Bill splitting commands."""

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.entities import PaidBy
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import ExpenseService
from spendlog.domain.split import OWED, preview_split, reconcile
from spendlog.utils.amount_parser import format_amount
from spendlog.utils.date_parser import format_short_date


@click.command("split")
@click.argument("expense_id", type=int)
@click.option("--people", type=int, default=2, show_default=True, help="Number of people sharing the bill")
@click.option(
    "--paid-by",
    type=click.Choice([payer.value for payer in PaidBy]),
    default=PaidBy.YOU.value,
    show_default=True,
    help="Who paid the full bill",
)
@click.pass_context
def split_expense(ctx, expense_id: int, people: int, paid_by: str):
    """Split an expense equally between a number of people."""
    service = ExpenseService(ctx.obj["store"])

    try:
        expense = service.split_expense(expense_id, people, PaidBy(paid_by))
    except DomainError as e:
        handle_domain_error(ctx, e)

    preview = preview_split(expense.amount, people, expense.split.paid_by)
    click.echo(f"Split expense {expense.id} between {people} people")
    click.echo(f"  Total: {format_amount(expense.amount)}")
    click.echo(f"  Per person: {format_amount(preview.per_person)}")
    if expense.split.paid_by == PaidBy.YOU:
        click.echo(f"  Others owe you: {format_amount(preview.others_owe_you)}")
    else:
        click.echo(f"  You owe: {format_amount(preview.you_owe)}")


@click.command("balance")
@click.option("--verbose", "-v", is_flag=True, help="List every split expense")
@click.pass_context
def show_balance(ctx, verbose: bool):
    """Show what you owe and are owed across all split expenses."""
    service = ExpenseService(ctx.obj["store"])
    summary = reconcile(service.list_expenses())

    if not summary.entries:
        click.echo("No split expenses.")
        return

    click.echo(f"You are owed: {format_amount(summary.you_are_owed)}")
    click.echo(f"You owe:      {format_amount(summary.you_owe)}")
    if summary.net_balance > 0:
        click.echo(f"Net: you are owed {format_amount(summary.net_balance)}")
    elif summary.net_balance < 0:
        click.echo(f"Net: you owe {format_amount(-summary.net_balance)}")
    else:
        click.echo("Net: settled up")

    if verbose:
        click.echo("-" * 70)
        for entry in summary.entries:
            exp = entry.expense
            direction = "owed to you" if entry.kind == OWED else "you owe"
            click.echo(
                f"{exp.id:<15} {format_short_date(exp.date):<13} {exp.category:<20} "
                f"{format_amount(entry.amount):>12} {direction}"
            )


def register_commands(cli):
    """Register split commands with main CLI."""
    cli.add_command(split_expense)
    cli.add_command(show_balance)
