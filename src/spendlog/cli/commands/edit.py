"""Expense edit and delete commands."""

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.editing import EditSession
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import ExpenseService
from spendlog.domain.split import share_of
from spendlog.utils.amount_parser import format_amount, parse_amount
from spendlog.utils.date_parser import parse_date


@click.command("edit")
@click.argument("expense_id", type=int)
@click.option("--amount", help="New amount")
@click.option("--category", help="New category or custom label")
@click.option("--other", "custom_category", help="Label to use with --category Other")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--note", help="New note (use '' to clear)")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: int,
    amount: str | None,
    category: str | None,
    custom_category: str | None,
    date_str: str | None,
    note: str | None,
):
    """Edit an expense's amount, category, date or note."""
    if amount is None and category is None and date_str is None and note is None:
        click.echo("Error: Nothing to update. Pass at least one of --amount, --category, --date, --note.", err=True)
        ctx.exit(1)

    service = ExpenseService(ctx.obj["store"])

    new_amount = None
    if amount is not None:
        try:
            new_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    new_date = None
    if date_str is not None:
        try:
            new_date = parse_date(date_str)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        session = EditSession(service.get_expense(expense_id))
        session.begin()
        session.set_field(
            amount=new_amount,
            category=category,
            custom_category=custom_category,
            date=new_date,
            note=note,
        )
        updated = service.replace_expense(session.save())
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated expense {updated.id}")
    click.echo(f"  Amount: {format_amount(updated.amount)}")
    click.echo(f"  Category: {updated.category}")
    click.echo(f"  Date: {updated.date:%Y-%m-%d}")
    if updated.note:
        click.echo(f"  Note: {updated.note}")
    if updated.split is not None:
        click.echo(f"  Split: {format_amount(share_of(updated))} per person")


@click.command("delete")
@click.argument("expense_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Delete without asking for confirmation")
@click.pass_context
def delete_expense(ctx, expense_id: int, yes: bool):
    """Delete an expense."""
    service = ExpenseService(ctx.obj["store"])

    try:
        expense = service.get_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes:
        click.confirm(
            f"Delete {format_amount(expense.amount)} {expense.category} expense {expense_id}?",
            abort=True,
        )

    try:
        service.delete_expense(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted expense {expense_id}")


def register_commands(cli):
    """Register edit commands with main CLI."""
    cli.add_command(edit_expense)
    cli.add_command(delete_expense)
