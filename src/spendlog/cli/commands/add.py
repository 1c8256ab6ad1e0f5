"""Add expense command."""

import asyncio

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.cli.commands.share import create_share_task, echo_share_outcome
from spendlog.domain.entities import CATEGORIES, EmailOutcome
from spendlog.domain.errors import DomainError, invalid_email_address
from spendlog.domain.expense import ExpenseService
from spendlog.domain.sharing import send_summary, share_expense, validate_email
from spendlog.utils.amount_parser import format_amount, parse_amount
from spendlog.utils.date_parser import parse_date


@click.command("add")
@click.option("--amount", required=True, help="Expense amount (e.g., 250 or 1,250.50)")
@click.option(
    "--category",
    default="Food",
    show_default=True,
    help=f"Category ({', '.join(CATEGORIES)}) or a custom label",
)
@click.option("--other", "custom_category", help="Label to use with --category Other")
@click.option(
    "--date",
    "date_str",
    default="now",
    help="Expense date (YYYY-MM-DD, 'today', 'yesterday'); defaults to now",
)
@click.option("--note", default="", help="Note")
@click.option("--email", help="Also email a summary of the expense to this address")
@click.option("--email-only", is_flag=True, help="Email the summary to --email without saving the expense")
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    category: str,
    custom_category: str | None,
    date_str: str,
    note: str,
    email: str | None,
    email_only: bool,
):
    """Add an expense.

    Examples:
        spendlog add --amount 250 --category Food --note "Lunch"
        spendlog add --amount 1200 --category Other --other "Gym membership"
        spendlog add --amount 90 --category Travel --email friend@example.com
        spendlog add --amount 40 --email friend@example.com --email-only
    """
    service = ExpenseService(ctx.obj["store"])

    try:
        expense_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        expense_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    if email_only and email is None:
        click.echo("Error: --email-only requires --email", err=True)
        ctx.exit(1)

    # Reject a bad address before anything is saved
    if email is not None and not validate_email(email):
        click.echo(f"Error: {invalid_email_address()}", err=True)
        ctx.exit(1)

    if email_only:
        _email_without_saving(
            ctx, email, expense_amount, category, custom_category, expense_date, note
        )
        return

    try:
        expense = service.add_expense(
            amount=expense_amount,
            category=category,
            custom_category=custom_category,
            date=expense_date,
            note=note,
            email_recipient=email,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created expense {expense.id}")
    click.echo(f"  Amount: {format_amount(expense.amount)}")
    click.echo(f"  Category: {expense.category}")
    click.echo(f"  Date: {expense.date:%Y-%m-%d}")
    if expense.note:
        click.echo(f"  Note: {expense.note}")

    if email is None:
        return

    try:
        task = create_share_task(ctx)
    except DomainError as e:
        handle_domain_error(ctx, e)

    try:
        outcome = asyncio.run(share_expense(service, task, expense.id, email))
    finally:
        task.close()
    echo_share_outcome(outcome, task.message)
    if outcome != EmailOutcome.SENT:
        ctx.exit(1)


def _email_without_saving(ctx, email, amount, category, custom_category, expense_date, note):
    try:
        task = create_share_task(ctx)
    except DomainError as e:
        handle_domain_error(ctx, e)

    try:
        outcome = asyncio.run(
            send_summary(
                task,
                email,
                amount,
                category,
                expense_date,
                note=note,
                custom_category=custom_category,
            )
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    finally:
        task.close()

    echo_share_outcome(outcome, task.message)
    if outcome != EmailOutcome.SENT:
        ctx.exit(1)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_expense)
