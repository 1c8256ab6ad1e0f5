"""Email sharing commands."""

import asyncio
from datetime import datetime

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.config import EmailSettings
from spendlog.domain.entities import EmailOutcome
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import ExpenseService
from spendlog.domain.sharing import EmailShareTask, share_expense
from spendlog.mailer.emailjs import EmailJSDispatcher


def create_share_task(ctx: click.Context) -> EmailShareTask:
    """Build a share task from an injected dispatcher or the environment.

    Raises:
        ValidationError: If email settings are missing
    """
    dispatcher = ctx.obj.get("dispatcher")
    if dispatcher is None:
        dispatcher = EmailJSDispatcher(EmailSettings.from_env())
    return EmailShareTask(dispatcher)


def echo_share_outcome(outcome: EmailOutcome, message: str | None) -> None:
    """Print the result of a share attempt."""
    if outcome == EmailOutcome.SENT:
        click.echo(message or "Email sent")
    else:
        click.echo(f"Error: {message or 'Email was not sent'}", err=True)


@click.command("share")
@click.argument("expense_id", type=int)
@click.argument("recipient")
@click.pass_context
def share_expense_cmd(ctx, expense_id: int, recipient: str):
    """Email a summary of an expense to RECIPIENT.

    The expense is marked as shared only when the email service accepts the
    message. Run the command again to retry after a failure.
    """
    service = ExpenseService(ctx.obj["store"])

    try:
        task = create_share_task(ctx)
    except DomainError as e:
        handle_domain_error(ctx, e)

    try:
        outcome = asyncio.run(
            share_expense(service, task, expense_id, recipient, now=datetime.now())
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    finally:
        task.close()

    echo_share_outcome(outcome, task.message)
    if outcome != EmailOutcome.SENT:
        ctx.exit(1)


def register_commands(cli):
    """Register share command with main CLI."""
    cli.add_command(share_expense_cmd)
