"""EmailJS REST API dispatcher."""

from typing import Any, Optional

import httpx
import structlog

from spendlog.config import EmailSettings
from spendlog.domain.entities import ExpenseSummary
from spendlog.domain.errors import EmailDispatchError
from spendlog.mailer.base import EmailDispatcher

logger = structlog.get_logger(__name__)


def build_template_params(recipient: str, summary: ExpenseSummary) -> dict[str, Any]:
    """Named template parameters expected by the email template."""
    return {
        "to_email": recipient,
        "amount": f"{summary.amount:.2f}",
        "category": summary.category,
        "date": summary.date,
        "note": summary.note,
        "formatted_amount": summary.formatted_amount,
    }


class EmailJSDispatcher(EmailDispatcher):
    """Posts template sends to the EmailJS ``/email/send`` endpoint."""

    def __init__(
        self,
        settings: EmailSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize dispatcher.

        Args:
            settings: Service, template and key identifiers
            transport: Optional httpx transport (used by tests)
        """
        self.settings = settings
        self.transport = transport

    def build_payload(self, recipient: str, summary: ExpenseSummary) -> dict[str, Any]:
        """Request body for a template send."""
        return {
            "service_id": self.settings.service_id,
            "template_id": self.settings.template_id,
            "user_id": self.settings.public_key,
            "template_params": build_template_params(recipient, summary),
        }

    async def send(self, recipient: str, summary: ExpenseSummary) -> None:
        """Send summary to recipient.

        Raises:
            EmailDispatchError: On transport errors or a non-2xx response
        """
        payload = self.build_payload(recipient, summary)
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.timeout, transport=self.transport
            ) as client:
                response = await client.post(self.settings.url, json=payload)
        except httpx.TimeoutException as e:
            raise EmailDispatchError("Email service timed out") from e
        except httpx.HTTPError as e:
            raise EmailDispatchError(f"Email service unavailable: {e}") from e

        if response.is_error:
            detail = response.text.strip() or response.reason_phrase
            logger.warning(
                "email_service_rejected", status_code=response.status_code, detail=detail
            )
            raise EmailDispatchError(
                f"Email service returned {response.status_code}: {detail}"
            )
        logger.debug("email_service_accepted", status_code=response.status_code)
