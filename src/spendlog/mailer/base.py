"""Abstract email dispatcher interface."""

from abc import ABC, abstractmethod

from spendlog.domain.entities import ExpenseSummary


class EmailDispatcher(ABC):
    """Sends an expense summary to a recipient through an external service."""

    @abstractmethod
    async def send(self, recipient: str, summary: ExpenseSummary) -> None:
        """Send summary to recipient.

        Raises:
            EmailDispatchError: If the service fails or rejects the message
        """
        pass
