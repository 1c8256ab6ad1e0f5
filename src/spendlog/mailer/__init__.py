"""Email dispatch for sharing expense summaries."""

from spendlog.mailer.base import EmailDispatcher
from spendlog.mailer.emailjs import EmailJSDispatcher

__all__ = ["EmailDispatcher", "EmailJSDispatcher"]
