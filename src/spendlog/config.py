"""Configuration read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from spendlog.domain.errors import ValidationError

EMAILJS_SEND_URL = "https://api.emailjs.com/api/v1.0/email/send"
DEFAULT_EMAIL_TIMEOUT = 10.0


@dataclass(frozen=True)
class EmailSettings:
    """Credentials and endpoint for the EmailJS REST API."""

    service_id: str
    template_id: str
    public_key: str
    url: str = EMAILJS_SEND_URL
    timeout: float = DEFAULT_EMAIL_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EmailSettings":
        """Build settings from SPENDLOG_EMAILJS_* variables.

        Raises:
            ValidationError: If a required variable is missing or the timeout
                is not a positive number
        """
        env = os.environ if environ is None else environ
        required = {
            "service_id": "SPENDLOG_EMAILJS_SERVICE_ID",
            "template_id": "SPENDLOG_EMAILJS_TEMPLATE_ID",
            "public_key": "SPENDLOG_EMAILJS_PUBLIC_KEY",
        }
        missing = [name for name in required.values() if not env.get(name)]
        if missing:
            raise ValidationError(
                f"Email sharing is not configured. Set {', '.join(missing)}."
            )

        timeout_str = env.get("SPENDLOG_EMAIL_TIMEOUT")
        timeout = DEFAULT_EMAIL_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                timeout = -1.0
            if timeout <= 0:
                raise ValidationError(
                    f"SPENDLOG_EMAIL_TIMEOUT must be a positive number, got '{timeout_str}'"
                )

        return cls(
            service_id=env[required["service_id"]],
            template_id=env[required["template_id"]],
            public_key=env[required["public_key"]],
            url=env.get("SPENDLOG_EMAILJS_URL") or EMAILJS_SEND_URL,
            timeout=timeout,
        )
