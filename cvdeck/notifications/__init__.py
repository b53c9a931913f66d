"""Outbound notifications."""

from cvdeck.notifications.email import (
    EmailConfig,
    EmailError,
    ResendEmailNotifier,
    get_email_config,
)

__all__ = ["EmailConfig", "EmailError", "ResendEmailNotifier", "get_email_config"]
