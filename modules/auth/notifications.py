"""
Account email delivery.

There is no mail provider wired in yet; links are written to the log so
they can be picked up in development.
"""

import logging

logger = logging.getLogger(__name__)


class LoggingEmailSender:
    """IEmailSender that logs the link instead of sending mail."""

    async def send_verification_email(self, email: str, link: str) -> None:
        logger.info(f"Email verification link for {email}: {link}")

    async def send_password_reset_email(self, email: str, link: str) -> None:
        logger.info(f"Password reset link for {email}: {link}")
