"""Delivery of one-time codes.

Routes depend on :func:`get_otp_sender` so tests (or another provider) can be
swapped in with ``app.dependency_overrides``.
"""
import logging
from typing import Protocol

import resend

from ...core.config import OTP_INTERVAL_SECONDS, OTP_SENDER_EMAIL, RESEND_API_KEY

logger = logging.getLogger(__name__)


class OtpSender(Protocol):
    def send(self, recipient: str, code: str) -> None:
        ...


class LoggingOtpSender:
    """Writes the code to the application log. Used when no email provider is configured."""

    def send(self, recipient: str, code: str) -> None:
        logger.info(f"OTP for {recipient}: {code}")


class ResendEmailOtpSender:
    """Emails the code through the Resend API."""

    subject = "Your verification code"

    def __init__(self, api_key: str, sender: str = OTP_SENDER_EMAIL):
        self.api_key = api_key
        self.sender = sender

    def build_payload(self, recipient: str, code: str) -> dict:
        return {
            "from": self.sender,
            "to": [recipient],
            "subject": self.subject,
            "text": (
                f"Your verification code is {code}. "
                f"It expires in about {OTP_INTERVAL_SECONDS} seconds."
            ),
        }

    def send(self, recipient: str, code: str) -> None:
        # Runs as a background task after the response is sent, so a failed
        # delivery is logged rather than raised to the client.
        resend.api_key = self.api_key
        try:
            response = resend.Emails.send(self.build_payload(recipient, code))
            logger.info(f"OTP email sent to {recipient}: {response}")
        except Exception as e:
            logger.error(f"OTP email to {recipient} failed: {e}", exc_info=True)


def get_otp_sender() -> OtpSender:
    if RESEND_API_KEY:
        return ResendEmailOtpSender(RESEND_API_KEY)
    return LoggingOtpSender()
