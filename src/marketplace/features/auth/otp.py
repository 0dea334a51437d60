"""Time-based one-time passwords bound to an email address.

Each identity gets its own TOTP secret derived from the identity itself and
the shared ``OTP_SALT``, so the server never has to store codes: a code
generated at registration can be re-derived and checked at verification as
long as both happen within the accepted time steps.
"""
import base64
import datetime
from typing import Optional

import pyotp

from ...core.config import OTP_DIGITS, OTP_INTERVAL_SECONDS, OTP_SALT, OTP_VALID_WINDOW


def _secret_for(identity: str) -> str:
    raw = f"{identity}{OTP_SALT}".encode("utf-8")
    return base64.b32encode(raw).decode("ascii")


def _totp(identity: str) -> pyotp.TOTP:
    return pyotp.TOTP(_secret_for(identity), digits=OTP_DIGITS, interval=OTP_INTERVAL_SECONDS)


def generate(identity: str, for_time: Optional[datetime.datetime] = None) -> str:
    """Returns the code for ``identity`` in the time step containing ``for_time`` (now by default)."""
    totp = _totp(identity)
    if for_time is None:
        return totp.now()
    return totp.at(for_time)


def verify(identity: str, code: Optional[str], for_time: Optional[datetime.datetime] = None) -> bool:
    """Checks ``code`` against the current step and ``OTP_VALID_WINDOW`` neighbours on each side.

    Returns False for empty, expired or mismatched codes; never raises for bad input.
    """
    if not identity or not code:
        return False
    code = code.strip()
    if not code.isdigit() or len(code) != OTP_DIGITS:
        return False
    return _totp(identity).verify(code, for_time=for_time, valid_window=OTP_VALID_WINDOW)
