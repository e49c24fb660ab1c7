from __future__ import annotations

import binascii
from datetime import datetime

import pyotp

from otp_manager.contexts.accounts.application.ports.totp_engine import TotpEngine

_DEFAULT_TOTP_DIGITS = 6
_DEFAULT_TOTP_PERIOD_SECONDS = 30
_DEFAULT_VALID_WINDOW = 1


class PyOtpTotpEngine(TotpEngine):
    """
    PyOtpTotpEngine — RFC 6238 TOTP engine backed by pyotp.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/totp_engine.py
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - tests/unit/contexts/accounts/adapters/test_pyotp_totp_engine.py
    """

    def __init__(
        self,
        *,
        digits: int = _DEFAULT_TOTP_DIGITS,
        period_seconds: int = _DEFAULT_TOTP_PERIOD_SECONDS,
        valid_window: int = _DEFAULT_VALID_WINDOW,
    ) -> None:
        """
        Initialize TOTP parameters for provisioning and verification.

        Args:
            digits: Number of code digits.
            period_seconds: TOTP period in seconds.
            valid_window: Number of time-steps accepted before/after current step.
        Returns:
            None.
        Assumptions:
            Defaults match common authenticator apps (6 digits, 30 seconds, SHA1).
        Raises:
            ValueError: If arguments are outside supported ranges.
        Side Effects:
            None.
        """
        if digits <= 0:
            raise ValueError("PyOtpTotpEngine digits must be > 0")
        if period_seconds <= 0:
            raise ValueError("PyOtpTotpEngine period_seconds must be > 0")
        if valid_window < 0:
            raise ValueError("PyOtpTotpEngine valid_window must be >= 0")

        self._digits = digits
        self._period_seconds = period_seconds
        self._valid_window = valid_window

    def generate_secret(self) -> str:
        """
        Generate new random base32 secret.

        Args:
            None.
        Returns:
            str: Upper-case base32 secret (160 bits of entropy).
        Assumptions:
            pyotp draws randomness from `secrets`.
        Raises:
            ValueError: If generated secret is empty.
        Side Effects:
            Uses OS random source.
        """
        secret = pyotp.random_base32().strip().upper()
        if not secret:
            raise ValueError("PyOtpTotpEngine generated empty secret")
        return secret

    def build_provisioning_uri(self, *, secret: str, account_name: str, issuer: str) -> str:
        """
        Build otpauth URI for QR rendering.

        Args:
            secret: Base32 TOTP secret.
            account_name: Account label.
            issuer: Issuer label.
        Returns:
            str: URI string starting with `otpauth://totp`.
        Assumptions:
            None.
        Raises:
            ValueError: If secret, account label or issuer is empty.
        Side Effects:
            None.
        """
        normalized_secret = secret.strip().upper()
        normalized_issuer = issuer.strip()
        account_label = account_name.strip()
        if not normalized_secret:
            raise ValueError("PyOtpTotpEngine requires non-empty secret")
        if not normalized_issuer:
            raise ValueError("PyOtpTotpEngine requires non-empty issuer")
        if not account_label:
            raise ValueError("PyOtpTotpEngine requires non-empty account name")

        uri = self._totp(secret=normalized_secret).provisioning_uri(
            name=account_label,
            issuer_name=normalized_issuer,
        )
        if not uri.startswith("otpauth://totp"):
            raise ValueError("PyOtpTotpEngine produced invalid otpauth URI")
        return uri

    def verify_code(self, *, secret: str, code: str, at_time: datetime) -> bool:
        """
        Verify code within configured window around given UTC time.

        Args:
            secret: Base32 TOTP secret.
            code: User submitted code string.
            at_time: Timezone-aware UTC datetime.
        Returns:
            bool: `True` when verification succeeds.
        Assumptions:
            A secret that is not valid base32 cannot match any code.
        Raises:
            ValueError: If timestamp is naive or secret/code are empty.
        Side Effects:
            None.
        """
        normalized_secret = secret.strip().upper()
        normalized_code = code.strip()
        if not normalized_secret:
            raise ValueError("PyOtpTotpEngine verify requires non-empty secret")
        if not normalized_code:
            raise ValueError("PyOtpTotpEngine verify requires non-empty code")
        if at_time.tzinfo is None:
            raise ValueError("PyOtpTotpEngine verify requires timezone-aware at_time")
        try:
            return bool(
                self._totp(secret=normalized_secret).verify(
                    normalized_code,
                    for_time=int(at_time.timestamp()),
                    valid_window=self._valid_window,
                )
            )
        except binascii.Error:
            return False

    def _totp(self, *, secret: str) -> pyotp.TOTP:
        return pyotp.TOTP(secret, digits=self._digits, interval=self._period_seconds)
