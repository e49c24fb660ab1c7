from __future__ import annotations

from dataclasses import dataclass

from otp_manager.contexts.accounts.domain.value_objects import AccountName

_OTPAUTH_TOTP_PREFIX = "otpauth://totp"


@dataclass(frozen=True, slots=True)
class OtpKey:
    """
    OtpKey — key material produced once when an account secret is created.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/application/ports/totp_engine.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
    """

    account_name: AccountName
    issuer: str
    secret: str
    provisioning_uri: str

    def __post_init__(self) -> None:
        """
        Validate key material invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Provisioning URI is rendered as QR code by inbound adapters.
        Raises:
            ValueError: If issuer or secret are blank or URI scheme is unexpected.
        Side Effects:
            None.
        """
        if not self.issuer.strip():
            raise ValueError("OtpKey.issuer must be non-empty")
        if not self.secret.strip():
            raise ValueError("OtpKey.secret must be non-empty")
        if not self.provisioning_uri.startswith(_OTPAUTH_TOTP_PREFIX):
            raise ValueError(f"OtpKey.provisioning_uri must start with {_OTPAUTH_TOTP_PREFIX!r}")

    def __repr__(self) -> str:
        # secret and URI stay out of reprs that may reach logs
        return f"OtpKey(account_name={self.account_name.value!r}, issuer={self.issuer!r})"
