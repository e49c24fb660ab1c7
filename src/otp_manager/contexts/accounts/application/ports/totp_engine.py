from __future__ import annotations

from datetime import datetime
from typing import Protocol


class TotpEngine(Protocol):
    """
    TotpEngine — port of RFC 6238 TOTP operations used by the account lifecycle.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/outbound/security/totp/pyotp_totp_engine.py
      - src/otp_manager/contexts/accounts/domain/entities/otp_key.py
    """

    def generate_secret(self) -> str:
        """
        Generate new random base32 shared secret.

        Args:
            None.
        Returns:
            str: New base32 secret.
        Assumptions:
            Secret is never derived from account data.
        Raises:
            ValueError: If engine cannot produce a valid secret.
        Side Effects:
            Uses cryptographically secure random source.
        """
        ...

    def build_provisioning_uri(self, *, secret: str, account_name: str, issuer: str) -> str:
        """
        Build standard otpauth URI binding secret to issuer and account.

        Args:
            secret: Base32 TOTP secret.
            account_name: Account label shown in authenticator apps.
            issuer: Issuer label shown in authenticator apps.
        Returns:
            str: URI starting with `otpauth://totp`.
        Assumptions:
            URI contains the secret and must never be logged.
        Raises:
            ValueError: If secret or metadata is invalid.
        Side Effects:
            None.
        """
        ...

    def verify_code(self, *, secret: str, code: str, at_time: datetime) -> bool:
        """
        Verify submitted code against secret within the engine time window.

        Args:
            secret: Base32 TOTP secret.
            code: User-provided numeric code.
            at_time: Timezone-aware UTC timestamp of verification.
        Returns:
            bool: `True` when code is valid, `False` otherwise.
        Assumptions:
            Wrong codes are a normal outcome, not an error.
        Raises:
            ValueError: If arguments are malformed.
        Side Effects:
            None.
        """
        ...
