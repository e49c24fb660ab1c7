from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True, slots=True)
class AccountName:
    """
    AccountName — email-shaped identifier of one OTP account.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/services/account_service.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
      - src/otp_manager/contexts/accounts/application/ports/secret_store.py
    """

    value: str

    def __post_init__(self) -> None:
        """
        Validate that wrapped value is a syntactically valid email address.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Only syntax is checked: no DNS lookup and no special-use domain
            rejection, so `.test` and `.local` addresses are valid account keys.
        Raises:
            ValueError: If value is empty or not a valid email address.
        Side Effects:
            None.
        """
        if not isinstance(self.value, str):
            raise ValueError(f"AccountName requires str value, got {self.value!r}")
        normalized = self.value.strip()
        if not normalized:
            raise ValueError("AccountName requires non-empty value")
        try:
            validate_email(
                normalized,
                check_deliverability=False,
                globally_deliverable=False,
            )
        except EmailNotValidError as error:
            raise ValueError(str(error)) from error
        object.__setattr__(self, "value", normalized)

    @classmethod
    def from_string(cls, raw_value: str) -> AccountName:
        """
        Parse account name from raw request value.

        Args:
            raw_value: Raw account identifier, usually an URI path segment.
        Returns:
            AccountName: Validated account name.
        Assumptions:
            Surrounding whitespace is not part of the identifier.
        Raises:
            ValueError: If value is not a valid email address.
        Side Effects:
            None.
        """
        return cls(raw_value)

    def __str__(self) -> str:
        return self.value
