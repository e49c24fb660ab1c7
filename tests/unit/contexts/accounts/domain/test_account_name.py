from __future__ import annotations

import pytest

from otp_manager.contexts.accounts.domain import AccountName, OtpKey


def test_account_name_accepts_email_and_strips_whitespace() -> None:
    """
    Verify valid email is accepted and surrounding whitespace is removed.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Deliverability checks are disabled.
    Raises:
        AssertionError: If normalized value differs from expected email.
    Side Effects:
        None.
    """
    account_name = AccountName.from_string("  alice@example.com ")

    assert account_name.value == "alice@example.com"
    assert str(account_name) == "alice@example.com"


@pytest.mark.parametrize(
    "raw_value",
    [
        "alice@foo.test",
        "c@example.local",
        "svc@host.invalid",
        "first.last+tag@sub.example.org",
    ],
)
def test_account_name_accepts_syntactically_valid_special_use_domains(raw_value: str) -> None:
    """
    Verify reserved and special-use domains pass because only syntax is checked.

    Args:
        raw_value: Syntactically valid email address.
    Returns:
        None.
    Assumptions:
        Account keys never receive mail, so deliverability rules do not apply.
    Raises:
        AssertionError: If valid syntax is rejected.
    Side Effects:
        None.
    """
    assert AccountName.from_string(raw_value).value == raw_value


@pytest.mark.parametrize(
    "raw_value",
    [
        "",
        "   ",
        "alice",
        "alice@",
        "@example.com",
        "alice@@example.com",
    ],
)
def test_account_name_rejects_non_email_values(raw_value: str) -> None:
    """
    Verify empty and malformed addresses raise ValueError.

    Args:
        raw_value: Invalid candidate account identifier.
    Returns:
        None.
    Assumptions:
        Validator error text is passed through as ValueError message.
    Raises:
        AssertionError: If invalid value is accepted.
    Side Effects:
        None.
    """
    with pytest.raises(ValueError):
        AccountName.from_string(raw_value)


def test_account_names_compare_by_value() -> None:
    assert AccountName("bob@example.com") == AccountName(" bob@example.com")


def test_otp_key_repr_hides_secret_material() -> None:
    """
    Verify OtpKey repr never exposes secret or provisioning URI.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Repr may end up in log lines.
    Raises:
        AssertionError: If secret text leaks into repr.
    Side Effects:
        None.
    """
    key = OtpKey(
        account_name=AccountName("alice@example.com"),
        issuer="OTP Manager",
        secret="JBSWY3DPEHPK3PXP",
        provisioning_uri="otpauth://totp/OTP%20Manager:alice%40example.com?secret=JBSWY3DPEHPK3PXP",
    )

    assert "JBSWY3DPEHPK3PXP" not in repr(key)
    assert "alice@example.com" in repr(key)


def test_otp_key_rejects_non_totp_uri() -> None:
    with pytest.raises(ValueError):
        OtpKey(
            account_name=AccountName("alice@example.com"),
            issuer="OTP Manager",
            secret="JBSWY3DPEHPK3PXP",
            provisioning_uri="otpauth://hotp/alice?secret=JBSWY3DPEHPK3PXP",
        )
