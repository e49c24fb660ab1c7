from __future__ import annotations

from typing import Protocol


class ProvisioningQrRenderer(Protocol):
    """
    ProvisioningQrRenderer — renders provisioning URI as scannable image.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/adapters/outbound/security/qr/qrcode_png_renderer.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
    """

    def render_png(self, *, provisioning_uri: str) -> bytes:
        """
        Encode provisioning URI as PNG QR code.

        Args:
            provisioning_uri: `otpauth://totp` URI.
        Returns:
            bytes: PNG image bytes.
        Assumptions:
            Output is returned to the caller as-is and never stored.
        Raises:
            ValueError: If URI is empty or image cannot be produced.
        Side Effects:
            None.
        """
        ...
