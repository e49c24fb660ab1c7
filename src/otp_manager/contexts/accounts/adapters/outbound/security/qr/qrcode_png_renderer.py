from __future__ import annotations

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError

from otp_manager.contexts.accounts.application.ports.qr_renderer import ProvisioningQrRenderer

_DEFAULT_BOX_SIZE = 10
_DEFAULT_BORDER = 4


class QrCodePngRenderer(ProvisioningQrRenderer):
    """
    QrCodePngRenderer — encodes provisioning URIs as PNG QR codes with qrcode + Pillow.

    Docs:
      - docs/architecture/accounts/accounts-otp-lifecycle-v1.md
    Related:
      - src/otp_manager/contexts/accounts/application/ports/qr_renderer.py
      - src/otp_manager/contexts/accounts/adapters/inbound/api/routes/accounts.py
    """

    def __init__(self, *, box_size: int = _DEFAULT_BOX_SIZE, border: int = _DEFAULT_BORDER) -> None:
        """
        Initialize QR layout parameters.

        Args:
            box_size: Pixel size of one QR module.
            border: Quiet zone width in modules.
        Returns:
            None.
        Assumptions:
            Authenticator apps need at least 4 modules of quiet zone for reliable scans.
        Raises:
            ValueError: If parameters are out of range.
        Side Effects:
            None.
        """
        if box_size <= 0:
            raise ValueError("QrCodePngRenderer box_size must be > 0")
        if border < 0:
            raise ValueError("QrCodePngRenderer border must be >= 0")
        self._box_size = box_size
        self._border = border

    def render_png(self, *, provisioning_uri: str) -> bytes:
        """
        Render URI into PNG bytes.

        Args:
            provisioning_uri: `otpauth://totp` URI.
        Returns:
            bytes: PNG image.
        Assumptions:
            QR version is chosen automatically to fit the URI.
        Raises:
            ValueError: If URI is empty or encoding fails.
        Side Effects:
            None.
        """
        normalized_uri = provisioning_uri.strip()
        if not normalized_uri:
            raise ValueError("QrCodePngRenderer requires non-empty provisioning_uri")

        code = qrcode.QRCode(
            error_correction=ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        try:
            code.add_data(normalized_uri)
            code.make(fit=True)
            image = code.make_image(fill_color="black", back_color="white")
            buffer = io.BytesIO()
            image.save(buffer, format="PNG")
        except (DataOverflowError, OSError) as error:
            raise ValueError(f"QR rendering failed: {error}") from error
        return buffer.getvalue()
