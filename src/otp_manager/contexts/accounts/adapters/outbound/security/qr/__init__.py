from .qrcode_png_renderer import QrCodePngRenderer

__all__ = [
    "QrCodePngRenderer",
]
