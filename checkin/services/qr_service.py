# =======================================================================================
# checkin/services/qr_service.py - QR Code Generation
# =======================================================================================
import io
from typing import Optional

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from ..config import config

CHECK_IN_PATH = "/check-in"


def make_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """Encode `data` as a black-on-white PNG with high error correction."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def resolve_base_url(
    override: Optional[str], stored: Optional[str], request_base: str
) -> str:
    """Explicit override, then the stored setting, then PUBLIC_BASE_URL, then the request."""
    for candidate in (override, stored, config.PUBLIC_BASE_URL, request_base):
        if candidate and candidate.strip():
            return candidate.strip().rstrip("/")
    return ""


def check_in_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{CHECK_IN_PATH}"
