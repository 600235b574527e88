import re
import secrets
import string
from io import BytesIO

import qrcode
from django.conf import settings

from .models import Ticket

TICKET_CODE_ALPHABET = string.ascii_uppercase + string.digits
TICKET_CODE_HALF_LENGTH = 8

# ASCII only: re.IGNORECASE would also accept characters such as the Kelvin sign.
_SCANNED_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{8}-[A-Za-z0-9]{8}")


def generate_ticket_code() -> str:
    """Return a fresh canonical code like ``K3Q9ZP2M-8WQ1LX0A``."""
    halves = (
        "".join(secrets.choice(TICKET_CODE_ALPHABET) for _ in range(TICKET_CODE_HALF_LENGTH)) for _ in range(2)
    )
    return "-".join(halves)


def normalize_ticket_code(raw: str | None) -> str | None:
    """Canonicalize scanned input, or return None when it cannot be a ticket code.

    Input longer than TICKET_CODE_MAX_SCAN_LENGTH is rejected before matching.
    """
    if not raw or len(raw) > settings.TICKET_CODE_MAX_SCAN_LENGTH:
        return None
    if not _SCANNED_CODE_PATTERN.fullmatch(raw):
        return None
    return raw.upper()


def create_ticket_qr_png(ticket: Ticket) -> bytes:
    """Render the ticket code as a PNG QR code for the door scanner."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(ticket.ticket_code)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = BytesIO()
    img.save(buffered, "PNG")
    return buffered.getvalue()
