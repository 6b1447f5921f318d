"""UPI deep links, QR code URLs and transaction reference checks."""

import re
import secrets
from datetime import datetime
from urllib.parse import quote, urlencode

MAX_MERCHANT_NAME_LENGTH = 48
MAX_UTR_LENGTH = 64
QR_CODE_SIZE = "260x260"

_UTR_PATTERN = re.compile(r"^[A-Za-z0-9_-]{6,64}$")
_WHITESPACE = re.compile(r"\s+")


def create_payment_reference(now: datetime) -> str:
    """Public payment id: PAY-<epoch millis>-<8 hex chars>."""
    return f"PAY-{int(now.timestamp() * 1000)}-{secrets.token_hex(4).upper()}"


def normalize_utr(utr: str | None) -> str:
    return _WHITESPACE.sub("", utr or "")[:MAX_UTR_LENGTH]


def is_valid_utr(utr: str) -> bool:
    return bool(_UTR_PATTERN.match(utr))


def build_upi_uri(
    upi_id: str, merchant_name: str, amount: int, note: str, reference: str
) -> str:
    query = urlencode(
        {
            "pa": upi_id,
            "pn": merchant_name[:MAX_MERCHANT_NAME_LENGTH],
            "am": f"{amount}",
            "cu": "INR",
            "tn": note,
            "tr": reference,
        }
    )
    return f"upi://pay?{query}"


def build_qr_code_url(provider: str, upi_uri: str) -> str:
    separator = "&" if "?" in provider else "?"
    return f"{provider}{separator}size={QR_CODE_SIZE}&data={quote(upi_uri, safe='')}"
