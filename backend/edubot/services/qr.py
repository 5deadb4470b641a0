"""
QR identifiers: opaque strings printed as QR codes that deep-link into the chat page.
Passage set codes:  ps-<rand4>-<hex8>-<base36 ms>
Mapping codes:      mp-<last 6 of textbook id>-<order, at least 3 digits>-<rand4>-<hex8>-<base36 ms>
Image rendering is done by the frontend; only the identifier and its URL live here.
"""
import re
import secrets
import string
import time
import uuid

from edubot.config import settings

_BASE36 = string.digits + string.ascii_lowercase

_PASSAGE_SET_PATTERN = re.compile(r"^ps-[a-z0-9]{4}-[a-f0-9]{8}-[a-z0-9]+$")
_MAPPING_PATTERN = re.compile(r"^mp-[a-z0-9]{6}-[0-9]{3,}-[a-z0-9]{4}-[a-f0-9]{8}-[a-z0-9]+$")


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_BASE36[r])
    return "".join(reversed(out))


def _suffix() -> str:
    """<rand4>-<hex8>-<base36 ms>: random tag, uuid prefix, creation time."""
    rand = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{rand}-{uuid.uuid4().hex[:8]}-{_to_base36(int(time.time() * 1000))}"


def generate_qr_code() -> str:
    """New passage set QR identifier (independent of any textbook)."""
    return f"ps-{_suffix()}"


def generate_mapping_qr_code(textbook_id, order: int) -> str:
    """New QR identifier for one textbook ↔ passage set mapping."""
    tb = re.sub(r"[^a-z0-9]", "", str(textbook_id).lower())[-6:].rjust(6, "0")
    return f"mp-{tb}-{order:03d}-{_suffix()}"


def qr_code_url(qr_code: str) -> str:
    return f"{settings.qr_base_url}/chat/{qr_code}"


def validate_qr_code(qr_code: str | None) -> bool:
    if not qr_code:
        return False
    return bool(_PASSAGE_SET_PATTERN.match(qr_code) or _MAPPING_PATTERN.match(qr_code))


def qr_code_type(qr_code: str | None) -> str:
    """'passage_set', 'mapping' or 'invalid'."""
    if not validate_qr_code(qr_code):
        return "invalid"
    return "mapping" if qr_code.startswith("mp-") else "passage_set"
