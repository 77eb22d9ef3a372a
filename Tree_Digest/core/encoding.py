import re
from typing import Optional

_HEX_RE = re.compile(r"[0-9a-f]*")


def to_hex_string(data: Optional[bytes]) -> str:
    """
    Render bytes as lowercase hex, two characters per byte,
    most significant nibble first. None or b"" gives "".
    """
    return bytes(data).hex() if data else ""


def is_hex_digest(text: str, digest_size: Optional[int] = None) -> bool:
    if not text or _HEX_RE.fullmatch(text) is None:
        return False
    if len(text) % 2:
        return False
    if digest_size is not None:
        return len(text) == digest_size * 2
    return True
