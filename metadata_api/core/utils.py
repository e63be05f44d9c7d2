import re
from urllib.parse import quote

from Crypto.Hash import keccak

def fnv1a_32(s: str) -> int:
    """Deterministic, fast hash for seed generation."""
    h = 0x811c9dc5
    for c in s.encode("utf-8"):
        h ^= c
        h = (h * 0x01000193) & 0xFFFFFFFF
    return h

def seeded_rand(seed: int, n: int = 1) -> list[float]:
    """
    Stateless Mulberry32 so same seed → same outputs without storing
    PRNG state. Values are in [0, 1).
    """
    out = []
    t = seed & 0xFFFFFFFF
    for _ in range(n):
        t = (t + 0x6D2B79F5) & 0xFFFFFFFF
        z = ((t ^ (t >> 15)) * (t | 1)) & 0xFFFFFFFF
        z ^= (z + (((z ^ (z >> 7)) * (z | 61)) & 0xFFFFFFFF)) & 0xFFFFFFFF
        out.append(((z ^ (z >> 14)) & 0xFFFFFFFF) / 4294967296.0)
    return out

def keccak_hex(s: str) -> str:
    """Keccak-256 of the UTF-8 string as 0x-prefixed hex (the on-chain token id)."""
    h = keccak.new(digest_bits=256)
    h.update(s.encode("utf-8"))
    return "0x" + h.hexdigest()

def token_uri(token_id: str) -> str:
    """
    Normalize a decimal or 0x-hex token id to the 32-byte hex form
    used as a NameRecord's canonical uri. Raises ValueError on garbage.
    """
    raw = token_id.strip()
    if not raw:
        raise ValueError("empty token id")
    value = int(raw, 16) if raw.lower().startswith("0x") else int(raw, 10)
    if value < 0 or value >= 1 << 256:
        raise ValueError("token id out of range")
    return f"0x{value:064x}"

def is_ascii(s: str) -> bool:
    return all(ord(c) < 0x80 for c in s)

# Percent-escapes that are safe to leave decoded inside an SVG data URI.
_HEX_PAIRS = re.compile(r"%[0-9A-F]{2}")
_KEEP_DECODED = {"%20": " ", "%3D": "=", "%3A": ":", "%2F": "/"}

def svg_to_data_uri(svg: str) -> str:
    """
    Compact (non-base64) SVG data URI:
    - collapse whitespace
    - swap double quotes for single quotes
    - percent-encode, then undo the escapes browsers don't need
    """
    if svg.startswith("\ufeff"):
        svg = svg[1:]
    body = " ".join(svg.split()).replace('"', "'")
    encoded = quote(body, safe="-_.!~*'()")
    encoded = _HEX_PAIRS.sub(lambda m: _KEEP_DECODED.get(m.group(0), m.group(0).lower()), encoded)
    return "data:image/svg+xml," + encoded
