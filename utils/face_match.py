"""
utils/face_match.py
---------------------------------
Placeholder face matcher.

There is no biometric model here: the submitted faceData string is hashed
with a 32-bit polynomial rolling hash (h = h * 31 + c over UTF-16 code
units) and the hash picks one of the first few registered users. The same
faceData always maps to the same user, which is all the kiosk flow needs.
"""

import random

MAX_CANDIDATES = 5
MIN_CONFIDENCE = 0.70
CONFIDENCE_SPREAD = 0.30


def _to_int32(value):
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def face_hash(face_data):
    """Signed 32-bit rolling hash of a string (same values as String.hashCode in Java/JS)."""
    h = 0
    raw = face_data.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(raw), 2):
        unit = raw[i] | (raw[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return h


def pick_candidate(face_data, candidates):
    """Return the candidate selected by the hash, or None when there are none."""
    if not candidates:
        return None
    pool = candidates[:MAX_CANDIDATES]
    return pool[abs(face_hash(face_data)) % len(pool)]


def mock_confidence(rng=random):
    # [0.70, 1.00)
    return rng.random() * CONFIDENCE_SPREAD + MIN_CONFIDENCE
