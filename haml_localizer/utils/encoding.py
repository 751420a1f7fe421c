"""
Encoding helpers for locale documents written by other tools or editors.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import chardet

logger = logging.getLogger(__name__)


def decode_bytes(raw: bytes, preferred: Tuple[str, ...] = ("utf-8-sig", "utf-8")) -> str:
    """
    Decode with tolerant fallbacks:
    - try preferred encodings first
    - then chardet detection with errors='replace'
    """
    for enc in preferred:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue

    detected = chardet.detect(raw)
    enc = detected.get("encoding") or "utf-8"
    logger.debug("Decoding with detected encoding %s (confidence %s)", enc, detected.get("confidence"))
    try:
        return raw.decode(enc, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def read_text_safely(path: Path) -> Optional[str]:
    """File contents as text, or None when the file does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    return decode_bytes(path.read_bytes())
