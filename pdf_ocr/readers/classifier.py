"""Page classifier: decide whether embedded text is usable or OCR is needed.

Returns one of two labels:
  "direct_text": real text layer present; use the embedded text as-is
  "needs_ocr"  : empty or sparse text layer; render and recognise

Threshold:
  len(text.strip()) > threshold  → direct_text
  else                           → needs_ocr

The count is in characters, not words.  A mostly blank page with a short
caption is sent to OCR; that is expected.
"""
from __future__ import annotations

from typing import Literal

from pdf_ocr.readers.base import DEFAULT_TEXT_THRESHOLD

PageVerdict = Literal["direct_text", "needs_ocr"]


def classify_text(text: str, threshold: int = DEFAULT_TEXT_THRESHOLD) -> PageVerdict:
    """Classify a page from its embedded text."""
    if len(text.strip()) > threshold:
        return "direct_text"
    return "needs_ocr"
