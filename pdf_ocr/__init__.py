"""PDF text extraction with OCR fallback for scanned pages.

Embedded text is used directly when a page carries enough of it; sparse
pages are rendered with PyMuPDF and recognised with PaddleOCR.
"""

__version__ = "0.1.0"
