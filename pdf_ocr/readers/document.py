"""PyMuPDF document handle used by the reader and the image exporter.

Every PyMuPDF failure is re-raised as one of the DocumentError subclasses
below so callers can tell a run-fatal failure (OpenError, ExtractionError)
from a per-page one (RenderError, ImageWriteError) without knowing fitz's
exception types.

Page indices are 0-based throughout.
"""
from __future__ import annotations

import logging
from pathlib import Path

import fitz  # PyMuPDF

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Custom exceptions
# ---------------------------------------------------------------------------


class DocumentError(RuntimeError):
    """Base class for document handle failures."""


class OpenError(DocumentError):
    """Raised when the PDF cannot be opened."""


class ExtractionError(DocumentError):
    """Raised when a page's embedded text cannot be read."""


class RenderError(DocumentError):
    """Raised when a page cannot be rasterized."""


class ImageWriteError(DocumentError):
    """Raised when a rendered page image cannot be written to disk."""


class PDFDocument:
    """Read-only view over an opened PDF.

    Use as a context manager so the underlying fitz.Document is always
    closed::

        with PDFDocument.open("scan.pdf") as document:
            text = document.embedded_text(0)
    """

    def __init__(self, doc: fitz.Document, path: str | Path) -> None:
        self._doc = doc
        self.path = Path(path)

    @classmethod
    def open(cls, path: str | Path) -> PDFDocument:
        """Open *path*; raise OpenError on any PyMuPDF failure."""
        try:
            doc = fitz.open(str(path))
        except Exception as exc:  # noqa: BLE001
            raise OpenError(f"error opening PDF {path}: {exc}") from exc
        if not doc.is_pdf:
            doc.close()
            raise OpenError(f"error opening PDF {path}: not a PDF document")
        return cls(doc, path)

    def __enter__(self) -> PDFDocument:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def embedded_text(self, page_num: int) -> str:
        """Return the plain text layer of a page (possibly empty)."""
        try:
            page = self._doc.load_page(page_num)
            return page.get_text()
        except Exception as exc:  # noqa: BLE001
            raise ExtractionError(
                f"error extracting text from page {page_num + 1}: {exc}"
            ) from exc

    def rasterize(self, page_num: int, dpi: int) -> fitz.Pixmap:
        """Render a page to an RGB Pixmap at *dpi*."""
        try:
            page = self._doc.load_page(page_num)
            return page.get_pixmap(dpi=dpi, alpha=False)
        except Exception as exc:  # noqa: BLE001
            raise RenderError(
                f"error rendering page {page_num + 1} image: {exc}"
            ) from exc

    def save_image(
        self,
        image: fitz.Pixmap,
        path: str | Path,
        jpg_quality: int | None = None,
    ) -> None:
        """Write *image* to *path*; the format follows the file extension.

        PyMuPDF reports write failures with its own exception types, not
        OSError, so every failure is re-raised as ImageWriteError.
        """
        try:
            if jpg_quality is None:
                image.save(str(path))
            else:
                image.save(str(path), jpg_quality=jpg_quality)
        except Exception as exc:  # noqa: BLE001
            raise ImageWriteError(f"error writing image {path}: {exc}") from exc

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()
            logger.debug("Closed %s", self.path)
