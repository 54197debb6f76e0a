"""PDF reader: per-page dual path (embedded text vs. OCR) and aggregation.

Architecture
------------
Every page is classified by classifier.py before processing:
  - direct_text → stripped embedded text is used as-is
  - needs_ocr   → page rendered via PyMuPDF, written to a scratch PNG,
                  recognised by the OCR engine (ocr.py)

Exactly one path is attempted per page; there is no retry and no
re-classification.

Failure policy
--------------
ExtractionError (text layer unreadable) aborts the whole run; no partial
output is returned.  RenderError, RecognitionError, ImageWriteError and
scratch-file OSErrors only fail the current page: it is logged as a warning and left
out of the output.

Scratch rule
------------
The scratch PNG lives only inside _scratch_image(); it is removed before
extract_page() returns on every exit path.
"""
from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pdf_ocr.readers.base import (
    DocumentText,
    ExtractionConfig,
    PageResult,
    RecognitionError,
    Recognizer,
)
from pdf_ocr.readers.classifier import classify_text
from pdf_ocr.readers.document import ImageWriteError, PDFDocument, RenderError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _scratch_image(
    document: PDFDocument,
    image: Any,
    page_num: int,
    scratch_dir: str | Path | None = None,
) -> Iterator[Path]:
    """Write *image* (a fitz.Pixmap) to a temporary PNG via *document* and
    yield its path.

    The file is deleted when the block exits, whether or not it raised.
    """
    fd, name = tempfile.mkstemp(
        prefix=f"page_{page_num + 1}_",
        suffix=".png",
        dir=str(scratch_dir) if scratch_dir is not None else None,
    )
    os.close(fd)
    path = Path(name)
    try:
        document.save_image(image, path)
        yield path
    finally:
        path.unlink(missing_ok=True)


def extract_page(
    document: PDFDocument,
    page_num: int,
    config: ExtractionConfig,
    engine: Recognizer,
    scratch_dir: str | Path | None = None,
    log: logging.Logger | None = None,
) -> PageResult:
    """Produce the text of one page via embedded text or OCR.

    Raises ExtractionError when the page's text layer cannot be read.
    Every other failure is returned as a "failed" PageResult.
    """
    log = log or logger
    embedded = document.embedded_text(page_num)

    if classify_text(embedded, config.text_threshold) == "direct_text":
        return PageResult(page_num, "direct_text", embedded.strip())

    log.info("Page %d has minimal text, performing OCR...", page_num + 1)
    try:
        image = document.rasterize(page_num, config.dpi)
        with _scratch_image(document, image, page_num, scratch_dir) as image_path:
            text = engine.recognize(
                image_path, config.language, config.preserve_layout
            )
    except (RenderError, ImageWriteError, RecognitionError) as exc:
        return PageResult(page_num, "failed", error=str(exc))
    except OSError as exc:
        return PageResult(
            page_num, "failed", error=f"error writing scratch image: {exc}"
        )

    return PageResult(page_num, "ocr_text", text)


class PDFReader:
    """Extract labelled text from every page of one PDF."""

    def __init__(
        self,
        path: str | Path,
        config: ExtractionConfig,
        engine: Recognizer,
        log: logging.Logger | None = None,
        scratch_dir: str | Path | None = None,
    ) -> None:
        """Create a PDFReader.

        Parameters
        ----------
        path:
            Path to the PDF file.
        config:
            Per-run configuration (language, DPI, layout flag, threshold).
        engine:
            Recognition engine used for pages classified "needs_ocr".
        log:
            Logger receiving progress and per-page warnings.  Defaults to
            this module's logger.
        scratch_dir:
            Directory for transient OCR rasters; system temp dir if None.
        """
        self.path = Path(path)
        self.config = config
        self._engine = engine
        self._log = log or logger
        self._scratch_dir = scratch_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def read(self) -> DocumentText:
        """Open the PDF, process every page, and close it again.

        Raises OpenError or ExtractionError; both abort the run.
        """
        with PDFDocument.open(self.path) as document:
            return self.read_document(document)

    def read_document(self, document: PDFDocument) -> DocumentText:
        """Process the pages of an already opened document in order."""
        page_count = document.page_count
        output = DocumentText(source_path=str(self.path), page_count=page_count)
        self._log.info("Processing %d pages from %s", page_count, self.path)

        for page_num in range(page_count):
            self._log.info("Processing page %d/%d...", page_num + 1, page_count)
            result = extract_page(
                document,
                page_num,
                self.config,
                self._engine,
                scratch_dir=self._scratch_dir,
                log=self._log,
            )
            if result.failed:
                self._log.warning(
                    "OCR failed for page %d: %s", page_num + 1, result.error
                )
            output.add(result)

        return output
