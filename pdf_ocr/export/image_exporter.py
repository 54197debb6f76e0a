"""Raster export: write every PDF page to a numbered JPEG file.

Independent of text extraction: pages are never classified and OCR is
never run.  Files are named ``page_<N>.jpg`` with 1-based page numbers.

Failure policy
--------------
Creating the output directory is the only fatal step.  A page that cannot
be rendered or written is logged as a warning and skipped; the loop always
runs to the last page.
"""
from __future__ import annotations

import logging
from pathlib import Path

from pdf_ocr.readers.document import ImageWriteError, PDFDocument, RenderError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

#: Suffix appended to the input file stem to form the default output dir.
IMAGE_DIR_SUFFIX = "_images"

DEFAULT_JPEG_QUALITY = 95


def default_image_dir(pdf_path: str | Path) -> Path:
    """``/data/scan.pdf`` → ``/data/scan_images``."""
    p = Path(pdf_path)
    return p.with_name(p.stem + IMAGE_DIR_SUFFIX)


def page_image_name(page_num: int) -> str:
    """File name for the 0-based *page_num*."""
    return f"page_{page_num + 1}.jpg"


def export_page_images(
    document: PDFDocument,
    output_dir: str | Path,
    dpi: int = 300,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    log: logging.Logger | None = None,
) -> int:
    """Rasterize every page of *document* into *output_dir*.

    Returns the number of images successfully written.  Raises OSError
    only when *output_dir* cannot be created.
    """
    log = log or logger
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    image_count = 0
    for page_num in range(document.page_count):
        try:
            pix = document.rasterize(page_num, dpi)
        except RenderError as exc:
            log.warning(
                "Could not extract image from page %d: %s", page_num + 1, exc
            )
            continue

        filename = out / page_image_name(page_num)
        try:
            document.save_image(pix, filename, jpg_quality=jpeg_quality)
        except ImageWriteError as exc:
            log.warning("Could not write image %s: %s", filename, exc)
            continue

        image_count += 1
        log.info("Extracted image from page %d to %s", page_num + 1, filename)

    log.info("Total images extracted: %d", image_count)
    return image_count
