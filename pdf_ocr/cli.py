"""Command-line entry point: ``pdf-ocr-tool <pdf-file> [options]``.

Usage:
    pdf-ocr-tool document.pdf
    pdf-ocr-tool scanned.pdf -o output.txt -lang eng
    pdf-ocr-tool document.pdf -extract-images

Exit status is 1 for fatal errors (missing file, unopenable PDF, unreadable
text layer, output write failure) and 2 for usage errors.  Pages skipped
because rendering or OCR failed only produce warnings.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pdf_ocr.core.logging import setup_logging
from pdf_ocr.core.settings import Settings, get_settings
from pdf_ocr.export.image_exporter import default_image_dir, export_page_images
from pdf_ocr.readers.base import ExtractionConfig, Recognizer
from pdf_ocr.readers.document import DocumentError, PDFDocument
from pdf_ocr.readers.pdf_reader import PDFReader

logger = logging.getLogger(__name__)

_EPILOG = """\
Examples:
  pdf-ocr-tool document.pdf
  pdf-ocr-tool scanned.pdf -o output.txt -lang eng
  pdf-ocr-tool document.pdf -extract-images
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pdf-ocr-tool",
        description="PDF OCR Text Extraction Tool",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("pdf", type=Path, help="PDF file to process")
    parser.add_argument(
        "-o", dest="output", type=Path, metavar="<output-file>",
        help="Save extracted text to file",
    )
    parser.add_argument(
        "-lang", dest="lang", metavar="<language>",
        help="OCR language (default: eng)",
    )
    parser.add_argument(
        "-layout", dest="layout", action="store_true",
        help="Preserve layout during OCR",
    )
    parser.add_argument(
        "-extract-images", dest="extract_images", action="store_true",
        help="Extract all page images to <input-stem>_images/",
    )
    return parser


def _build_engine(settings: Settings) -> Recognizer:
    # Deferred so PaddleOCR is only imported when text extraction runs
    from pdf_ocr.readers.ocr import OCREngine

    return OCREngine(
        det_model_dir=settings.ocr_det_model_dir,
        rec_model_dir=settings.ocr_rec_model_dir,
    )


def _extract_images(pdf_path: Path, settings: Settings) -> int:
    output_dir = default_image_dir(pdf_path)
    logger.info("Extracting images to: %s", output_dir)
    try:
        with PDFDocument.open(pdf_path) as document:
            export_page_images(
                document,
                output_dir,
                dpi=settings.ocr_dpi,
                jpeg_quality=settings.image_jpeg_quality,
            )
    except (DocumentError, OSError) as exc:
        logger.error("Error extracting images: %s", exc)
        return 1
    return 0


def _extract_text(pdf_path: Path, config: ExtractionConfig, settings: Settings) -> int:
    engine = _build_engine(settings)
    reader = PDFReader(pdf_path, config, engine, scratch_dir=settings.ocr_scratch_dir)
    try:
        result = reader.read()
    except DocumentError as exc:
        logger.error("Error extracting text: %s", exc)
        return 1

    if config.output_file is not None:
        try:
            config.output_file.write_text(result.text, encoding="utf-8")
        except OSError as exc:
            logger.error("Error writing to file: %s", exc)
            return 1
        logger.info("Text extracted successfully and saved to: %s", config.output_file)
    else:
        sys.stdout.write("\n=== Extracted Text ===\n\n")
        sys.stdout.write(result.text + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    settings = get_settings()

    pdf_path: Path = args.pdf
    if not pdf_path.exists():
        logger.error("Error: File %s does not exist", pdf_path)
        return 1

    if args.extract_images:
        return _extract_images(pdf_path, settings)

    config = ExtractionConfig.from_settings(
        settings,
        language=args.lang,
        output_file=args.output,
        preserve_layout=args.layout or None,
    )
    return _extract_text(pdf_path, config, settings)


if __name__ == "__main__":
    sys.exit(main())
