"""Fakes and builders shared by the extraction pipeline tests.

FakeDocument stands in for PDFDocument (embedded text per page, optional
render / text-layer / image-write failures).  StubEngine stands in for
OCREngine and records every recognize() call, including whether the
scratch image existed at call time.  make_pdf builds a real PDF with
PyMuPDF.
"""
from __future__ import annotations

from pathlib import Path

import fitz  # PyMuPDF

from pdf_ocr.readers.base import RecognitionError
from pdf_ocr.readers.document import ExtractionError, PDFDocument, RenderError


class FakeImage:
    """Minimal Pixmap: save() writes a few bytes to the target path.

    A failing save raises RuntimeError rather than OSError, the way
    PyMuPDF's own write errors do.
    """

    def __init__(self, page_num: int, fail_save: bool = False) -> None:
        self.page_num = page_num
        self.fail_save = fail_save
        self.save_kwargs: dict = {}

    def save(self, filename: str, **kwargs: object) -> None:
        if self.fail_save:
            raise RuntimeError(f"code=2: cannot open file '{filename}'")
        self.save_kwargs = kwargs
        Path(filename).write_bytes(b"\x89PNG fake page %d" % self.page_num)


class FakeDocument:
    def __init__(
        self,
        pages: list[str],
        render_fail: set[int] | None = None,
        text_fail: set[int] | None = None,
        save_fail: set[int] | None = None,
    ) -> None:
        self.pages = pages
        self.render_fail = render_fail or set()
        self.text_fail = text_fail or set()
        self.save_fail = save_fail or set()
        self.rasterize_calls: list[tuple[int, int]] = []
        self.images: list[FakeImage] = []
        self.closed = False

    def __enter__(self) -> FakeDocument:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def embedded_text(self, page_num: int) -> str:
        if page_num in self.text_fail:
            raise ExtractionError(f"error extracting text from page {page_num + 1}")
        return self.pages[page_num]

    def rasterize(self, page_num: int, dpi: int) -> FakeImage:
        self.rasterize_calls.append((page_num, dpi))
        if page_num in self.render_fail:
            raise RenderError(f"error rendering page {page_num + 1} image: broken")
        image = FakeImage(page_num, fail_save=page_num in self.save_fail)
        self.images.append(image)
        return image

    # Same wrapping as the real handle; it only touches the image.
    save_image = PDFDocument.save_image

    def close(self) -> None:
        self.closed = True


class StubEngine:
    """Deterministic recognizer; returns *text*, or raises when *fail* is set."""

    def __init__(self, text: str = "recognised text", fail: bool = False) -> None:
        self.text = text
        self.fail = fail
        self.calls: list[dict] = []

    def recognize(self, image_path, language, preserve_layout=False) -> str:
        path = Path(image_path)
        self.calls.append({
            "path": path,
            "existed": path.exists(),
            "language": language,
            "preserve_layout": preserve_layout,
        })
        if self.fail:
            raise RecognitionError("error performing OCR: model crashed")
        return self.text


def make_pdf(path: Path, page_texts: list[str]) -> Path:
    """Write a real PDF with one page per entry; "" gives a blank page."""
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=10)
    doc.save(str(path))
    doc.close()
    return path
