"""PaddleOCR integration for pages with a sparse or missing text layer.

Called by pdf_reader.extract_page() when classifier.py labels a page
"needs_ocr".  The page has already been rendered by PyMuPDF and written to
a scratch PNG; this module only turns that image file into text.

Language tags
-------------
Callers pass Tesseract-style tags ("eng", "deu", ...).  They are mapped
to PaddleOCR language codes through _LANG_ALIASES; tags with no alias are
passed to PaddleOCR unchanged, so native codes such as "en" also work.

Layout mode
-----------
Without layout mode the recognised lines are joined with newlines in the
order PaddleOCR reports them.  With layout mode lines are regrouped into
visual rows from their polygons (top-to-bottom, then left-to-right) and
the lines of one row are joined with single spaces.

Air-gap rule
------------
Model weights may be pre-staged locally and supplied via det_model_dir /
rec_model_dir so that no outbound network call is made at runtime.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from paddleocr import PaddleOCR

from pdf_ocr.readers.base import RecognitionError

logger = logging.getLogger(__name__)

_LANG_ALIASES: dict[str, str] = {
    "eng": "en",
    "chi_sim": "ch",
    "chi_tra": "chinese_cht",
    "deu": "german",
    "fra": "fr",
    "spa": "es",
    "ita": "it",
    "por": "pt",
    "rus": "ru",
    "jpn": "japan",
    "kor": "korean",
    "ara": "ar",
    "hin": "hi",
}


def paddle_lang(language: str) -> str:
    """Map a Tesseract-style language tag to a PaddleOCR language code."""
    return _LANG_ALIASES.get(language.lower(), language)


def _bounds(poly: Any) -> tuple[float, float, float, float]:
    """Axis-aligned (x0, y0, x1, y1) of a detection polygon."""
    xs = [float(p[0]) for p in poly]
    ys = [float(p[1]) for p in poly]
    return min(xs), min(ys), max(xs), max(ys)


def _layout_text(lines: list[tuple[str, tuple[float, float, float, float]]]) -> str:
    """Group detected lines into visual rows and render them top to bottom.

    A line joins the current row when its vertical centre falls inside the
    row's vertical extent.
    """
    rows: list[list[tuple[str, tuple[float, float, float, float]]]] = []
    row_top = row_bottom = 0.0
    for text, bbox in sorted(lines, key=lambda item: (item[1][1], item[1][0])):
        centre = (bbox[1] + bbox[3]) / 2
        if rows and row_top <= centre <= row_bottom:
            rows[-1].append((text, bbox))
            row_bottom = max(row_bottom, bbox[3])
        else:
            rows.append([(text, bbox)])
            row_top, row_bottom = bbox[1], bbox[3]

    return "\n".join(
        " ".join(text for text, _ in sorted(row, key=lambda item: item[1][0]))
        for row in rows
    )


class OCREngine:
    """Thin wrapper around PaddleOCR.

    No model is loaded until the first recognize() call.  Each language's
    model is then loaded once and cached, so a single instance can be
    reused across every page of a run, and a run whose pages all carry
    embedded text never loads PaddleOCR at all.

    Not thread-safe: create one instance per concurrent document worker.
    """

    def __init__(
        self,
        det_model_dir: str | None = None,
        rec_model_dir: str | None = None,
    ) -> None:
        """Record where model weights come from; nothing is loaded yet.

        Parameters
        ----------
        det_model_dir:
            Path to a locally staged text detection model directory.
            If None, PaddleOCR uses its own default cache location.
        rec_model_dir:
            Path to a locally staged text recognition model directory.
            If None, PaddleOCR uses its own default cache location.
        """
        self._det_model_dir = det_model_dir
        self._rec_model_dir = rec_model_dir
        self._models: dict[str, PaddleOCR] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def recognize(
        self,
        image_path: str | Path,
        language: str,
        preserve_layout: bool = False,
    ) -> str:
        """Run PaddleOCR on an image file and return the recognised text.

        Raises RecognitionError when model loading or inference fails.
        Whitespace-only detections are dropped; an image with no text
        yields "".
        """
        try:
            model = self._model_for(language)
            results = model.predict(str(image_path))
            lines: list[tuple[str, tuple[float, float, float, float]]] = []
            for result in results or []:
                texts = result["rec_texts"]
                polys = result["rec_polys"]
                for text, poly in zip(texts, polys):
                    if not text.strip():
                        continue
                    lines.append((text, _bounds(poly)))
        except Exception as exc:  # noqa: BLE001
            raise RecognitionError(f"error performing OCR: {exc}") from exc

        if preserve_layout:
            return _layout_text(lines)
        return "\n".join(text for text, _ in lines)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _model_for(self, language: str) -> PaddleOCR:
        code = paddle_lang(language)
        model = self._models.get(code)
        if model is None:
            kwargs: dict[str, object] = {
                "lang": code,
                # page images are rendered upright; skip the extra models
                "use_doc_orientation_classify": False,
                "use_doc_unwarping": False,
                "use_textline_orientation": False,
            }
            if self._det_model_dir is not None:
                kwargs["text_detection_model_dir"] = self._det_model_dir
            if self._rec_model_dir is not None:
                kwargs["text_recognition_model_dir"] = self._rec_model_dir

            logger.debug("Loading PaddleOCR model for lang=%s", code)
            model = PaddleOCR(**kwargs)
            self._models[code] = model
        return model
