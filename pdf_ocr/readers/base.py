"""Shared dataclasses for the extraction pipeline.

Field contract
--------------
ExtractionConfig : immutable per-run configuration; built once from
                   Settings plus CLI overrides and never mutated
PageResult       : outcome of one page; produced by extract_page(),
                   consumed by PDFReader
DocumentText     : ordered successful PageResults plus skipped page indices

Page numbers are 0-based on every object here.  Only rendered labels and
log lines use 1-based numbering.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from pdf_ocr.core.settings import Settings

PageTag = Literal["direct_text", "ocr_text", "failed"]
_VALID_TAGS: frozenset[str] = frozenset({"direct_text", "ocr_text", "failed"})

DEFAULT_LANGUAGE = "eng"
DEFAULT_DPI = 300
DEFAULT_TEXT_THRESHOLD = 50


class RecognitionError(RuntimeError):
    """Raised by a Recognizer when an image cannot be recognised."""


class Recognizer(Protocol):
    """Anything that turns an image file into text (see ocr.OCREngine)."""

    def recognize(
        self,
        image_path: str | Path,
        language: str,
        preserve_layout: bool = False,
    ) -> str:
        ...


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for a single extraction run."""

    language: str = DEFAULT_LANGUAGE
    dpi: int = DEFAULT_DPI
    output_file: Path | None = None
    preserve_layout: bool = False
    # Pages whose stripped embedded text is longer than this skip OCR
    text_threshold: int = DEFAULT_TEXT_THRESHOLD

    def __post_init__(self) -> None:
        if not self.language:
            raise ValueError("language must be a non-empty string")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive; got {self.dpi!r}")
        if self.text_threshold < 0:
            raise ValueError(
                f"text_threshold must be >= 0; got {self.text_threshold!r}"
            )

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> ExtractionConfig:
        """Build a config from Settings; keyword overrides win when not None."""
        config = cls(
            language=settings.ocr_lang,
            dpi=settings.ocr_dpi,
            preserve_layout=settings.ocr_preserve_layout,
            text_threshold=settings.ocr_text_threshold,
        )
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(config, **changes) if changes else config


@dataclass(frozen=True)
class PageResult:
    """Outcome of processing one page.

    ``text`` is always empty for a failed page; ``error`` then carries the
    underlying cause for the warning line.
    """

    page_num: int
    tag: PageTag
    text: str = ""
    error: str | None = None

    def __post_init__(self) -> None:
        if self.tag not in _VALID_TAGS:
            raise ValueError(
                f"tag must be one of {sorted(_VALID_TAGS)!r}; got {self.tag!r}"
            )
        if self.tag == "failed" and self.text:
            raise ValueError("a failed PageResult must not carry text")

    @property
    def failed(self) -> bool:
        return self.tag == "failed"

    @property
    def label(self) -> str:
        """Page-boundary marker, e.g. ``--- Page 3 (OCR) ---``."""
        if self.tag == "ocr_text":
            return f"--- Page {self.page_num + 1} (OCR) ---"
        return f"--- Page {self.page_num + 1} ---"


@dataclass
class DocumentText:
    """Full-document output of one PDFReader run."""

    source_path: str
    page_count: int = 0
    pages: list[PageResult] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    def add(self, result: PageResult) -> None:
        """Record a page result; failed pages only land in ``skipped``."""
        if result.failed:
            self.skipped.append(result.page_num)
        else:
            self.pages.append(result)

    @property
    def text(self) -> str:
        return "".join(f"{r.label}\n{r.text}\n\n" for r in self.pages)

    def __str__(self) -> str:
        return self.text
