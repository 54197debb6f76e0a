"""Shared pytest fixtures.  Fakes and builders live in helpers.py."""
from __future__ import annotations

import pytest

from pdf_ocr.core.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
