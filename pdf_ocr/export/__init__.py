"""Per-page raster export, independent of text extraction."""
