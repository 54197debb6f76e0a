"""PDF reading: document handle, page classifier, OCR engine, aggregator.

The extraction contract::

    with PDFDocument.open(path) as document:
        result = extract_page(document, page_num, config, engine)

``PDFReader`` drives ``extract_page`` over every page and assembles the
labelled ``DocumentText``.
"""
