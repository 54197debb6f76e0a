import sys

from pdf_ocr.cli import main

sys.exit(main())
