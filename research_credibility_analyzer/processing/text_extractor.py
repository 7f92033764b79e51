"""Plain text extraction from uploaded documents."""

import logging
import mimetypes
from typing import Optional

from .converter import PDFConverter

logger = logging.getLogger(__name__)


class TextExtractor:
    """Turns uploaded bytes into plain text.

    text/* payloads are decoded directly, PDFs are handed to pdftext, and
    every other format yields an empty string. An empty result is a normal
    outcome, not an error.
    """

    def __init__(self, converter: Optional[PDFConverter] = None):
        self.converter = converter or PDFConverter()

    @staticmethod
    def guess_mime_type(filename: str) -> str:
        mime_type, _ = mimetypes.guess_type(filename)
        return mime_type or "application/octet-stream"

    def extract_text(self, data: bytes, mime_type: str) -> str:
        """Extract plain text from raw bytes of the given MIME type."""
        if not data:
            return ""
        mime_type = (mime_type or "").lower()

        if "text" in mime_type:
            text = data.decode("utf-8", errors="replace")
        elif mime_type == "application/pdf":
            text = self.converter.convert_to_text(data)
        else:
            logger.info(f"No text extraction available for {mime_type}; continuing without text.")
            return ""

        # Collapse NUL bytes and stray carriage returns left by some exporters
        text = text.replace("\x00", "").replace("\r\n", "\n")
        logger.debug(f"Extracted {len(text)} characters from {mime_type} document")
        return text
