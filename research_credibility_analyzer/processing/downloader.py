"""PDF download for open-access search results."""

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class PaperDownloader:
    """Downloads open-access PDFs referenced by search results."""

    MAX_BYTES = 50 * 1024 * 1024

    def __init__(self, timeout: int = 60):
        self.timeout = timeout

    def download_pdf(self, url: str, label: str = "paper") -> Optional[bytes]:
        """
        Download a PDF from url.
        Returns the PDF bytes, or None if the paper should fall back to its abstract.
        """
        logger.info(f"Downloading {label} from {url}")
        try:
            response = requests.get(url, allow_redirects=True, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.warning(f"PDF for {label} not found (404)")
            else:
                logger.warning(f"HTTP error downloading {label}: {str(e)}")
            return None
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error downloading {label}: {str(e)}")
            return None

        content_type = response.headers.get('Content-Type', '')
        if 'pdf' not in content_type.lower() and not response.content.startswith(b'%PDF'):
            logger.warning(f"Download for {label} is not a PDF (Content-Type: {content_type})")
            return None
        if len(response.content) > self.MAX_BYTES:
            logger.warning(f"PDF for {label} exceeds {self.MAX_BYTES} bytes; skipping")
            return None

        return response.content
