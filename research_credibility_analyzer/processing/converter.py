"""PDF to text conversion through the external pdftext tool."""

import logging
import subprocess
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class PDFConverter:
    """Converts PDF bytes to plain text. Any failure yields an empty string."""

    def __init__(self, timeout: int = 60):
        self.timeout = timeout

    def convert_to_text(self, pdf_bytes: bytes, label: str = "document") -> str:
        """Convert PDF bytes to text using pdftext."""
        if not pdf_bytes:
            logger.warning(f"Cannot convert {label}: no PDF data")
            return ""

        logger.info(f"Converting {label} to text")
        with tempfile.TemporaryDirectory() as work_dir:
            pdf_path = Path(work_dir) / "input.pdf"
            txt_path = Path(work_dir) / "output.txt"
            pdf_path.write_bytes(pdf_bytes)

            try:
                result = subprocess.run(
                    ["pdftext", "--sort", str(pdf_path), "--out_path", str(txt_path)],
                    check=True,
                    capture_output=True,
                    text=True,
                    encoding='utf-8',
                    timeout=self.timeout
                )
            except subprocess.TimeoutExpired:
                logger.error(f"Timeout converting {label} with pdftext.")
                return ""
            except subprocess.CalledProcessError as e:
                logger.error(f"Error converting {label} (pdftext exit code {e.returncode}):")
                logger.error(f"  Stderr: {e.stderr}")
                return ""
            except FileNotFoundError:
                logger.error("`pdftext` command not found. Is it installed and in the system PATH?")
                return ""

            if not txt_path.exists() or txt_path.stat().st_size == 0:
                logger.error(f"pdftext ran for {label}, but output file is missing or empty.")
                logger.debug(f"pdftext stdout: {result.stdout}")
                logger.debug(f"pdftext stderr: {result.stderr}")
                return ""

            return txt_path.read_text(encoding='utf-8', errors='replace')
