"""PDF text extraction for timecard uploads.

Turns the raw bytes of an uploaded timecard PDF into plain text for the
shift parser. PyPDF2 does the first pass; when it recovers too little text
pdfplumber is tried instead. Extraction runs in a worker thread raced
against a wall-clock timeout so a pathological file cannot hold a request
forever.
"""

import io
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

import pdfplumber
import structlog
from PyPDF2 import PdfReader

from .assembler import parse_timecard
from .config import TimecardSettings, get_settings
from .exceptions import ConfigurationError, ExtractionFailed, ExtractionTimeout
from .models import ParsedPayPeriod

logger = structlog.get_logger()

PDF_MAGIC = b"%PDF"


class TimecardTextExtractor:
    """
    Extracts plain text from timecard PDF bytes.

    Example:
        extractor = TimecardTextExtractor(timeout=10.0)
        text = extractor.extract(upload.read(), source="timecard.pdf")
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        settings: Optional[TimecardSettings] = None,
    ):
        """
        Initialize the extractor.

        Args:
            timeout: Seconds allowed for extraction. Defaults to the
                configured extraction timeout.
            settings: Configuration; loaded from the environment if omitted.
        """
        settings = settings or get_settings()
        self._config = settings.extraction
        self._timeout = self._config.timeout if timeout is None else timeout

        if self._timeout <= 0:
            raise ConfigurationError(
                f"Extraction timeout must be positive, got {self._timeout}",
                config_key="TIMECARD_EXTRACTION_TIMEOUT",
            )

    @property
    def timeout(self) -> float:
        return self._timeout

    def extract(self, data: bytes, source: Optional[str] = None) -> str:
        """
        Extract the text of every page, joined by newlines.

        Args:
            data: Raw PDF bytes.
            source: Optional file name for logs and errors.

        Returns:
            The document text.

        Raises:
            ExtractionFailed: If the bytes are not a readable PDF or hold no text.
            ExtractionTimeout: If extraction exceeds the timeout.
        """
        if not data:
            raise ExtractionFailed("No file provided", source=source)

        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="timecard-extract")
        future = executor.submit(self._extract_text, data, source)
        try:
            text = future.result(timeout=self._timeout)
        except FutureTimeoutError:
            logger.warning("pdf_extraction_timeout", source=source, timeout=self._timeout)
            raise ExtractionTimeout(self._timeout, source=source) from None
        finally:
            # A timed-out worker is left to finish on its own
            executor.shutdown(wait=False)

        if not text.strip():
            raise ExtractionFailed("PDF contains no extractable text", source=source)

        return text

    def _extract_text(self, data: bytes, source: Optional[str]) -> str:
        if not data.lstrip().startswith(PDF_MAGIC):
            raise ExtractionFailed("File is not a PDF", source=source)

        logger.info("extracting_pdf_text", source=source, size=len(data))

        try:
            reader = PdfReader(io.BytesIO(data))
            pages = list(reader.pages)
        except Exception as e:
            raise ExtractionFailed(f"Failed to read PDF: {e}", source=source) from e

        page_texts: list[str] = []
        for page_num, page in enumerate(pages, start=1):
            try:
                page_texts.append(page.extract_text() or "")
            except Exception as e:
                logger.warning("page_extraction_failed", source=source, page=page_num, error=str(e))
                page_texts.append("")

        full_text = "\n".join(page_texts)

        if self._config.use_pdfplumber_fallback and len(full_text.strip()) < self._config.min_text_chars:
            logger.info(
                "pypdf2_fallback_pdfplumber",
                source=source,
                pypdf2_chars=len(full_text.strip()),
            )
            plumber_text = self._extract_with_pdfplumber(data, source)
            if len(plumber_text.strip()) > len(full_text.strip()):
                full_text = plumber_text

        logger.info("pdf_text_extracted", source=source, pages=len(pages), chars=len(full_text))
        return full_text

    def _extract_with_pdfplumber(self, data: bytes, source: Optional[str]) -> str:
        page_texts: list[str] = []
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                for page_num, page in enumerate(pdf.pages, start=1):
                    try:
                        page_texts.append(page.extract_text() or "")
                    except Exception as e:
                        logger.warning("pdfplumber_page_failed", source=source, page=page_num, error=str(e))
                        page_texts.append("")
        except Exception as e:
            logger.warning("pdfplumber_fallback_failed", source=source, error=str(e))
            return ""

        return "\n".join(page_texts)


def parse_timecard_pdf(
    data: bytes,
    source: Optional[str] = None,
    extractor: Optional[TimecardTextExtractor] = None,
    settings: Optional[TimecardSettings] = None,
) -> ParsedPayPeriod:
    """
    Extract the text of a timecard PDF and parse its shifts.

    Raises:
        ExtractionFailed: If the PDF is unreadable.
        ExtractionTimeout: If extraction is too slow.
        NoShiftsFound: If the text holds no recognizable shift lines.
    """
    settings = settings or get_settings()
    extractor = extractor or TimecardTextExtractor(settings=settings)
    text = extractor.extract(data, source=source)
    return parse_timecard(text, settings=settings)
