"""
Plain-text extraction from uploaded judgments
"""

import io
import logging
from zipfile import BadZipFile

import docx
from docx.opc.exceptions import PackageNotFoundError
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from app.core.exceptions import ExtractionError
from app.core.security_utils import InputValidator

logger = logging.getLogger(__name__)

WORD_EXTENSIONS = {"doc", "docx"}


def extract_pdf_text(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError, KeyError, TypeError, OSError) as e:
        raise ExtractionError(f"Could not read PDF: {e}") from e
    return "\n".join(pages)


def extract_docx_text(data: bytes) -> str:
    try:
        document = docx.Document(io.BytesIO(data))
    except (PackageNotFoundError, BadZipFile, ValueError, KeyError) as e:
        raise ExtractionError(f"Could not read Word document: {e}") from e

    parts = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.append(" | ".join(cell.text for cell in row.cells))
    return "\n".join(part for part in parts if part)


def extract_text(data: bytes, hint: str) -> str:
    """
    Extract text using the file extension in hint (a filename or storage path).

    pdf and doc/docx parse failures raise ExtractionError. Any other extension
    is tried as a PDF and yields an empty string when that fails.
    """
    extension = InputValidator.file_extension(hint)

    if extension == "pdf":
        text = extract_pdf_text(data)
    elif extension in WORD_EXTENSIONS:
        text = extract_docx_text(data)
    else:
        try:
            text = extract_pdf_text(data)
        except ExtractionError as e:
            logger.info(f"Best-effort PDF parse of {hint} failed: {e.message}")
            text = ""

    logger.debug(f"Extracted {len(text)} chars from {hint}")
    return text
