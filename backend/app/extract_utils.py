import io
import logging

import docx
import fitz  # PyMuPDF

from app.errors import UnsupportedFileType

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx")


def extract_text_from_pdf_bytes(pdf_bytes: bytes) -> str:
    """Extract readable text from a PDF file."""
    text = ""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        for page in doc:
            text += page.get_text("text")
    return text.strip()


def extract_text_from_docx_bytes(docx_bytes: bytes) -> str:
    """Extract paragraph text from a DOCX file."""
    document = docx.Document(io.BytesIO(docx_bytes))
    paragraphs = [p.text for p in document.paragraphs if p.text.strip()]
    return "\n".join(paragraphs).strip()


def extract_text(filename: str, data: bytes) -> str:
    name = (filename or "").lower()
    if name.endswith(".pdf"):
        return extract_text_from_pdf_bytes(data)
    if name.endswith(".docx"):
        return extract_text_from_docx_bytes(data)
    raise UnsupportedFileType(f"Unsupported file type: {filename}")


def safe_extract_text(filename: str, data: bytes) -> str:
    """Like extract_text, but a failed file yields empty text so the batch keeps going."""
    try:
        return extract_text(filename, data)
    except Exception as e:
        logger.warning("Text extraction failed for %s: %s", filename, e)
        return ""
