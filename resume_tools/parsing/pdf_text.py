from __future__ import annotations

import base64
import binascii
import logging
import re
from io import BytesIO
from zipfile import BadZipFile, ZipFile

from resume_tools.core.config import settings
from resume_tools.core.errors import ExtractionError, InvalidInputError, NoContentError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
SUPPORTED_EXTENSIONS = frozenset({"pdf", "docx", "txt"})

_DATA_URL_PREFIX_RE = re.compile(r"^data:application/pdf;base64,", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def _ensure_size(content: bytes) -> None:
    if len(content) > settings.max_upload_bytes:
        raise InvalidInputError(
            f"Document is too large ({len(content)} bytes). Limit is {settings.max_upload_bytes} bytes."
        )


def decode_pdf_payload(payload: str) -> bytes:
    """Decode a base64 PDF string, tolerating a data-URL prefix and line breaks."""
    if not payload or not payload.strip():
        raise InvalidInputError("No PDF content provided. Please supply a base64-encoded PDF string.")

    cleaned = _WHITESPACE_RE.sub("", _DATA_URL_PREFIX_RE.sub("", payload.strip()))
    try:
        content = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError(
            "The provided string does not appear to be valid base64-encoded content. "
            "Ensure the PDF is properly base64-encoded without extra characters."
        ) from exc

    if not content:
        raise InvalidInputError("Decoded PDF payload is empty.")
    _ensure_size(content)
    return content


def pdf_to_text(content: bytes) -> str:
    """Extract the text layer of a PDF, one page per chunk.

    Raises ExtractionError when pypdf cannot read the bytes and NoContentError
    when the file has pages but no extractable text (scanned documents).
    """
    from pypdf import PdfReader
    from pypdf.errors import PyPdfError

    try:
        reader = PdfReader(BytesIO(content))
        page_chunks: list[str] = []
        for page in reader.pages:
            page_text = page.extract_text() or ""
            if page_text.strip():
                page_chunks.append(page_text)
    except (PyPdfError, ValueError, KeyError, TypeError, OSError) as exc:
        logger.warning("pdf_extraction_failed bytes=%s error=%s", len(content), type(exc).__name__)
        raise ExtractionError(f"Failed to parse PDF: {exc}") from exc

    text = "\n".join(page_chunks)
    if not text.strip():
        raise NoContentError("PDF contained no extractable text. The file may be an image-only PDF.")
    return text


def docx_to_text(content: bytes) -> str:
    from docx import Document

    try:
        document = Document(BytesIO(content))
    except (BadZipFile, KeyError, ValueError) as exc:
        logger.warning("docx_extraction_failed bytes=%s error=%s", len(content), type(exc).__name__)
        raise ExtractionError("Unable to extract text from this Word document.") from exc
    return "\n".join(paragraph.text for paragraph in document.paragraphs if paragraph.text.strip())


def plain_text(content: bytes) -> str:
    for encoding in ("utf-8", "utf-16", "latin-1"):
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ExtractionError("Unable to decode text file.")


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(prefix) for prefix in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except BadZipFile:
        return False
    return any(name.startswith(prefixes) for name in names)


def _is_probably_text_payload(content: bytes) -> bool:
    if not content:
        return False
    sample = content[:4096]
    if b"\x00" in sample and not sample.startswith((b"\xff\xfe", b"\xfe\xff")):
        return False
    printable = sum(1 for byte in sample if byte in (9, 10, 13) or byte >= 32)
    return (printable / len(sample)) >= 0.75


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def validate_upload_signature(*, filename: str, content: bytes) -> str:
    ext = file_extension(filename)
    if ext == "doc":
        raise InvalidInputError("Legacy .doc is not supported. Convert to .docx.")
    if ext not in SUPPORTED_EXTENSIONS:
        raise InvalidInputError("Unsupported file type. Use .pdf, .docx, or .txt files.")
    if not content:
        raise InvalidInputError("Uploaded file is empty.")
    _ensure_size(content)

    if ext == "pdf" and not content.startswith(PDF_MAGIC):
        raise InvalidInputError("File signature does not match .pdf content.")
    if ext == "docx" and (not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",))):
        raise InvalidInputError("File signature does not match .docx content.")
    if ext == "txt" and not _is_probably_text_payload(content):
        raise InvalidInputError("File signature does not match .txt text content.")
    return ext


def document_to_text(filename: str, content: bytes) -> str:
    ext = validate_upload_signature(filename=filename, content=content)
    if ext == "pdf":
        return pdf_to_text(content)
    if ext == "docx":
        text = docx_to_text(content)
    else:
        text = plain_text(content)
    if not text.strip():
        raise NoContentError(f"The uploaded .{ext} file contains no text.")
    return text
